"""
Shared fixtures: a throwaway SQLite database per test and a scripted text generator.
"""
import json

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import Settings
from app.db.session import Base
from app.models import portfolio, profile, resume  # noqa: F401


VALID_CODE_RESPONSE = 'Here is your site:\n```json\n' + json.dumps({
    "html": "<!DOCTYPE html><html><head><style></style></head><body><h1>Jane Doe</h1><script></script></body></html>",
    "css": "h1 { color: teal; }",
    "js": "console.log('hi');",
}) + "\n```"


class FakeGenerator:
    """Returns a canned answer (or raises) and records every prompt it receives."""

    def __init__(self, response=VALID_CODE_RESPONSE, error=None):
        self.response = response
        self.error = error
        self.prompts = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def structured_data():
    return {
        "personal_info": {"name": "Jane Doe", "email": "jane@example.com"},
        "professional_summary": "Backend engineer.",
        "experience": [{"company": "Acme", "position": "Engineer"}],
        "skills": ["Python", "SQL"],
    }


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        GOOGLE_GENERATIVE_AI_API_KEY="test-key",
        JWT_SECRET_KEY="test-secret",
    )


@pytest.fixture
def session_factory(tmp_path):
    # File-backed so the worker threads used by the dashboard see the same data
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def generators():
    """Every generator handed out by the overridden factory, in order."""
    return []


@pytest.fixture
def client(session_factory, test_settings, generators):
    from fastapi.testclient import TestClient

    from app.api.deps import get_app_settings, get_generator_factory
    from app.db.session import get_db, get_session_factory
    from app.services.auth_service import IdentityBackend
    from main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    def fake_factory(config):
        generator = FakeGenerator()
        generators.append(generator)
        return generator

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_app_settings] = lambda: test_settings
    app.dependency_overrides[get_generator_factory] = lambda: fake_factory
    app.state.identity = IdentityBackend(session_factory, test_settings)

    # No context manager: the lifespan would create tables in the configured database
    yield TestClient(app)

    app.dependency_overrides.clear()
    del app.state.identity


@pytest.fixture
def auth_headers(client):
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": "jane@example.com", "password": "password1", "full_name": "Jane Doe"},
    )
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}
