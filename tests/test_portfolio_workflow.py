"""
Test the portfolio code workflow end to end with a scripted generator
"""
import threading
from unittest.mock import patch

import pytest

from app.core.errors import GenerationError
from app.crud import crud_portfolio
from app.models.portfolio import Portfolio, PortfolioData
from app.services.portfolio_service import save_generated_portfolio
from app.workflows.portfolio import portfolio_code_workflow
from app.workflows.portfolio.portfolio_code_workflow import (
    FALLBACK_CSS,
    FALLBACK_HTML,
    FALLBACK_JS,
    generate_portfolio_code,
    run_portfolio_generation,
)
from tests.conftest import FakeGenerator


@pytest.mark.asyncio
async def test_generate_sends_prompt_with_data(structured_data):
    generator = FakeGenerator()
    code = await generate_portfolio_code(structured_data, generator)

    assert "<h1>Jane Doe</h1>" in code.html
    assert code.css == "h1 { color: teal; }"
    assert len(generator.prompts) == 1
    assert '"Jane Doe"' in generator.prompts[0]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "generator",
    [
        FakeGenerator(response="I cannot help with that."),
        FakeGenerator(response='{"html": "<p>", "css": '),
        FakeGenerator(error=GenerationError("quota exceeded")),
        FakeGenerator(error=RuntimeError("connection reset")),
    ],
)
async def test_failures_return_fallback_content(db, structured_data, generator):
    result = await run_portfolio_generation(structured_data, generator=generator, db=db, user_id="user-1")

    assert result.success is True
    assert result.portfolio.html == FALLBACK_HTML
    assert result.portfolio.css == FALLBACK_CSS
    assert result.portfolio.js == FALLBACK_JS
    assert result.saved is False
    assert db.query(Portfolio).count() == 0
    assert db.query(PortfolioData).count() == 0


@pytest.mark.asyncio
async def test_anonymous_request_writes_nothing(db, structured_data):
    result = await run_portfolio_generation(structured_data, generator=FakeGenerator(), db=db, user_id=None)

    assert result.saved is False
    assert result.persistenceError is None
    assert "<h1>Jane Doe</h1>" in result.portfolio.html
    assert db.query(Portfolio).count() == 0


@pytest.mark.asyncio
async def test_user_request_saves_one_linked_pair(db, structured_data):
    result = await run_portfolio_generation(
        structured_data,
        generator=FakeGenerator(),
        db=db,
        user_id="user-1",
        clock=lambda: 1700000000000,
    )

    assert result.saved is True
    assert result.slug == "jane-doe-1700000000000"
    portfolio = db.query(Portfolio).one()
    assert portfolio.id == result.portfolioId
    assert portfolio.portfolio_data_id == db.query(PortfolioData).one().id
    assert portfolio.html_content == result.portfolio.html


@pytest.mark.asyncio
async def test_identical_requests_get_distinct_slugs(db, structured_data):
    first = await run_portfolio_generation(
        structured_data, generator=FakeGenerator(), db=db, user_id="user-1", clock=lambda: 5
    )
    second = await run_portfolio_generation(
        structured_data, generator=FakeGenerator(), db=db, user_id="user-1", clock=lambda: 5
    )

    assert first.slug != second.slug
    assert db.query(Portfolio).count() == 2


@pytest.mark.asyncio
async def test_persistence_failure_still_returns_generated_code(db, structured_data):
    with patch.object(crud_portfolio, "create_portfolio", side_effect=RuntimeError("constraint failed")):
        result = await run_portfolio_generation(structured_data, generator=FakeGenerator(), db=db, user_id="user-1")

    assert result.success is True
    assert result.saved is False
    assert "constraint failed" in result.persistenceError
    assert "<h1>Jane Doe</h1>" in result.portfolio.html


@pytest.mark.asyncio
async def test_missing_session_is_reported(structured_data):
    result = await run_portfolio_generation(structured_data, generator=FakeGenerator(), db=None, user_id="user-1")

    assert result.saved is False
    assert result.persistenceError == "No database session available"


@pytest.mark.asyncio
async def test_save_runs_off_the_event_loop(db, structured_data):
    loop_thread = threading.get_ident()
    threads = []

    def recording_save(*args, **kwargs):
        threads.append(threading.get_ident())
        return save_generated_portfolio(*args, **kwargs)

    with patch.object(portfolio_code_workflow, "save_generated_portfolio", side_effect=recording_save):
        result = await run_portfolio_generation(structured_data, generator=FakeGenerator(), db=db, user_id="user-1")

    assert result.saved is True
    assert len(threads) == 1
    assert threads[0] != loop_thread
