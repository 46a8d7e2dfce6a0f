from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status

from app.core.config import Settings, get_settings
from app.core.errors import AuthError
from app.db.session import SessionLocal
from app.schemas.auth import AuthUser
from app.services.auth_service import IdentityBackend
from app.services.generation_client import GeneratorFactory, default_generator_factory


def get_app_settings() -> Settings:
    return get_settings()


def get_generator_factory() -> GeneratorFactory:
    """Generators are built per request, after input validation, so a missing key never masks a 400."""
    return default_generator_factory


def get_identity_backend(request: Request) -> IdentityBackend:
    backend = getattr(request.app.state, "identity", None)
    if backend is None:
        backend = IdentityBackend(SessionLocal, get_settings())
        request.app.state.identity = backend
    return backend


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.lower().startswith("bearer "):
        return None
    return authorization.split(" ", 1)[1].strip() or None


def get_bearer_token(authorization: str | None = Header(default=None, alias="Authorization")) -> str:
    token = _bearer_token(authorization)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token


def get_current_user(
    token: str = Depends(get_bearer_token),
    identity: IdentityBackend = Depends(get_identity_backend),
) -> AuthUser:
    try:
        return identity.verify_token(token)
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_optional_user(
    authorization: str | None = Header(default=None, alias="Authorization"),
    identity: IdentityBackend = Depends(get_identity_backend),
) -> Optional[AuthUser]:
    """Like get_current_user, but anonymous or invalid credentials give None."""
    token = _bearer_token(authorization)
    if token is None:
        return None
    try:
        return identity.verify_token(token)
    except AuthError:
        return None
