"""
Authentication services.

`IdentityBackend` owns accounts (the profiles table) and access tokens and is
what the HTTP endpoints use. `SessionAuthService` is a client-side view of one
signed-in session on top of it, with change notifications; it implements the
`AuthService` interface consumed by `AuthStateStore`.
"""
import asyncio
import hashlib
import hmac
import logging
import secrets
import threading
import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Protocol

from jose import JWTError, jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.errors import AuthError, ConflictError, NotFoundError
from app.crud import crud_profile
from app.schemas.auth import AuthSession, AuthUser, UserProfile

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 260_000

AuthChangeCallback = Callable[[Optional[AuthUser]], None]


def hash_password(password: str) -> str:
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("ascii"), PBKDF2_ITERATIONS)
    return f"pbkdf2_sha256${PBKDF2_ITERATIONS}${salt}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        algorithm, iterations, salt, expected = password_hash.split("$")
    except (AttributeError, ValueError):
        return False
    if algorithm != "pbkdf2_sha256":
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("ascii"), int(iterations))
    return hmac.compare_digest(digest.hex(), expected)


def profile_to_user(profile) -> AuthUser:
    return AuthUser(
        id=profile.id,
        email=profile.email,
        profile=UserProfile(
            full_name=profile.full_name,
            avatar_url=profile.avatar_url,
            subscription_tier=profile.subscription_tier or "free",
            credits_remaining=profile.credits_remaining if profile.credits_remaining is not None else 100,
        ),
    )


class Subscription:
    """Handle returned by on_auth_state_change; unsubscribe() is idempotent."""

    def __init__(self, cancel: Callable[[], None]):
        self._cancel = cancel
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._cancel()


class AuthService(Protocol):
    async def sign_in(self, email: str, password: str) -> AuthSession:
        ...

    async def sign_up(self, email: str, password: str, full_name: Optional[str] = None) -> AuthSession:
        ...

    async def sign_out(self) -> None:
        ...

    async def get_current_user(self) -> Optional[AuthUser]:
        ...

    async def update_profile(self, full_name: Optional[str] = None, avatar_url: Optional[str] = None) -> AuthUser:
        ...

    def on_auth_state_change(self, callback: AuthChangeCallback) -> Subscription:
        ...


class IdentityBackend:
    def __init__(self, session_factory: Callable[[], Session], config: Settings):
        self._session_factory = session_factory
        self._config = config
        # jti -> exp of revoked tokens, pruned once exp has passed
        self._revoked: Dict[str, float] = {}
        self._revoked_lock = threading.Lock()

    def register(self, email: str, password: str, full_name: Optional[str] = None) -> AuthUser:
        email = email.strip().lower()
        db = self._session_factory()
        try:
            if crud_profile.get_profile_by_email(db, email):
                raise ConflictError("An account with this email already exists")
            try:
                profile = crud_profile.create_profile(
                    db,
                    user_id=str(uuid.uuid4()),
                    email=email,
                    password_hash=hash_password(password),
                    full_name=full_name,
                )
            except IntegrityError:
                db.rollback()
                raise ConflictError("An account with this email already exists")
            logger.info(f"Registered user {profile.id}")
            return profile_to_user(profile)
        finally:
            db.close()

    def authenticate(self, email: str, password: str) -> AuthUser:
        db = self._session_factory()
        try:
            profile = crud_profile.get_profile_by_email(db, email.strip().lower())
            if profile is None or not verify_password(password, profile.password_hash):
                raise AuthError("Invalid email or password")
            return profile_to_user(profile)
        finally:
            db.close()

    def issue_token(self, user: AuthUser) -> str:
        expires = datetime.now(timezone.utc) + timedelta(minutes=self._config.ACCESS_TOKEN_EXPIRE_MINUTES)
        claims = {"sub": user.id, "exp": expires, "jti": uuid.uuid4().hex}
        return jwt.encode(claims, self._config.JWT_SECRET_KEY, algorithm=self._config.JWT_ALGORITHM)

    def _decode(self, token: str) -> dict:
        try:
            payload = jwt.decode(token, self._config.JWT_SECRET_KEY, algorithms=[self._config.JWT_ALGORITHM])
        except JWTError:
            raise AuthError("Could not validate credentials")
        if not payload.get("sub") or self.is_revoked(payload.get("jti")):
            raise AuthError("Could not validate credentials")
        return payload

    def _prune_revoked(self) -> None:
        now = time.time()
        for jti in [j for j, exp in self._revoked.items() if exp <= now]:
            del self._revoked[jti]

    def is_revoked(self, jti: Optional[str]) -> bool:
        with self._revoked_lock:
            self._prune_revoked()
            return jti in self._revoked

    @property
    def revoked_count(self) -> int:
        with self._revoked_lock:
            self._prune_revoked()
            return len(self._revoked)

    def verify_token(self, token: str) -> AuthUser:
        payload = self._decode(token)
        db = self._session_factory()
        try:
            profile = crud_profile.get_profile(db, payload["sub"])
            if profile is None:
                raise AuthError("Could not validate credentials")
            return profile_to_user(profile)
        finally:
            db.close()

    def revoke_token(self, token: str) -> None:
        payload = self._decode(token)
        with self._revoked_lock:
            self._prune_revoked()
            self._revoked[payload.get("jti")] = float(payload["exp"])

    def update_profile(self, user_id: str, full_name: Optional[str] = None, avatar_url: Optional[str] = None) -> AuthUser:
        db = self._session_factory()
        try:
            profile = crud_profile.get_profile(db, user_id)
            if profile is None:
                raise NotFoundError("Profile not found")
            profile = crud_profile.update_profile(db, profile, full_name=full_name, avatar_url=avatar_url)
            return profile_to_user(profile)
        finally:
            db.close()


class SessionAuthService:
    """One client's session against an IdentityBackend."""

    def __init__(self, backend: IdentityBackend):
        self._backend = backend
        self._session: Optional[AuthSession] = None
        self._listeners: List[AuthChangeCallback] = []

    @property
    def session(self) -> Optional[AuthSession]:
        return self._session

    def _emit(self, user: Optional[AuthUser]) -> None:
        for callback in list(self._listeners):
            try:
                callback(user)
            except Exception:
                logger.exception("Auth state listener failed")

    def _open_session(self, user: AuthUser) -> AuthSession:
        self._session = AuthSession(access_token=self._backend.issue_token(user), user=user)
        self._emit(user)
        return self._session

    async def sign_in(self, email: str, password: str) -> AuthSession:
        user = await asyncio.to_thread(self._backend.authenticate, email, password)
        return self._open_session(user)

    async def sign_up(self, email: str, password: str, full_name: Optional[str] = None) -> AuthSession:
        user = await asyncio.to_thread(self._backend.register, email, password, full_name)
        return self._open_session(user)

    async def sign_out(self) -> None:
        session, self._session = self._session, None
        if session is not None:
            try:
                self._backend.revoke_token(session.access_token)
            except AuthError:
                # Expired tokens need no revocation
                pass
        self._emit(None)

    async def get_current_user(self) -> Optional[AuthUser]:
        if self._session is None:
            return None
        try:
            return await asyncio.to_thread(self._backend.verify_token, self._session.access_token)
        except AuthError:
            self._session = None
            return None

    async def update_profile(self, full_name: Optional[str] = None, avatar_url: Optional[str] = None) -> AuthUser:
        if self._session is None:
            raise AuthError("Not signed in")
        user = await asyncio.to_thread(
            self._backend.update_profile, self._session.user.id, full_name=full_name, avatar_url=avatar_url
        )
        self._session = AuthSession(access_token=self._session.access_token, user=user)
        self._emit(user)
        return user

    def on_auth_state_change(self, callback: AuthChangeCallback) -> Subscription:
        self._listeners.append(callback)

        def _cancel() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return Subscription(_cancel)
