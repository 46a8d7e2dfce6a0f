"""
Test the auth state store: initial load, ordering of updates and unsubscribe
"""
import asyncio

import pytest

from app.features.auth_state import AuthStateStore
from app.schemas.auth import AuthUser
from app.services.auth_service import IdentityBackend, SessionAuthService, Subscription


class ScriptedAuth:
    """AuthService whose initial lookup waits until the test releases it."""

    def __init__(self, initial_user=None, initial_error=None):
        self.initial_user = initial_user
        self.initial_error = initial_error
        self.release = asyncio.Event()
        self.listeners = []
        self.signed_out = False

    async def get_current_user(self):
        await self.release.wait()
        if self.initial_error:
            raise self.initial_error
        return self.initial_user

    def on_auth_state_change(self, callback):
        self.listeners.append(callback)
        return Subscription(lambda: self.listeners.remove(callback))

    def emit(self, user):
        for callback in list(self.listeners):
            callback(user)

    async def sign_out(self):
        self.signed_out = True
        raise RuntimeError("network down")


def make_user(user_id, email):
    return AuthUser(id=user_id, email=email)


@pytest.mark.asyncio
async def test_initial_user_loaded():
    auth = ScriptedAuth(initial_user=make_user("u1", "a@example.com"))
    auth.release.set()
    store = AuthStateStore(auth)
    assert store.loading is True

    await store.start()
    await store.wait_idle()

    assert store.user.id == "u1"
    assert store.loading is False
    await store.close()


@pytest.mark.asyncio
async def test_initial_lookup_error_means_signed_out():
    auth = ScriptedAuth(initial_error=RuntimeError("expired"))
    auth.release.set()
    store = AuthStateStore(auth)

    await store.start()
    await store.wait_idle()

    assert store.user is None
    assert store.loading is False
    await store.close()


@pytest.mark.asyncio
async def test_change_during_initial_lookup_wins():
    auth = ScriptedAuth(initial_user=make_user("stale", "old@example.com"))
    store = AuthStateStore(auth)

    start = asyncio.create_task(store.start())
    while not auth.listeners:
        await asyncio.sleep(0)
    auth.emit(make_user("fresh", "new@example.com"))
    auth.release.set()
    await start
    await store.wait_idle()

    assert store.user.id == "fresh"
    await store.close()


@pytest.mark.asyncio
async def test_changes_apply_in_arrival_order():
    auth = ScriptedAuth()
    auth.release.set()
    store = AuthStateStore(auth)
    seen = []
    store.subscribe(lambda user: seen.append(user.id if user else None))
    await store.start()
    await store.wait_idle()

    auth.emit(make_user("u1", "a@example.com"))
    auth.emit(None)
    auth.emit(make_user("u2", "b@example.com"))
    await store.wait_idle()

    assert seen == [None, "u1", None, "u2"]
    assert store.user.id == "u2"
    await store.close()


@pytest.mark.asyncio
async def test_close_unsubscribes_from_auth_service():
    auth = ScriptedAuth()
    auth.release.set()
    store = AuthStateStore(auth)
    await store.start()
    await store.wait_idle()

    await store.close()
    await store.close()

    assert auth.listeners == []


@pytest.mark.asyncio
async def test_sign_out_clears_user_even_when_service_fails():
    auth = ScriptedAuth(initial_user=make_user("u1", "a@example.com"))
    auth.release.set()
    store = AuthStateStore(auth)
    await store.start()
    await store.wait_idle()

    await store.sign_out()

    assert auth.signed_out is True
    assert store.user is None
    assert store.loading is False
    await store.close()


@pytest.mark.asyncio
async def test_sign_in_through_session_service(session_factory, test_settings):
    identity = IdentityBackend(session_factory, test_settings)
    identity.register("jane@example.com", "password1", "Jane")
    store = AuthStateStore(SessionAuthService(identity))
    await store.start()
    await store.wait_idle()
    assert store.user is None

    await store.sign_in("jane@example.com", "password1")
    await store.wait_idle()
    assert store.user.email == "jane@example.com"
    assert store.loading is False

    await store.update_profile(full_name="Jane Doe")
    await store.wait_idle()
    assert store.user.profile.full_name == "Jane Doe"

    with pytest.raises(Exception):
        await store.sign_in("jane@example.com", "wrong")
    assert store.loading is False
    await store.close()


@pytest.mark.asyncio
async def test_sign_out_goes_through_the_update_queue():
    auth = ScriptedAuth(initial_user=make_user("u1", "a@example.com"))
    auth.release.set()
    store = AuthStateStore(auth)
    seen = []
    store.subscribe(lambda user: seen.append(user.id if user else None))
    await store.start()
    await store.wait_idle()

    auth.emit(make_user("u2", "b@example.com"))
    await store.sign_out()

    # the pending change is applied first, then the sign-out
    assert seen == ["u1", "u2", None]
    assert store.user is None
    await store.close()
