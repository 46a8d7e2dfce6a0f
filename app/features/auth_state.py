"""
Auth state store

Keeps the current user for one client and applies auth changes one at a time,
in the order they arrive.
"""
import asyncio
import contextlib
import logging
from typing import Callable, List, Optional, Tuple

from app.schemas.auth import AuthUser
from app.services.auth_service import AuthService, Subscription

logger = logging.getLogger(__name__)

StateListener = Callable[[Optional[AuthUser]], None]

INITIAL = "initial"
CHANGE = "change"


class AuthStateStore:
    """Mirror of the signed-in user backed by an AuthService.

    `start()` subscribes to changes and fetches the initial user once. Every
    update, the initial one included, goes through a single-consumer queue,
    so two updates are never applied concurrently. If a change arrives before
    the initial fetch completes, the initial result is stale and only clears
    `loading`.
    """

    def __init__(self, auth: AuthService):
        self._auth = auth
        self.user: Optional[AuthUser] = None
        self.loading = True
        self._queue: "asyncio.Queue[Tuple[str, Optional[AuthUser]]]" = asyncio.Queue()
        self._consumer: Optional[asyncio.Task] = None
        self._subscription: Optional[Subscription] = None
        self._listeners: List[StateListener] = []
        self._changes_applied = 0

    async def start(self) -> None:
        if self._consumer is not None:
            return
        self._consumer = asyncio.create_task(self._consume())
        self._subscription = self._auth.on_auth_state_change(self._on_change)

        try:
            user = await self._auth.get_current_user()
        except Exception as e:
            logger.error(f"Auth initialization error: {e}")
            user = None
        self._queue.put_nowait((INITIAL, user))

    def _on_change(self, user: Optional[AuthUser]) -> None:
        self._queue.put_nowait((CHANGE, user))

    async def _consume(self) -> None:
        while True:
            kind, user = await self._queue.get()
            try:
                if kind == CHANGE or self._changes_applied == 0:
                    self.user = user
                if kind == CHANGE:
                    self._changes_applied += 1
                self.loading = False
                for listener in list(self._listeners):
                    try:
                        listener(self.user)
                    except Exception:
                        logger.exception("Auth state subscriber failed")
            finally:
                self._queue.task_done()

    async def wait_idle(self) -> None:
        """Wait until every queued update has been applied."""
        await self._queue.join()

    def subscribe(self, listener: StateListener) -> Subscription:
        self._listeners.append(listener)

        def _cancel() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return Subscription(_cancel)

    async def sign_in(self, email: str, password: str) -> None:
        self.loading = True
        try:
            # the user itself arrives through the change subscription
            await self._auth.sign_in(email, password)
        except Exception as e:
            logger.error(f"SignIn error: {e}")
            raise
        finally:
            self.loading = False

    async def sign_up(self, email: str, password: str, full_name: Optional[str] = None) -> None:
        self.loading = True
        try:
            await self._auth.sign_up(email, password, full_name)
        except Exception as e:
            logger.error(f"SignUp error: {e}")
            raise
        finally:
            self.loading = False

    async def sign_out(self) -> None:
        # cleared before the service is contacted, through the same queue as every other update
        self._queue.put_nowait((CHANGE, None))
        if self._consumer is not None:
            await self.wait_idle()
        try:
            await self._auth.sign_out()
        except Exception as e:
            logger.error(f"SignOut error: {e}")

    async def update_profile(self, full_name: Optional[str] = None, avatar_url: Optional[str] = None) -> None:
        try:
            await self._auth.update_profile(full_name=full_name, avatar_url=avatar_url)
        except Exception as e:
            logger.error(f"Update profile error: {e}")
            raise

    async def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        if self._consumer is not None:
            self._consumer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._consumer
            self._consumer = None
