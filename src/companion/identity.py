"""Bridge between the identity provider and the user session"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Set

from state.store import Store, Subscription
from state.user import clear_user, login_or_register

logger = logging.getLogger(__name__)

IdentityCallback = Callable[[Optional["IdentityUser"]], None]


@dataclass
class IdentityUser:
    """Account signed in with the identity provider"""
    uid: str
    email: Optional[str] = None
    token: Optional[str] = None


class IdentityEvents:
    """
    Sign-in / sign-out event stream of the identity provider

    Also serves as the API client's token provider: the bearer token of the
    signed-in account is looked up again for every request.
    """

    def __init__(self):
        self.current_user: Optional[IdentityUser] = None
        self._callbacks: List[IdentityCallback] = []

    def subscribe(self, callback: IdentityCallback) -> Subscription:
        """
        Register for identity changes

        Args:
            callback: Called with the signed-in user, or None on sign-out

        Returns:
            Handle; after ``unsubscribe()`` the callback is never called again
        """
        def guarded(user: Optional[IdentityUser]):
            if subscription.active:
                callback(user)

        def remove():
            if guarded in self._callbacks:
                self._callbacks.remove(guarded)

        subscription = Subscription(remove)
        self._callbacks.append(guarded)
        return subscription

    def emit(self, user: Optional[IdentityUser]):
        """Publish a sign-in (user) or sign-out (None) event"""
        self.current_user = user
        for callback in list(self._callbacks):
            callback(user)

    def sign_in(self, user: IdentityUser):
        self.emit(user)

    def sign_out(self):
        self.emit(None)

    async def get_token(self) -> Optional[str]:
        if self.current_user is None:
            return None
        return self.current_user.token


class IdentityBridge:
    """Keeps the user container in step with the identity provider"""

    def __init__(self, store: Store, identity: IdentityEvents):
        self.store = store
        self.identity = identity
        self._subscription: Optional[Subscription] = None
        self._tasks: Set[asyncio.Task] = set()
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def active(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def start(self) -> Subscription:
        """
        Subscribe to identity changes

        Returns:
            Handle that stops the bridge and cancels in-flight logins
        """
        try:
            self._loop = asyncio.get_running_loop()
        except RuntimeError:
            self._loop = None
        if self._subscription is None or not self._subscription.active:
            self._subscription = self.identity.subscribe(self._on_identity_change)
            logger.info("Listening for identity changes")
        return Subscription(self.stop)

    def stop(self):
        if self._subscription is not None:
            self._subscription.unsubscribe()
        for task in list(self._tasks):
            task.cancel()
        logger.info("Stopped listening for identity changes")

    def _on_identity_change(self, user: Optional[IdentityUser]):
        if not self.active:
            return

        if user is None:
            logger.info("Identity provider reported sign-out")
            self.store.dispatch(clear_user())
            return

        logger.info(f"Identity provider reported sign-in for {user.uid}")
        arg = {"firebase_uid": user.uid, "email": user.email}
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            if self._loop is None or self._loop.is_closed():
                logger.error(f"No event loop to log in {user.uid}")
                self.store.dispatch(login_or_register.rejected_action("Login could not be started", arg=arg))
                return
            # Delivered from outside the loop; hand the login over to it
            self._loop.call_soon_threadsafe(self._schedule_login, arg)
            return
        self._schedule_login(arg)

    def _schedule_login(self, arg: Dict[str, Any]):
        if not self.active:
            return
        task = asyncio.get_running_loop().create_task(self.store.run(login_or_register, arg))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def wait(self):
        """Wait for in-flight logins to finish"""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
