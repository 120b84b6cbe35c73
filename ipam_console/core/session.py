"""The acting user and whether authentication has settled yet."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, List, Optional

from ipam_console.models.user import CurrentUser, GUEST_USER
from simple_logger import Slogger

SessionListener = Callable[["UserSession"], Any]
UserLoader = Callable[[], Awaitable[Optional[CurrentUser]]]


class UserSession:
    """Starts in the auth-loading state unless a user is supplied."""

    def __init__(self, user: Optional[CurrentUser] = None) -> None:
        self._user = user
        self.is_auth_loading = user is None
        self._listeners: List[SessionListener] = []

    @property
    def current_user(self) -> Optional[CurrentUser]:
        return None if self.is_auth_loading else self._user

    def set_user(self, user: Optional[CurrentUser]) -> None:
        """Settle authentication; None means "nobody", shown as the guest."""
        self._user = user or GUEST_USER
        self.is_auth_loading = False
        Slogger.info(
            f"Session resolved for '{self._user.username}'",
            {"role": self._user.role_name, "guest": self._user.is_guest},
        )
        self._publish()

    async def resolve(self, loader: UserLoader) -> CurrentUser:
        """Run `loader`; a failing loader leaves the guest signed in."""
        self.is_auth_loading = True
        try:
            user = await loader()
        except Exception as e:
            Slogger.exception(e, "Could not resolve the current user", {"component": "UserSession"})
            user = None
        self.set_user(user)
        return self._user

    def subscribe(self, callback: SessionListener) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def unsubscribe(self, callback: SessionListener) -> bool:
        if callback in self._listeners:
            self._listeners.remove(callback)
            return True
        return False

    def _publish(self) -> None:
        for callback in list(self._listeners):
            try:
                callback(self)
            except Exception as e:
                Slogger.exception(e, "Error in session listener", {"component": "UserSession"})
