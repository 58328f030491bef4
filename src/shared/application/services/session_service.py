"""
Session Service

Holds the current identity and notifies subscribers when it changes.
Scene store operations are scoped by this identity's project ownership.
"""
from dataclasses import dataclass
from threading import Lock
from typing import Callable, List, Optional

from src.application.events.event_bus import EventBus
from src.application.events.events import IdentityChanged
from src.utils.message import Log


@dataclass(frozen=True)
class Identity:
    """A signed-in user."""
    user_id: str
    display_name: str = ""


class SessionService:
    """
    Current identity provider.

    Responsibilities:
    - Track who is signed in
    - Notify subscribers (callbacks and the event bus) on sign in / sign out

    Does NOT handle:
    - Credentials (the identity is supplied by the caller)
    """

    def __init__(self, event_bus: Optional[EventBus] = None):
        self._event_bus = event_bus
        self._identity: Optional[Identity] = None
        self._subscribers: List[Callable[[Optional[Identity]], None]] = []
        self._lock = Lock()

    @property
    def current_identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def current_user_id(self) -> Optional[str]:
        return self._identity.user_id if self._identity else None

    @property
    def is_signed_in(self) -> bool:
        return self._identity is not None

    def sign_in(self, user_id: str, display_name: str = "") -> Identity:
        """
        Make user_id the current identity.

        Raises:
            ValueError: If user_id is empty
        """
        if not user_id or not user_id.strip():
            raise ValueError("User ID cannot be empty")

        identity = Identity(user_id=user_id.strip(), display_name=display_name)
        if identity == self._identity:
            return identity

        self._identity = identity
        Log.info(f"SessionService: Signed in as '{identity.user_id}'")
        self._notify()
        return identity

    def sign_out(self) -> None:
        if self._identity is None:
            return
        Log.info(f"SessionService: Signed out '{self._identity.user_id}'")
        self._identity = None
        self._notify()

    def subscribe(self, callback: Callable[[Optional[Identity]], None]) -> Callable[[], None]:
        """
        Call callback with the new identity (or None) on every change.

        Returns:
            Function that removes the subscription
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        with self._lock:
            callbacks = list(self._subscribers)

        identity = self._identity
        for callback in callbacks:
            try:
                callback(identity)
            except Exception as e:
                Log.error(f"SessionService: Identity subscriber failed: {e}")

        if self._event_bus:
            self._event_bus.publish(IdentityChanged(data={"user_id": self.current_user_id}))
