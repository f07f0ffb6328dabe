"""
Session identity provider

Holds the logged-in identity for a session and notifies listeners whenever it
changes, including the transition to logged out.
"""

import logging
from typing import Awaitable, Callable, List, Optional

IdentityListener = Callable[[Optional[int]], Awaitable[None]]


class SessionIdentityProvider:
    """In-process identity source with async change notifications"""

    def __init__(self, identity: Optional[int] = None):
        self._identity = identity
        self._listeners: List[IdentityListener] = []
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def identity(self) -> Optional[int]:
        return self._identity

    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def login(self, identity: int) -> None:
        if isinstance(identity, bool) or not isinstance(identity, int):
            raise TypeError("Identity must be an integer")
        self._logger.info("👤 LOGIN: identity %s", identity)
        await self._set(identity)

    async def logout(self) -> None:
        self._logger.info("👋 LOGOUT")
        await self._set(None)

    async def _set(self, identity: Optional[int]) -> None:
        self._identity = identity
        for listener in list(self._listeners):
            await listener(identity)
