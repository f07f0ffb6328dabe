"""
Per-session cart state
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from cartsync.domain.entities.cart_entity import Cart
from cartsync.domain.value_objects.owner_key import OwnerKey


class ResolutionState(Enum):
    """Lifecycle of a session's current cart"""

    UNRESOLVED = "unresolved"
    RESOLVING = "resolving"
    READY = "ready"


@dataclass
class CartSession:
    """
    Explicit state of one user session, passed into every engine call.

    Only the reconciliation use case mutates it.
    """

    identity: Optional[int] = None
    owner_key: Optional[OwnerKey] = None
    state: ResolutionState = ResolutionState.UNRESOLVED
    current_cart: Optional[Cart] = None
    last_error: Optional[str] = None

    @property
    def is_ready(self) -> bool:
        return self.state is ResolutionState.READY

    @property
    def display_cart(self) -> Optional[Cart]:
        """The current cart, or None when it has no items"""
        if self.current_cart is None or self.current_cart.is_empty():
            return None
        return self.current_cart
