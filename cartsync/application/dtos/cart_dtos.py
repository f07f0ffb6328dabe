"""
Cart DTOs

Data Transfer Objects returned by the cart use cases.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from cartsync.domain.entities.cart_entity import Cart


class ListFilter(Enum):
    """Which carts the all-carts listing reports"""

    ALL = "all"
    LOCAL_ONLY = "local"
    REMOTE_ONLY = "remote"


class DeleteOutcome(Enum):
    """Where a delete-by-id took effect"""

    LOCAL_DELETED = "local_deleted"
    REMOTE_DELETED = "remote_deleted"


@dataclass
class CartListing:
    """Deduplicated listing of carts from the durable store and the remote service"""

    carts: List[Cart] = field(default_factory=list)
    local_count: int = 0
    remote_count: int = 0
    remote_available: bool = True
    remote_error: Optional[str] = None

    @property
    def cart_ids(self) -> List[int]:
        return [cart.cart_id for cart in self.carts]


@dataclass
class CartOperationResponse:
    """Response for cart commands"""

    success: bool
    cart: Optional[Cart] = None
    listing: Optional[CartListing] = None
    outcome: Optional[DeleteOutcome] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None
