"""
Remote cart gateway interface

Thin CRUD facade over the external cart service. Implementations raise
GatewayUnavailableError for transport failures instead of reporting "no cart".
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Sequence

from cartsync.domain.entities.cart_entity import Cart, LineItem


class RemoteDeleteOutcome(Enum):
    """Result of asking the remote service to delete a cart"""

    DELETED = "deleted"
    UNSUPPORTED = "unsupported"


class RemoteCartGateway(ABC):
    """Gateway interface for the remote cart service"""

    @abstractmethod
    async def list_all(self) -> List[Cart]:
        """Full listing of remote carts"""

    @abstractmethod
    async def get_by_owner(self, owner_key: int) -> Optional[Cart]:
        """Latest remote cart for an owner, None if the owner has none"""

    @abstractmethod
    async def create(self, owner_key: int, items: Sequence[LineItem]) -> Cart:
        """Create a remote cart"""

    @abstractmethod
    async def update(self, cart_id: int, items: Sequence[LineItem]) -> Cart:
        """Replace the items of a remote cart"""

    @abstractmethod
    async def delete(self, cart_id: int) -> RemoteDeleteOutcome:
        """Delete a remote cart"""
