"""
Cart repository interface

Defines the contract for the durable cart store.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from cartsync.domain.entities.cart_entity import Cart


class CartRepository(ABC):
    """Repository interface for locally persisted carts"""

    @abstractmethod
    async def get(self, cart_id: int) -> Optional[Cart]:
        """Get a cart by id"""

    @abstractmethod
    async def get_by_owner(self, owner_key: int) -> Optional[Cart]:
        """Get the owner's cart, the highest id if several exist"""

    @abstractmethod
    async def put(self, cart: Cart) -> None:
        """Insert or replace a cart"""

    @abstractmethod
    async def delete(self, cart_id: int) -> bool:
        """Delete a cart, returning whether it existed"""

    @abstractmethod
    async def list_all(self) -> List[Cart]:
        """List every stored cart"""
