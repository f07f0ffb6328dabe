"""In-memory implementation of the durable cart store."""

from typing import Dict, List, Optional

from cartsync.domain.entities.cart_entity import Cart
from cartsync.domain.repositories.cart_repository import CartRepository


class InMemoryCartRepository(CartRepository):
    """Keeps carts in a dict; carts are immutable so no copying is needed"""

    def __init__(self) -> None:
        self._carts: Dict[int, Cart] = {}

    async def get(self, cart_id: int) -> Optional[Cart]:
        return self._carts.get(cart_id)

    async def get_by_owner(self, owner_key: int) -> Optional[Cart]:
        owned = [cart for cart in self._carts.values() if cart.owner_key == owner_key]
        if not owned:
            return None
        return max(owned, key=lambda cart: cart.cart_id)

    async def put(self, cart: Cart) -> None:
        self._carts[cart.cart_id] = cart

    async def delete(self, cart_id: int) -> bool:
        return self._carts.pop(cart_id, None) is not None

    async def list_all(self) -> List[Cart]:
        return sorted(self._carts.values(), key=lambda cart: cart.cart_id, reverse=True)
