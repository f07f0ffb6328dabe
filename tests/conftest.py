"""
Test configuration and fixtures for cartsync
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence, Tuple
from unittest.mock import patch

import pytest

from cartsync.application.use_cases.all_carts_use_case import AllCartsUseCase
from cartsync.application.use_cases.cart_commands import CartCommands
from cartsync.application.use_cases.cart_reconciliation_use_case import CartReconciliationUseCase
from cartsync.application.use_cases.cart_session import CartSession
from cartsync.domain.entities.cart_entity import Cart, CartSource, LineItem
from cartsync.domain.repositories.remote_cart_gateway import RemoteCartGateway, RemoteDeleteOutcome
from cartsync.domain.services.cart_id_allocator import MonotonicCartIdAllocator
from cartsync.domain.services.identity_mapper import IdentityMapper
from cartsync.domain.value_objects.money import Money
from cartsync.infrastructure.configuration.config import reset_config
from cartsync.infrastructure.repositories.in_memory_cart_repository import InMemoryCartRepository
from cartsync.infrastructure.services.price_resolvers import FixedPriceResolver
from cartsync.infrastructure.utilities.exceptions import (
    GatewayUnavailableError,
    NotFoundError,
    UnsupportedOperationError,
)


@pytest.fixture(autouse=True)
def mock_env():
    """Isolate tests from the host environment"""
    test_env = {
        "DATABASE_URL": "sqlite:///:memory:",
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "DEBUG",
    }

    with patch.dict(os.environ, test_env, clear=True):
        reset_config()
        yield test_env
    reset_config()


class FakeClock:
    """Deterministic clock advancing one second per call"""

    def __init__(self, start: Optional[datetime] = None):
        self.current = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current = self.current + timedelta(seconds=1)
        return self.current


class FakeRemoteCartGateway(RemoteCartGateway):
    """In-process remote cart service"""

    def __init__(self, carts: Sequence[Cart] = (), read_only: bool = True):
        self.carts: Dict[int, Cart] = {cart.cart_id: cart for cart in carts}
        self.read_only = read_only
        self.available = True
        self.calls: List[Tuple[str, object]] = []

    def _check_available(self, operation: str) -> None:
        if not self.available:
            raise GatewayUnavailableError(f"Remote {operation} failed", operation)

    async def list_all(self) -> List[Cart]:
        self.calls.append(("list_all", None))
        self._check_available("list_all")
        return list(self.carts.values())

    async def get_by_owner(self, owner_key: int) -> Optional[Cart]:
        self.calls.append(("get_by_owner", owner_key))
        self._check_available("get_by_owner")
        owned = [cart for cart in self.carts.values() if cart.owner_key == owner_key]
        return max(owned, key=lambda cart: cart.cart_id) if owned else None

    async def create(self, owner_key: int, items: Sequence[LineItem]) -> Cart:
        self.calls.append(("create", owner_key))
        raise UnsupportedOperationError("create")

    async def update(self, cart_id: int, items: Sequence[LineItem]) -> Cart:
        self.calls.append(("update", cart_id))
        raise UnsupportedOperationError("update", cart_id)

    async def delete(self, cart_id: int) -> RemoteDeleteOutcome:
        self.calls.append(("delete", cart_id))
        self._check_available("delete")
        if cart_id not in self.carts:
            raise NotFoundError("Cart", cart_id)
        if self.read_only:
            return RemoteDeleteOutcome.UNSUPPORTED
        del self.carts[cart_id]
        return RemoteDeleteOutcome.DELETED

    def call_count(self, operation: str) -> int:
        return sum(1 for name, _ in self.calls if name == operation)


def build_cart(
    cart_id: int,
    owner_key: int,
    lines: Sequence[Tuple[int, int, str]] = (),
    source: CartSource = CartSource.LOCAL,
    updated_at: Optional[datetime] = None,
) -> Cart:
    """Cart from (product_id, quantity, unit_price) tuples"""
    items = [
        LineItem.create(product_id, quantity, Money.of(price), title=f"Item {product_id}")
        for product_id, quantity, price in lines
    ]
    return Cart.build(cart_id, owner_key, items, source=source, updated_at=updated_at)


@pytest.fixture
def make_cart():
    return build_cart


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repository():
    return InMemoryCartRepository()


@pytest.fixture
def remote_gateway():
    return FakeRemoteCartGateway()


@pytest.fixture
def price_resolver():
    return FixedPriceResolver()


@pytest.fixture
def id_allocator():
    return MonotonicCartIdAllocator()


@pytest.fixture
def identity_mapper():
    return IdentityMapper()


@pytest.fixture
def engine(repository, remote_gateway, price_resolver, id_allocator, identity_mapper, clock):
    return CartReconciliationUseCase(
        cart_repository=repository,
        remote_gateway=remote_gateway,
        price_resolver=price_resolver,
        id_allocator=id_allocator,
        identity_mapper=identity_mapper,
        clock=clock,
    )


@pytest.fixture
def all_carts(repository, remote_gateway):
    return AllCartsUseCase(repository, remote_gateway)


@pytest.fixture
def commands(engine, all_carts):
    return CartCommands(engine, all_carts)


@pytest.fixture
def session():
    return CartSession()
