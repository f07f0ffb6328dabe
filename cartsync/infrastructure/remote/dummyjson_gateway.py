"""
DummyJSON cart gateway

RemoteCartGateway implementation for a DummyJSON-compatible cart service.
The public demo service accepts writes but never persists them, so it is
treated as read-only unless configured otherwise.
"""

from typing import List, Optional, Sequence

import httpx

from cartsync.domain.entities.cart_entity import Cart, LineItem
from cartsync.domain.repositories.remote_cart_gateway import (
    RemoteCartGateway,
    RemoteDeleteOutcome,
)
from cartsync.domain.value_objects.money import DEFAULT_CURRENCY
from cartsync.infrastructure.remote.http_client import RemoteServiceClient
from cartsync.infrastructure.remote.schemas import RemoteCart, RemoteCartList
from cartsync.infrastructure.utilities.constants import RemoteSettings
from cartsync.infrastructure.utilities.exceptions import (
    NotFoundError,
    UnsupportedOperationError,
)


def _products_payload(items: Sequence[LineItem]) -> list[dict]:
    return [{"id": item.product_id, "quantity": item.quantity} for item in items]


class DummyJsonCartGateway(RemoteServiceClient, RemoteCartGateway):
    """httpx-based gateway for /carts endpoints"""

    def __init__(
        self,
        base_url: str = RemoteSettings.DEFAULT_BASE_URL,
        timeout: float = RemoteSettings.DEFAULT_TIMEOUT_SECONDS,
        read_only: bool = True,
        currency: str = DEFAULT_CURRENCY,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(base_url, timeout, client)
        self._read_only = read_only
        self._currency = currency

    @property
    def read_only(self) -> bool:
        return self._read_only

    async def list_all(self) -> List[Cart]:
        response = await self._request(
            "GET", "/carts", "list_all", params={"limit": RemoteSettings.LIST_ALL_LIMIT}
        )
        listing: RemoteCartList = self._parse(response, RemoteCartList, "list_all")
        self._logger.info("🌐 REMOTE CARTS: %d of %d", len(listing.carts), listing.total)
        return [remote.to_cart(self._currency) for remote in listing.carts]

    async def get_by_owner(self, owner_key: int) -> Optional[Cart]:
        response = await self._request("GET", f"/carts/user/{owner_key}", "get_by_owner")
        if response.status_code == 404:
            self._logger.info("📭 REMOTE: owner %s unknown to remote service", owner_key)
            return None
        listing: RemoteCartList = self._parse(response, RemoteCartList, "get_by_owner")
        if not listing.carts:
            self._logger.info("📭 REMOTE: owner %s has no carts", owner_key)
            return None
        latest = max(listing.carts, key=lambda remote: remote.id)
        self._logger.info(
            "📦 REMOTE CART FOUND: owner %s -> cart %s (%d candidates)",
            owner_key,
            latest.id,
            len(listing.carts),
        )
        return latest.to_cart(self._currency)

    async def create(self, owner_key: int, items: Sequence[LineItem]) -> Cart:
        if self._read_only:
            raise UnsupportedOperationError("create")
        response = await self._request(
            "POST",
            "/carts/add",
            "create",
            json={"userId": owner_key, "products": _products_payload(items)},
        )
        self._reject_unsupported(response, "create")
        remote: RemoteCart = self._parse(response, RemoteCart, "create")
        return remote.to_cart(self._currency)

    async def update(self, cart_id: int, items: Sequence[LineItem]) -> Cart:
        if self._read_only:
            raise UnsupportedOperationError("update", cart_id)
        response = await self._request(
            "PUT",
            f"/carts/{cart_id}",
            "update",
            json={"merge": False, "products": _products_payload(items)},
        )
        if response.status_code == 404:
            raise NotFoundError("Cart", cart_id)
        self._reject_unsupported(response, "update", cart_id)
        remote: RemoteCart = self._parse(response, RemoteCart, "update")
        return remote.to_cart(self._currency)

    async def delete(self, cart_id: int) -> RemoteDeleteOutcome:
        if self._read_only:
            # Probe only, so absent ids still surface as NotFound
            response = await self._request("GET", f"/carts/{cart_id}", "delete")
            if response.status_code == 404:
                raise NotFoundError("Cart", cart_id)
            self._raise_for_failure(response, "delete")
            self._logger.info("🔒 REMOTE DELETE SKIPPED: cart %s, service is read-only", cart_id)
            return RemoteDeleteOutcome.UNSUPPORTED
        response = await self._request("DELETE", f"/carts/{cart_id}", "delete")
        if response.status_code == 404:
            raise NotFoundError("Cart", cart_id)
        if response.status_code in RemoteSettings.UNSUPPORTED_STATUS_CODES:
            self._logger.info("🔒 REMOTE DELETE REJECTED: cart %s, HTTP %s", cart_id, response.status_code)
            return RemoteDeleteOutcome.UNSUPPORTED
        self._raise_for_failure(response, "delete")
        self._logger.info("🗑️ REMOTE CART DELETED: %s", cart_id)
        return RemoteDeleteOutcome.DELETED

    def _reject_unsupported(self, response: httpx.Response, operation: str, cart_id: Optional[int] = None) -> None:
        if response.status_code in RemoteSettings.UNSUPPORTED_STATUS_CODES:
            raise UnsupportedOperationError(operation, cart_id)
