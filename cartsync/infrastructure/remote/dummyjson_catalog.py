"""
DummyJSON product catalog

Looks up product prices for carts.
"""

from typing import Optional

import httpx

from cartsync.domain.repositories.price_resolver import ProductCatalog, ProductQuote
from cartsync.domain.value_objects.money import DEFAULT_CURRENCY, Money
from cartsync.infrastructure.remote.http_client import RemoteServiceClient
from cartsync.infrastructure.remote.schemas import RemoteProduct
from cartsync.infrastructure.utilities.constants import RemoteSettings
from cartsync.infrastructure.utilities.exceptions import NotFoundError


class DummyJsonProductCatalog(RemoteServiceClient, ProductCatalog):
    """httpx-based catalog for /products/{id}"""

    def __init__(
        self,
        base_url: str = RemoteSettings.DEFAULT_BASE_URL,
        timeout: float = RemoteSettings.DEFAULT_TIMEOUT_SECONDS,
        currency: str = DEFAULT_CURRENCY,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(base_url, timeout, client)
        self._currency = currency

    async def get_quote(self, product_id: int) -> ProductQuote:
        response = await self._request("GET", f"/products/{product_id}", "get_product")
        if response.status_code == 404:
            raise NotFoundError("Product", product_id)
        product: RemoteProduct = self._parse(response, RemoteProduct, "get_product")
        return ProductQuote(
            product_id=product.id,
            unit_price=Money.of(product.price, self._currency),
            title=product.title,
            thumbnail=product.thumbnail,
        )
