"""
Price resolvers

FixedPriceResolver supplies the documented fallback quote. CatalogPriceResolver
asks the product catalog first, caches what it finds, and falls back to the
fixed quote when the catalog cannot answer.
"""

import logging
from decimal import Decimal
from typing import Optional

from cartsync.domain.repositories.price_resolver import (
    PriceResolver,
    ProductCatalog,
    ProductQuote,
)
from cartsync.domain.value_objects.money import DEFAULT_CURRENCY, Money
from cartsync.infrastructure.cache.quote_cache import ProductQuoteCache
from cartsync.infrastructure.utilities.constants import PricingSettings
from cartsync.infrastructure.utilities.exceptions import (
    GatewayUnavailableError,
    NotFoundError,
)


class FixedPriceResolver(PriceResolver):
    """Quotes every product at the same configured fallback price"""

    def __init__(
        self,
        unit_price: Decimal = PricingSettings.FALLBACK_UNIT_PRICE,
        title_template: str = PricingSettings.FALLBACK_TITLE_TEMPLATE,
        thumbnail: str = PricingSettings.FALLBACK_THUMBNAIL,
        currency: str = DEFAULT_CURRENCY,
    ):
        self._unit_price = Money.of(unit_price, currency)
        self._title_template = title_template
        self._thumbnail = thumbnail

    async def quote(self, product_id: int) -> ProductQuote:
        return ProductQuote(
            product_id=product_id,
            unit_price=self._unit_price,
            title=self._title_template.format(product_id=product_id),
            thumbnail=self._thumbnail,
            is_fallback=True,
        )


class CatalogPriceResolver(PriceResolver):
    """Catalog-backed quotes with a TTL cache and a fixed fallback"""

    def __init__(
        self,
        catalog: ProductCatalog,
        fallback: PriceResolver,
        cache: Optional[ProductQuoteCache] = None,
    ):
        self._catalog = catalog
        self._fallback = fallback
        self._cache = cache or ProductQuoteCache()
        self._logger = logging.getLogger(self.__class__.__name__)

    async def quote(self, product_id: int) -> ProductQuote:
        cached = self._cache.get(product_id)
        if cached is not None:
            return cached

        try:
            quote = await self._catalog.get_quote(product_id)
        except (GatewayUnavailableError, NotFoundError) as e:
            self._logger.warning(
                "⚠️ CATALOG PRICE UNAVAILABLE for product %s (%s), using fallback quote",
                product_id,
                e.error_code,
            )
            # Fallback quotes are not cached so the catalog is retried next time
            return await self._fallback.quote(product_id)

        self._cache.put(quote)
        self._logger.debug("💲 CATALOG QUOTE: product %s at %s", product_id, quote.unit_price)
        return quote
