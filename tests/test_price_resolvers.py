"""
Price Resolver and Cache Tests
"""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from cartsync.domain.repositories.price_resolver import ProductQuote
from cartsync.domain.value_objects.money import Money
from cartsync.infrastructure.cache.quote_cache import ProductQuoteCache
from cartsync.infrastructure.services.price_resolvers import CatalogPriceResolver, FixedPriceResolver
from cartsync.infrastructure.utilities.exceptions import GatewayUnavailableError, NotFoundError


class FakeMonotonic:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def catalog_returning(**kwargs):
    catalog = MagicMock()
    catalog.get_quote = AsyncMock(**kwargs)
    return catalog


class TestFixedPriceResolver:
    """Test the fallback quote"""

    @pytest.mark.asyncio
    async def test_default_fallback_quote(self):
        quote = await FixedPriceResolver().quote(42)

        assert quote.product_id == 42
        assert quote.unit_price == Money.of("10.00")
        assert quote.title == "Product 42"
        assert quote.thumbnail == "/placeholder.svg"
        assert quote.is_fallback is True

    @pytest.mark.asyncio
    async def test_configured_fallback_quote(self):
        resolver = FixedPriceResolver(
            unit_price=Decimal("3.50"), title_template="Item #{product_id}", thumbnail="x.png", currency="EUR"
        )

        quote = await resolver.quote(7)

        assert quote.unit_price == Money.of("3.50", "EUR")
        assert quote.title == "Item #7"


class TestCatalogPriceResolver:
    """Test catalog lookups with caching and fallback"""

    @pytest.mark.asyncio
    async def test_catalog_quote_is_cached(self):
        catalog_quote = ProductQuote(product_id=3, unit_price=Money.of("12.50"), title="Lamp")
        catalog = catalog_returning(return_value=catalog_quote)
        resolver = CatalogPriceResolver(catalog, FixedPriceResolver())

        assert await resolver.quote(3) == catalog_quote
        assert await resolver.quote(3) == catalog_quote
        catalog.get_quote.assert_called_once_with(3)

    @pytest.mark.asyncio
    async def test_cache_expires(self):
        clock = FakeMonotonic()
        catalog_quote = ProductQuote(product_id=3, unit_price=Money.of("12.50"))
        catalog = catalog_returning(return_value=catalog_quote)
        resolver = CatalogPriceResolver(catalog, FixedPriceResolver(), ProductQuoteCache(ttl_seconds=300, clock=clock))

        await resolver.quote(3)
        clock.now = 301
        await resolver.quote(3)

        assert catalog.get_quote.await_count == 2

    @pytest.mark.asyncio
    async def test_gateway_failure_falls_back(self):
        """Test an unavailable catalog yields the fallback quote, uncached"""
        catalog = catalog_returning(side_effect=GatewayUnavailableError("down", "get_product"))
        resolver = CatalogPriceResolver(catalog, FixedPriceResolver())

        first = await resolver.quote(9)
        await resolver.quote(9)

        assert first.is_fallback is True
        assert first.unit_price == Money.of("10.00")
        assert catalog.get_quote.await_count == 2

    @pytest.mark.asyncio
    async def test_unknown_product_falls_back(self):
        catalog = catalog_returning(side_effect=NotFoundError("Product", 9))
        resolver = CatalogPriceResolver(catalog, FixedPriceResolver())

        assert (await resolver.quote(9)).title == "Product 9"


class TestProductQuoteCache:
    """Test the quote cache"""

    def test_put_get_invalidate(self):
        cache = ProductQuoteCache()
        quote = ProductQuote(product_id=1, unit_price=Money.of(1))
        cache.put(quote)

        assert cache.get(1) == quote
        assert cache.invalidate(1) is True
        assert cache.invalidate(1) is False
        assert cache.get(1) is None

    def test_zero_ttl_disables_caching(self):
        cache = ProductQuoteCache(ttl_seconds=0)
        cache.put(ProductQuote(product_id=1, unit_price=Money.of(1)))
        assert cache.get(1) is None

    def test_purge_and_stats(self):
        clock = FakeMonotonic()
        cache = ProductQuoteCache(ttl_seconds=10, clock=clock)
        cache.put(ProductQuote(product_id=1, unit_price=Money.of(1)))
        clock.now = 5
        cache.put(ProductQuote(product_id=2, unit_price=Money.of(2)))
        cache.get(2)
        cache.get(3)

        clock.now = 12
        assert cache.purge_expired() == 1

        stats = cache.stats()
        assert stats.hits == 1
        assert stats.misses == 1
        assert stats.size == 1
        assert stats.hit_rate == 50.0
