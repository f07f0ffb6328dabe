"""
Price resolution for products added to a cart
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from cartsync.domain.value_objects.money import Money


@dataclass(frozen=True)
class ProductQuote:
    """Price and display data used when a product is first added to a cart"""

    product_id: int
    unit_price: Money
    title: str = ""
    thumbnail: str = ""
    is_fallback: bool = False


class PriceResolver(ABC):
    """Supplies a quote for a product id"""

    @abstractmethod
    async def quote(self, product_id: int) -> ProductQuote:
        """Return a quote; implementations never return None"""


class ProductCatalog(ABC):
    """Read access to an external product catalog"""

    @abstractmethod
    async def get_quote(self, product_id: int) -> ProductQuote:
        """Quote from the catalog; raises NotFoundError or GatewayUnavailableError"""
