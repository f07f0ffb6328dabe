"""
Domain repository interfaces

Contains abstract interfaces for the durable store, the remote cart service
and price lookup. These follow the Repository pattern and Dependency
Inversion principle.
"""

from .cart_repository import CartRepository
from .price_resolver import PriceResolver, ProductCatalog, ProductQuote
from .remote_cart_gateway import RemoteCartGateway, RemoteDeleteOutcome

__all__ = [
    "CartRepository",
    "PriceResolver",
    "ProductCatalog",
    "ProductQuote",
    "RemoteCartGateway",
    "RemoteDeleteOutcome",
]
