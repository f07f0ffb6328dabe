"""
Remote service adapters (DummyJSON-compatible carts and products).
"""

from .dummyjson_catalog import DummyJsonProductCatalog
from .dummyjson_gateway import DummyJsonCartGateway

__all__ = ["DummyJsonCartGateway", "DummyJsonProductCatalog"]
