"""
Infrastructure services.
"""

from .price_resolvers import CatalogPriceResolver, FixedPriceResolver

__all__ = ["CatalogPriceResolver", "FixedPriceResolver"]
