"""
Cache Infrastructure
"""

from .quote_cache import ProductQuoteCache, QuoteCacheStats

__all__ = ["ProductQuoteCache", "QuoteCacheStats"]
