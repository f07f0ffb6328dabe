"""
TTL cache for catalog product quotes
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, NamedTuple, Optional

from cartsync.domain.repositories.price_resolver import ProductQuote
from cartsync.infrastructure.utilities.constants import CacheSettings


class _Entry(NamedTuple):
    quote: ProductQuote
    expires_at: float


@dataclass(frozen=True)
class QuoteCacheStats:
    """Snapshot of cache effectiveness"""

    hits: int
    misses: int
    size: int

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return round(self.hits / lookups * 100, 2) if lookups else 0.0


class ProductQuoteCache:
    """Product quotes keyed by product id, each expiring ``ttl_seconds`` after it was stored"""

    def __init__(
        self,
        ttl_seconds: int = CacheSettings.PRODUCT_QUOTE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[int, _Entry] = {}
        self._hits = 0
        self._misses = 0
        self._lock = threading.Lock()

    def get(self, product_id: int) -> Optional[ProductQuote]:
        with self._lock:
            entry = self._entries.get(product_id)
            if entry is not None and entry.expires_at > self._clock():
                self._hits += 1
                return entry.quote
            if entry is not None:
                del self._entries[product_id]
            self._misses += 1
            return None

    def put(self, quote: ProductQuote) -> None:
        if self._ttl_seconds <= 0:
            return
        with self._lock:
            self._entries[quote.product_id] = _Entry(quote, self._clock() + self._ttl_seconds)

    def invalidate(self, product_id: int) -> bool:
        with self._lock:
            return self._entries.pop(product_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def purge_expired(self) -> int:
        """Drop expired quotes and return how many were removed"""
        now = self._clock()
        with self._lock:
            expired = [product_id for product_id, entry in self._entries.items() if entry.expires_at <= now]
            for product_id in expired:
                del self._entries[product_id]
        return len(expired)

    def stats(self) -> QuoteCacheStats:
        with self._lock:
            return QuoteCacheStats(hits=self._hits, misses=self._misses, size=len(self._entries))
