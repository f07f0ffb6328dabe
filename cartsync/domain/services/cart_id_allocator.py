"""
Cart id allocation for locally created carts
"""

import threading

DEFAULT_LOCAL_CART_ID_FLOOR = 1_000_000


class MonotonicCartIdAllocator:
    """
    Hands out strictly increasing cart ids.

    Ids start above ``floor`` so locally created carts stay clear of the ids
    the remote service assigns, and never go below an id passed to ``observe``.
    """

    def __init__(self, floor: int = DEFAULT_LOCAL_CART_ID_FLOOR):
        if floor < 0:
            raise ValueError("Cart id floor cannot be negative")
        self._last = floor
        self._lock = threading.Lock()

    def observe(self, cart_id: int) -> None:
        """Record an existing id so later allocations stay above it"""
        with self._lock:
            if cart_id > self._last:
                self._last = cart_id

    def next_id(self) -> int:
        with self._lock:
            self._last += 1
            return self._last
