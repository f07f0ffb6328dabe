"""
Cart aggregate calculator

Turns a list of line items into the cart's derived totals. Every change to a
cart's items goes through ``recompute``; there is no incremental update path.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from cartsync.domain.value_objects.money import DEFAULT_CURRENCY, Money

if TYPE_CHECKING:
    from cartsync.domain.entities.cart_entity import LineItem


@dataclass(frozen=True)
class CartTotals:
    """Derived cart aggregates"""

    total: Money
    item_kind_count: int
    total_quantity: int


def recompute(items: Sequence["LineItem"], currency: str = DEFAULT_CURRENCY) -> CartTotals:
    """Compute total, item-kind count and quantity sum; zeros for no items"""
    return CartTotals(
        total=Money.sum((item.line_total for item in items), currency),
        item_kind_count=len(items),
        total_quantity=sum(item.quantity for item in items),
    )
