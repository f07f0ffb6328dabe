"""
Cart domain entities

A Cart and its LineItems are immutable: every mutation builds a new Cart via
``Cart.build`` so the aggregates are always recomputed from the items.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional, Tuple

from cartsync.domain.services.cart_totals import recompute
from cartsync.domain.value_objects.money import DEFAULT_CURRENCY, Money


class CartSource(Enum):
    """Where a cart record originated"""

    LOCAL = "local"
    REMOTE = "remote"


@dataclass(frozen=True)
class LineItem:
    """Single product line in a cart"""

    product_id: int
    quantity: int
    unit_price: Money
    line_total: Money
    title: str = ""
    thumbnail: str = ""

    def __post_init__(self):
        if isinstance(self.product_id, bool) or not isinstance(self.product_id, int) or self.product_id <= 0:
            raise ValueError("Product ID must be a positive integer")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity < 1:
            raise ValueError("Quantity must be at least 1")
        if self.line_total != self.unit_price * self.quantity:
            raise ValueError(
                f"Line total {self.line_total} does not match "
                f"{self.unit_price} x {self.quantity} for product {self.product_id}"
            )

    @classmethod
    def create(
        cls,
        product_id: int,
        quantity: int,
        unit_price: Money,
        title: str = "",
        thumbnail: str = "",
    ) -> "LineItem":
        """Build a line item with its line total derived from price and quantity"""
        return cls(
            product_id=product_id,
            quantity=quantity,
            unit_price=unit_price,
            line_total=unit_price * quantity,
            title=title,
            thumbnail=thumbnail,
        )

    def with_quantity(self, quantity: int) -> "LineItem":
        """Copy of this line with a new quantity and recomputed line total"""
        return replace(self, quantity=quantity, line_total=self.unit_price * quantity)


@dataclass(frozen=True)
class Cart:
    """
    Shopping cart for one owner

    Invariants checked on construction:
    - item_kind_count == len(items)
    - total_quantity == sum of quantities
    - total == sum of line totals
    - no two items share a product_id
    """

    cart_id: int
    owner_key: int
    items: Tuple[LineItem, ...] = ()
    total: Money = field(default_factory=Money.zero)
    item_kind_count: int = 0
    total_quantity: int = 0
    source: CartSource = CartSource.LOCAL
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if isinstance(self.cart_id, bool) or not isinstance(self.cart_id, int) or self.cart_id <= 0:
            raise ValueError("Cart ID must be a positive integer")
        object.__setattr__(self, "items", tuple(self.items))

        product_ids = [item.product_id for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValueError(f"Cart {self.cart_id} has duplicate product lines")

        expected = recompute(self.items, self.total.currency)
        if (
            self.total != expected.total
            or self.item_kind_count != expected.item_kind_count
            or self.total_quantity != expected.total_quantity
        ):
            raise ValueError(f"Cart {self.cart_id} aggregates do not match its items")

    @classmethod
    def build(
        cls,
        cart_id: int,
        owner_key: int,
        items: Iterable[LineItem] = (),
        source: CartSource = CartSource.LOCAL,
        updated_at: Optional[datetime] = None,
        currency: str = DEFAULT_CURRENCY,
    ) -> "Cart":
        """Create a cart with aggregates computed from the items"""
        items = tuple(items)
        totals = recompute(items, currency)
        return cls(
            cart_id=cart_id,
            owner_key=owner_key,
            items=items,
            total=totals.total,
            item_kind_count=totals.item_kind_count,
            total_quantity=totals.total_quantity,
            source=source,
            updated_at=updated_at,
        )

    def with_items(self, items: Iterable[LineItem], updated_at: Optional[datetime] = None) -> "Cart":
        """New cart with the given items and freshly computed aggregates"""
        return Cart.build(
            cart_id=self.cart_id,
            owner_key=self.owner_key,
            items=items,
            source=self.source,
            updated_at=updated_at if updated_at is not None else self.updated_at,
            currency=self.total.currency,
        )

    @property
    def currency(self) -> str:
        return self.total.currency

    def is_empty(self) -> bool:
        """A cart with no lines is treated as no cart for display purposes"""
        return not self.items

    def find_item(self, product_id: int) -> Optional[LineItem]:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def __str__(self) -> str:
        return (
            f"Cart(id={self.cart_id}, owner={self.owner_key}, "
            f"items={self.item_kind_count}, qty={self.total_quantity}, total={self.total})"
        )
