"""
Pydantic models for remote cart service payloads

Remote aggregates (``total``, ``totalProducts``, ``totalQuantity``) are read
but never trusted; carts are rebuilt from their product lines.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from cartsync.domain.entities.cart_entity import Cart, CartSource, LineItem
from cartsync.domain.value_objects.money import DEFAULT_CURRENCY, Money


class RemoteCartProduct(BaseModel):
    """Product line as returned by the remote service"""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(gt=0)
    title: str = ""
    price: float = Field(default=0.0, ge=0)
    quantity: int = Field(ge=1)
    thumbnail: str = ""


class RemoteCart(BaseModel):
    """Cart as returned by the remote service"""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int = Field(gt=0)
    user_id: int = Field(alias="userId", gt=0)
    products: List[RemoteCartProduct] = Field(default_factory=list)

    def to_cart(self, currency: str = DEFAULT_CURRENCY) -> Cart:
        """Convert to a domain cart, folding repeated product lines together"""
        lines: Dict[int, LineItem] = {}
        for product in self.products:
            existing = lines.get(product.id)
            if existing is not None:
                lines[product.id] = existing.with_quantity(existing.quantity + product.quantity)
                continue
            lines[product.id] = LineItem.create(
                product_id=product.id,
                quantity=product.quantity,
                unit_price=Money.of(product.price, currency),
                title=product.title,
                thumbnail=product.thumbnail,
            )
        return Cart.build(
            cart_id=self.id,
            owner_key=self.user_id,
            items=lines.values(),
            source=CartSource.REMOTE,
            currency=currency,
        )


class RemoteCartList(BaseModel):
    """Paged cart listing"""

    model_config = ConfigDict(extra="ignore")

    carts: List[RemoteCart] = Field(default_factory=list)
    total: int = 0
    skip: int = 0
    limit: int = 0


class RemoteProduct(BaseModel):
    """Catalog product"""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(gt=0)
    title: str = ""
    price: float = Field(ge=0)
    thumbnail: str = ""
