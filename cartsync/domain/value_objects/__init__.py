"""
Domain value objects package

Contains immutable value objects that represent concepts in the cart domain.
"""

from .cart_id import CartId
from .money import Money
from .owner_key import OwnerKey
from .product_id import ProductId

__all__ = [
    "CartId",
    "Money",
    "OwnerKey",
    "ProductId",
]
