"""
Domain entities package

Contains the core business entities of the cart engine.
"""

from .cart_entity import Cart, CartSource, LineItem

__all__ = ["Cart", "CartSource", "LineItem"]
