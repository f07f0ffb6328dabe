"""
Application DTOs
"""

from .cart_dtos import CartListing, CartOperationResponse, DeleteOutcome, ListFilter

__all__ = ["CartListing", "CartOperationResponse", "DeleteOutcome", "ListFilter"]
