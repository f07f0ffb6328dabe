"""
Use Cases

Each use case represents a single cart workflow.
"""

from .all_carts_use_case import AllCartsUseCase
from .cart_commands import CartCommands
from .cart_reconciliation_use_case import CartReconciliationUseCase
from .cart_session import CartSession, ResolutionState

__all__ = [
    "AllCartsUseCase",
    "CartCommands",
    "CartReconciliationUseCase",
    "CartSession",
    "ResolutionState",
]
