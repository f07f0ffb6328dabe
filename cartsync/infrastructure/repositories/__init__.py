"""
Durable cart store implementations.
"""

from .in_memory_cart_repository import InMemoryCartRepository
from .sqlalchemy_cart_repository import SQLAlchemyCartRepository

__all__ = ["InMemoryCartRepository", "SQLAlchemyCartRepository"]
