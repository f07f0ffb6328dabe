"""
Database Infrastructure

Contains SQLAlchemy models and connection management for the durable store.
"""

from .models import Base, CartRecord
from .operations import DatabaseManager, get_db_manager, get_session

__all__ = [
    "Base",
    "CartRecord",
    "DatabaseManager",
    "get_db_manager",
    "get_session",
]
