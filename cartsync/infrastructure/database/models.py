# pylint: disable=too-few-public-methods
"""
SQLAlchemy database models for the durable cart store
"""

from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Declarative base for cart store models"""


class CartRecord(Base):
    """Persisted cart with its line items and aggregates"""

    __tablename__ = "carts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    owner_key: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    # Line items as JSON; money values are stored as decimal strings
    items: Mapped[List[Any]] = mapped_column(JSON, default=list, nullable=False)
    total: Mapped[str] = mapped_column(String(32), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    item_kind_count: Mapped[int] = mapped_column(Integer, nullable=False)
    total_quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    source: Mapped[str] = mapped_column(String(10), default="local", nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
