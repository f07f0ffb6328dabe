"""
SQLAlchemy Cart Repository

Concrete implementation of CartRepository using SQLAlchemy ORM.
"""

import logging
from datetime import timezone
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.orm import Session

from cartsync.domain.entities.cart_entity import Cart, CartSource, LineItem
from cartsync.domain.repositories.cart_repository import CartRepository
from cartsync.domain.value_objects.money import Money
from cartsync.infrastructure.database.models import CartRecord
from cartsync.infrastructure.database.operations import get_session
from cartsync.infrastructure.repositories.session_handler import managed_session


def _item_to_json(item: LineItem) -> Dict[str, Any]:
    return {
        "product_id": item.product_id,
        "quantity": item.quantity,
        "unit_price": item.unit_price.to_string(),
        "line_total": item.line_total.to_string(),
        "title": item.title,
        "thumbnail": item.thumbnail,
    }


def _item_from_json(data: Dict[str, Any], currency: str) -> LineItem:
    return LineItem(
        product_id=int(data["product_id"]),
        quantity=int(data["quantity"]),
        unit_price=Money(Decimal(data["unit_price"]), currency),
        line_total=Money(Decimal(data["line_total"]), currency),
        title=data.get("title", ""),
        thumbnail=data.get("thumbnail", ""),
    )


def record_to_cart(record: CartRecord) -> Cart:
    """Rebuild a domain cart; stored aggregates are validated against the items"""
    currency = record.currency
    updated_at = record.updated_at
    # SQLite drops tzinfo on the way back
    if updated_at is not None and updated_at.tzinfo is None:
        updated_at = updated_at.replace(tzinfo=timezone.utc)
    return Cart(
        cart_id=record.id,
        owner_key=record.owner_key,
        items=tuple(_item_from_json(item, currency) for item in record.items or []),
        total=Money(Decimal(record.total), currency),
        item_kind_count=record.item_kind_count,
        total_quantity=record.total_quantity,
        source=CartSource(record.source),
        updated_at=updated_at,
    )


def apply_cart_to_record(cart: Cart, record: CartRecord) -> None:
    record.owner_key = cart.owner_key
    record.items = [_item_to_json(item) for item in cart.items]
    record.total = cart.total.to_string()
    record.currency = cart.currency
    record.item_kind_count = cart.item_kind_count
    record.total_quantity = cart.total_quantity
    record.source = cart.source.value
    record.updated_at = cart.updated_at


class SQLAlchemyCartRepository(CartRepository):
    """SQLAlchemy implementation of the durable cart store"""

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None):
        self._session_factory = session_factory or get_session
        self._logger = logging.getLogger(self.__class__.__name__)

    async def get(self, cart_id: int) -> Optional[Cart]:
        self._logger.debug("🔍 GET CART: %s", cart_id)
        with managed_session(self._session_factory, "get") as session:
            record = session.get(CartRecord, cart_id)
            return record_to_cart(record) if record else None

    async def get_by_owner(self, owner_key: int) -> Optional[Cart]:
        self._logger.debug("🔍 GET CART BY OWNER: %s", owner_key)
        with managed_session(self._session_factory, "get_by_owner") as session:
            record = (
                session.query(CartRecord)
                .filter(CartRecord.owner_key == owner_key)
                .order_by(CartRecord.id.desc())
                .first()
            )
            if not record:
                self._logger.debug("📭 NO CART: owner %s has no stored cart", owner_key)
                return None
            return record_to_cart(record)

    async def put(self, cart: Cart) -> None:
        self._logger.info(
            "💾 PUT CART: id=%s owner=%s items=%d total=%s",
            cart.cart_id,
            cart.owner_key,
            cart.item_kind_count,
            cart.total,
        )
        with managed_session(self._session_factory, "put") as session:
            record = session.get(CartRecord, cart.cart_id)
            if record is None:
                record = CartRecord(id=cart.cart_id)
                session.add(record)
            apply_cart_to_record(cart, record)

    async def delete(self, cart_id: int) -> bool:
        self._logger.info("🗑️ DELETE CART: %s", cart_id)
        with managed_session(self._session_factory, "delete") as session:
            record = session.get(CartRecord, cart_id)
            if record is None:
                return False
            session.delete(record)
            return True

    async def list_all(self) -> List[Cart]:
        with managed_session(self._session_factory, "list_all") as session:
            records = session.query(CartRecord).order_by(CartRecord.id.desc()).all()
            self._logger.debug("📋 LIST CARTS: %d stored", len(records))
            return [record_to_cart(record) for record in records]
