"""
Cart reconciliation use case

Owns the current cart of a CartSession: resolves it from the durable store or
the remote service, applies mutations, recomputes aggregates and persists.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from cartsync.application.use_cases.cart_session import CartSession, ResolutionState
from cartsync.domain.entities.cart_entity import Cart, CartSource, LineItem
from cartsync.domain.repositories.cart_repository import CartRepository
from cartsync.domain.repositories.price_resolver import PriceResolver, ProductQuote
from cartsync.domain.repositories.remote_cart_gateway import RemoteCartGateway
from cartsync.domain.services.cart_id_allocator import MonotonicCartIdAllocator
from cartsync.domain.services.identity_mapper import IdentityMapper
from cartsync.domain.value_objects.money import DEFAULT_CURRENCY
from cartsync.domain.value_objects.owner_key import OwnerKey
from cartsync.domain.value_objects.product_id import ProductId
from cartsync.infrastructure.utilities.exceptions import (
    GatewayUnavailableError,
    InvalidQuantityError,
    NoOwnerError,
    StoreUnavailableError,
    ValidationError,
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CartReconciliationUseCase:
    """
    Use case for the session's current cart

    Handles:
    1. Resolving the current cart (durable store first, remote second)
    2. Adding, removing and re-quantifying line items
    3. Clearing and refreshing the current cart
    4. Reacting to identity changes

    Operations for the same owner key never interleave; each one runs under
    that owner's lock.
    """

    def __init__(
        self,
        cart_repository: CartRepository,
        remote_gateway: RemoteCartGateway,
        price_resolver: PriceResolver,
        id_allocator: MonotonicCartIdAllocator,
        identity_mapper: IdentityMapper,
        clock: Callable[[], datetime] = _utc_now,
        currency: str = DEFAULT_CURRENCY,
    ):
        self._cart_repository = cart_repository
        self._remote_gateway = remote_gateway
        self._price_resolver = price_resolver
        self._id_allocator = id_allocator
        self._identity_mapper = identity_mapper
        self._clock = clock
        self._currency = currency
        self._owner_locks: Dict[int, asyncio.Lock] = {}
        self._logger = logging.getLogger(self.__class__.__name__)

    def _lock_for(self, owner_key: OwnerKey) -> asyncio.Lock:
        lock = self._owner_locks.get(owner_key.value)
        if lock is None:
            lock = asyncio.Lock()
            self._owner_locks[owner_key.value] = lock
        return lock

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    async def resolve(self, session: CartSession, owner_key: OwnerKey) -> Optional[Cart]:
        """Load the owner's current cart into the session"""
        if not isinstance(owner_key, OwnerKey):
            raise TypeError("resolve() takes an OwnerKey; map raw identities with identity_changed()")
        if owner_key.value > self._identity_mapper.bound:
            raise ValidationError(
                f"Owner key {owner_key.value} is outside 1..{self._identity_mapper.bound}", "owner_key"
            )
        async with self._lock_for(owner_key):
            return await self._resolve_locked(session, owner_key)

    async def _resolve_locked(self, session: CartSession, owner_key: OwnerKey) -> Optional[Cart]:
        self._logger.info("🔎 RESOLVE: owner %s", owner_key.value)
        if session.owner_key != owner_key:
            session.current_cart = None
        session.owner_key = owner_key
        session.state = ResolutionState.RESOLVING
        session.last_error = None

        try:
            stored = await self._cart_repository.get_by_owner(owner_key.value)
        except StoreUnavailableError:
            session.state = ResolutionState.UNRESOLVED
            raise

        if stored is not None:
            self._id_allocator.observe(stored.cart_id)
            self._logger.info("💾 RESOLVED FROM STORE: owner %s -> %s", owner_key.value, stored)
            return self._settle(session, stored)

        try:
            remote = await self._remote_gateway.get_by_owner(owner_key.value)
        except GatewayUnavailableError as e:
            self._logger.warning(
                "⚠️ REMOTE UNAVAILABLE resolving owner %s, continuing without a cart: %s",
                owner_key.value,
                e,
            )
            session.last_error = e.error_code
            return self._settle(session, None)

        if remote is None:
            self._logger.info("📭 NO CART: owner %s has no stored or remote cart", owner_key.value)
            return self._settle(session, None)

        adopted = Cart.build(
            cart_id=remote.cart_id,
            owner_key=owner_key.value,
            items=remote.items,
            source=CartSource.REMOTE,
            updated_at=self._clock(),
            currency=remote.currency,
        )
        try:
            await self._cart_repository.put(adopted)
        except StoreUnavailableError:
            session.state = ResolutionState.UNRESOLVED
            raise
        self._id_allocator.observe(adopted.cart_id)
        self._logger.info("🌐 ADOPTED REMOTE CART: owner %s -> %s", owner_key.value, adopted)
        return self._settle(session, adopted)

    @staticmethod
    def _settle(session: CartSession, cart: Optional[Cart]) -> Optional[Cart]:
        session.current_cart = cart
        session.state = ResolutionState.READY
        return cart

    async def refresh(self, session: CartSession) -> Optional[Cart]:
        """Re-read the durable store and, absent a record, the remote service"""
        if session.owner_key is None:
            self._logger.debug("REFRESH skipped: no owner")
            return None
        return await self.resolve(session, session.owner_key)

    async def identity_changed(self, session: CartSession, identity: Optional[int]) -> Optional[Cart]:
        """Map a raw identity to its owner key and resolve; None logs the session out"""
        if identity is None:
            self._logger.info("👋 IDENTITY CLEARED: dropping session cart view")
            session.identity = None
            session.owner_key = None
            session.current_cart = None
            session.last_error = None
            session.state = ResolutionState.UNRESOLVED
            return None

        owner_key = self._identity_mapper.owner_key_of(identity)
        session.identity = identity
        self._logger.info("👤 IDENTITY CHANGED: %s -> owner %s", identity, owner_key.value)
        return await self.resolve(session, owner_key)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add_item(
        self,
        session: CartSession,
        product_id: int,
        quantity: int = 1,
        quote: Optional[ProductQuote] = None,
    ) -> Cart:
        """Add a product, creating the cart on first use"""
        owner_key = session.owner_key
        if owner_key is None:
            raise NoOwnerError("add_item")
        self._validate_product_id(product_id)
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise InvalidQuantityError(quantity)
        if quote is not None and quote.product_id != product_id:
            raise ValidationError(
                f"Quote is for product {quote.product_id}, not {product_id}", "quote"
            )

        self._logger.info(
            "🛒 ADD ITEM: owner %s, product %s, qty %s", owner_key.value, product_id, quantity
        )
        async with self._lock_for(owner_key):
            if not session.is_ready:
                await self._resolve_locked(session, owner_key)

            cart = session.current_cart
            if cart is None:
                cart = Cart.build(
                    cart_id=self._id_allocator.next_id(),
                    owner_key=owner_key.value,
                    source=CartSource.LOCAL,
                    currency=self._currency,
                )
                self._logger.info("🆕 CART CREATED: %s for owner %s", cart.cart_id, owner_key.value)

            existing = cart.find_item(product_id)
            if existing is not None:
                items = [
                    item.with_quantity(item.quantity + quantity) if item.product_id == product_id else item
                    for item in cart.items
                ]
            else:
                if quote is None:
                    quote = await self._price_resolver.quote(product_id)
                self._validate_quote_currency(quote, cart.currency)
                if quote.is_fallback:
                    self._logger.info("💲 FALLBACK PRICE for product %s: %s", product_id, quote.unit_price)
                new_item = LineItem.create(
                    product_id=product_id,
                    quantity=quantity,
                    unit_price=quote.unit_price,
                    title=quote.title,
                    thumbnail=quote.thumbnail,
                )
                items = [*cart.items, new_item]

            return await self._commit(session, cart.with_items(items, updated_at=self._clock()))

    async def remove_item(self, session: CartSession, product_id: int) -> Optional[Cart]:
        """Remove a product line; a cart left with no lines stays in the store"""
        owner_key = session.owner_key
        if owner_key is None:
            self._logger.debug("REMOVE ITEM skipped: no owner")
            return None

        async with self._lock_for(owner_key):
            cart = session.current_cart
            if cart is None or cart.find_item(product_id) is None:
                self._logger.debug("REMOVE ITEM no-op: product %s not in cart", product_id)
                return cart

            self._logger.info("➖ REMOVE ITEM: owner %s, product %s", owner_key.value, product_id)
            items = [item for item in cart.items if item.product_id != product_id]
            return await self._commit(session, cart.with_items(items, updated_at=self._clock()))

    async def update_quantity(self, session: CartSession, product_id: int, quantity: int) -> Optional[Cart]:
        """Set a line's quantity; below 1 removes the line, unknown lines are ignored"""
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InvalidQuantityError(quantity)
        if quantity < 1:
            return await self.remove_item(session, product_id)

        owner_key = session.owner_key
        if owner_key is None:
            self._logger.debug("UPDATE QUANTITY skipped: no owner")
            return None

        async with self._lock_for(owner_key):
            cart = session.current_cart
            if cart is None or cart.find_item(product_id) is None:
                # Stale UI state: nothing to update
                self._logger.debug("UPDATE QUANTITY no-op: product %s not in cart", product_id)
                return cart

            self._logger.info(
                "🔄 UPDATE QUANTITY: owner %s, product %s -> %s", owner_key.value, product_id, quantity
            )
            items = [
                item.with_quantity(quantity) if item.product_id == product_id else item
                for item in cart.items
            ]
            return await self._commit(session, cart.with_items(items, updated_at=self._clock()))

    async def clear(self, session: CartSession) -> None:
        """Delete the current cart from the store and the session"""
        owner_key = session.owner_key
        if owner_key is None:
            return

        async with self._lock_for(owner_key):
            cart = session.current_cart
            if cart is None:
                return
            self._logger.info("🗑️ CLEAR CART: %s for owner %s", cart.cart_id, owner_key.value)
            try:
                await self._cart_repository.delete(cart.cart_id)
            except StoreUnavailableError as e:
                self._logger.error("💥 STORE DELETE FAILED for cart %s: %s", cart.cart_id, e, exc_info=True)
                raise
            session.current_cart = None

    def forget_cart(self, session: CartSession, cart_id: int) -> None:
        """Drop the session view of a cart deleted elsewhere"""
        if session.current_cart is not None and session.current_cart.cart_id == cart_id:
            session.current_cart = None

    async def _commit(self, session: CartSession, cart: Cart) -> Cart:
        """Persist first, then publish to the session"""
        try:
            await self._cart_repository.put(cart)
        except StoreUnavailableError as e:
            self._logger.error("💥 STORE WRITE FAILED for cart %s: %s", cart.cart_id, e, exc_info=True)
            raise
        session.current_cart = cart
        self._logger.info(
            "📊 CART SAVED: %s items=%d qty=%d total=%s",
            cart.cart_id,
            cart.item_kind_count,
            cart.total_quantity,
            cart.total,
        )
        return cart

    @staticmethod
    def _validate_product_id(product_id: int) -> None:
        try:
            ProductId(product_id)
        except ValueError as e:
            raise ValidationError(str(e), "product_id") from e

    @staticmethod
    def _validate_quote_currency(quote: ProductQuote, currency: str) -> None:
        if quote.unit_price.currency != currency:
            raise ValidationError(
                f"Quote for product {quote.product_id} is in {quote.unit_price.currency}, cart is in {currency}",
                "quote",
            )
