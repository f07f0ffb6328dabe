"""
Cart commands

The surface a user interface calls. Wraps the cart use cases and turns their
errors into CartOperationResponse objects.
"""

import logging
from typing import Awaitable, Callable, Optional

from cartsync.application.dtos.cart_dtos import CartListing, CartOperationResponse, ListFilter
from cartsync.application.use_cases.all_carts_use_case import AllCartsUseCase
from cartsync.application.use_cases.cart_reconciliation_use_case import CartReconciliationUseCase
from cartsync.application.use_cases.cart_session import CartSession
from cartsync.domain.repositories.price_resolver import ProductQuote
from cartsync.domain.value_objects.owner_key import OwnerKey
from cartsync.infrastructure.identity.session_identity_provider import SessionIdentityProvider
from cartsync.infrastructure.utilities.exceptions import CartEngineError, ValidationError


class CartCommands:
    """Command facade over the reconciliation and all-carts use cases"""

    def __init__(self, reconciliation: CartReconciliationUseCase, all_carts: AllCartsUseCase):
        self._reconciliation = reconciliation
        self._all_carts = all_carts
        self._logger = logging.getLogger(self.__class__.__name__)

    def bind(self, provider: SessionIdentityProvider, session: CartSession) -> Callable[[], None]:
        """Follow the provider's identity changes with the given session"""

        async def on_identity_change(identity: Optional[int]) -> None:
            response = await self.identity_changed(session, identity)
            if not response.success:
                self._logger.warning(
                    "⚠️ IDENTITY CHANGE not applied for %s: %s", identity, response.error_message
                )

        return provider.subscribe(on_identity_change)

    async def resolve(self, session: CartSession, owner_key: int) -> CartOperationResponse:
        try:
            key = OwnerKey(owner_key)
        except ValueError as e:
            return self._failure("resolve", ValidationError(str(e), "owner_key"), session)
        return await self._run("resolve", session, lambda: self._reconciliation.resolve(session, key))

    async def add_item(
        self,
        session: CartSession,
        product_id: int,
        quantity: int = 1,
        quote: Optional[ProductQuote] = None,
    ) -> CartOperationResponse:
        return await self._run(
            "add_item",
            session,
            lambda: self._reconciliation.add_item(session, product_id, quantity, quote),
        )

    async def remove_item(self, session: CartSession, product_id: int) -> CartOperationResponse:
        return await self._run(
            "remove_item", session, lambda: self._reconciliation.remove_item(session, product_id)
        )

    async def update_quantity(
        self, session: CartSession, product_id: int, quantity: int
    ) -> CartOperationResponse:
        return await self._run(
            "update_quantity",
            session,
            lambda: self._reconciliation.update_quantity(session, product_id, quantity),
        )

    async def clear(self, session: CartSession) -> CartOperationResponse:
        return await self._run("clear", session, lambda: self._reconciliation.clear(session))

    async def refresh(self, session: CartSession) -> CartOperationResponse:
        return await self._run("refresh", session, lambda: self._reconciliation.refresh(session))

    async def identity_changed(self, session: CartSession, identity: Optional[int]) -> CartOperationResponse:
        return await self._run(
            "identity_changed",
            session,
            lambda: self._reconciliation.identity_changed(session, identity),
        )

    async def list_all(self, list_filter: ListFilter = ListFilter.ALL) -> CartOperationResponse:
        try:
            listing: CartListing = await self._all_carts.list_all(list_filter)
        except CartEngineError as e:
            return self._failure("list_all", e)
        return CartOperationResponse(success=True, listing=listing)

    async def delete_cart(self, cart_id: int, session: Optional[CartSession] = None) -> CartOperationResponse:
        """Delete a cart by id; a session viewing that cart stops showing it"""
        try:
            outcome = await self._all_carts.delete_cart(cart_id)
        except CartEngineError as e:
            return self._failure("delete_cart", e)
        if session is not None:
            self._reconciliation.forget_cart(session, cart_id)
        return CartOperationResponse(success=True, outcome=outcome)

    async def _run(
        self,
        operation: str,
        session: CartSession,
        action: Callable[[], Awaitable[object]],
    ) -> CartOperationResponse:
        try:
            await action()
        except CartEngineError as e:
            return self._failure(operation, e, session)
        return CartOperationResponse(success=True, cart=session.display_cart)

    def _failure(
        self, operation: str, error: CartEngineError, session: Optional[CartSession] = None
    ) -> CartOperationResponse:
        self._logger.warning("💥 %s FAILED [%s]: %s", operation.upper(), error.error_code, error)
        return CartOperationResponse(
            success=False,
            cart=session.display_cart if session is not None else None,
            error_code=error.error_code,
            error_message=error.user_message,
        )
