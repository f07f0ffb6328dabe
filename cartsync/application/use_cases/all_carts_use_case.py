"""
All-carts use case

Lists every cart known to the durable store and the remote service, and
deletes carts by id from whichever source holds them.
"""

import logging
from typing import Dict, Iterable

from cartsync.application.dtos.cart_dtos import CartListing, DeleteOutcome, ListFilter
from cartsync.domain.entities.cart_entity import Cart
from cartsync.domain.repositories.cart_repository import CartRepository
from cartsync.domain.repositories.remote_cart_gateway import RemoteCartGateway, RemoteDeleteOutcome
from cartsync.domain.services.merge_policy import MergePolicy
from cartsync.domain.value_objects.cart_id import CartId
from cartsync.infrastructure.logging.logging_config import PerformanceLogger
from cartsync.infrastructure.utilities.exceptions import (
    GatewayUnavailableError,
    UnsupportedOperationError,
    ValidationError,
)


def _index_by_id(carts: Iterable[Cart]) -> Dict[int, Cart]:
    indexed: Dict[int, Cart] = {}
    for cart in carts:
        indexed.setdefault(cart.cart_id, cart)
    return indexed


class AllCartsUseCase:
    """
    Use case for the all-carts view

    Handles:
    1. Merging local and remote carts into one deduplicated listing
    2. Deleting a cart by id, locally first
    """

    def __init__(
        self,
        cart_repository: CartRepository,
        remote_gateway: RemoteCartGateway,
        merge_policy: MergePolicy = MergePolicy.LOCAL_WINS,
    ):
        self._cart_repository = cart_repository
        self._remote_gateway = remote_gateway
        self._merge_policy = merge_policy
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def merge_policy(self) -> MergePolicy:
        return self._merge_policy

    async def list_all(self, list_filter: ListFilter = ListFilter.ALL) -> CartListing:
        """Merged listing sorted by cart id, newest first"""
        with PerformanceLogger("list_all_carts", self._logger, {"filter": list_filter.value}):
            local = _index_by_id(await self._cart_repository.list_all())

            remote_available = True
            remote_error = None
            try:
                remote = _index_by_id(await self._remote_gateway.list_all())
            except GatewayUnavailableError as e:
                self._logger.warning("⚠️ REMOTE LISTING UNAVAILABLE, showing local carts only: %s", e)
                remote = {}
                remote_available = False
                remote_error = e.user_message

            merged = dict(local)
            for cart_id, remote_cart in remote.items():
                local_cart = local.get(cart_id)
                merged[cart_id] = (
                    remote_cart if local_cart is None else self._merge_policy.choose(local_cart, remote_cart)
                )

            if list_filter is ListFilter.LOCAL_ONLY:
                selected = local.keys()
            elif list_filter is ListFilter.REMOTE_ONLY:
                selected = remote.keys() - local.keys()
            else:
                selected = merged.keys()

            carts = sorted((merged[cart_id] for cart_id in selected), key=lambda c: c.cart_id, reverse=True)

        self._logger.info(
            "📋 LISTED CARTS: %d shown (local=%d, remote=%d, remote available=%s)",
            len(carts),
            len(local),
            len(remote),
            remote_available,
        )
        return CartListing(
            carts=carts,
            local_count=len(local),
            remote_count=len(remote),
            remote_available=remote_available,
            remote_error=remote_error,
        )

    async def delete_cart(self, cart_id: int) -> DeleteOutcome:
        """Delete from the durable store if present, otherwise ask the remote service"""
        try:
            CartId(cart_id)
        except ValueError as e:
            raise ValidationError(str(e), "cart_id") from e

        if await self._cart_repository.get(cart_id) is not None:
            await self._cart_repository.delete(cart_id)
            self._logger.info("🗑️ DELETED LOCAL CART: %s", cart_id)
            return DeleteOutcome.LOCAL_DELETED

        outcome = await self._remote_gateway.delete(cart_id)
        if outcome is RemoteDeleteOutcome.UNSUPPORTED:
            self._logger.info("🚫 REMOTE DELETE UNSUPPORTED: cart %s", cart_id)
            raise UnsupportedOperationError("delete", cart_id)

        self._logger.info("🗑️ DELETED REMOTE CART: %s", cart_id)
        return DeleteOutcome.REMOTE_DELETED
