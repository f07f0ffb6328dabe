"""
All-Carts Use Case Tests
"""

from datetime import datetime, timezone

import pytest

from cartsync.application.dtos.cart_dtos import DeleteOutcome, ListFilter
from cartsync.application.use_cases.all_carts_use_case import AllCartsUseCase
from cartsync.domain.entities.cart_entity import CartSource
from cartsync.domain.services.merge_policy import MergePolicy
from cartsync.infrastructure.utilities.exceptions import (
    GatewayUnavailableError,
    NotFoundError,
    UnsupportedOperationError,
    ValidationError,
)


class TestListAll:
    """Test the merged listing"""

    @pytest.mark.asyncio
    async def test_local_version_wins_on_collision(self, all_carts, repository, remote_gateway, make_cart):
        """Test a cart id known to both sources is listed once, from the store"""
        local = make_cart(5, 7, [(1, 1, "3.00")])
        await repository.put(local)
        remote_gateway.carts[5] = make_cart(5, 7, [(2, 9, "1.00")], source=CartSource.REMOTE)

        listing = await all_carts.list_all(ListFilter.ALL)

        assert listing.cart_ids == [5]
        assert listing.carts[0] == local

    @pytest.mark.asyncio
    async def test_sorted_descending_with_counts(self, all_carts, repository, remote_gateway, make_cart):
        await repository.put(make_cart(1_000_001, 7))
        await repository.put(make_cart(5, 7))
        remote_gateway.carts[3] = make_cart(3, 2, source=CartSource.REMOTE)
        remote_gateway.carts[5] = make_cart(5, 7, source=CartSource.REMOTE)
        remote_gateway.carts[20] = make_cart(20, 4, source=CartSource.REMOTE)

        listing = await all_carts.list_all()

        assert listing.cart_ids == [1_000_001, 20, 5, 3]
        assert listing.local_count == 2
        assert listing.remote_count == 3
        assert listing.remote_available is True
        assert listing.remote_error is None

    @pytest.mark.asyncio
    async def test_filters(self, all_carts, repository, remote_gateway, make_cart):
        await repository.put(make_cart(5, 7))
        await repository.put(make_cart(8, 7))
        remote_gateway.carts[5] = make_cart(5, 7, source=CartSource.REMOTE)
        remote_gateway.carts[2] = make_cart(2, 1, source=CartSource.REMOTE)

        local_only = await all_carts.list_all(ListFilter.LOCAL_ONLY)
        remote_only = await all_carts.list_all(ListFilter.REMOTE_ONLY)

        assert local_only.cart_ids == [8, 5]
        assert remote_only.cart_ids == [2]

    @pytest.mark.asyncio
    async def test_remote_failure_degrades_to_local(self, all_carts, repository, remote_gateway, make_cart):
        """Test an unavailable remote still yields the local carts"""
        await repository.put(make_cart(5, 7))
        remote_gateway.available = False

        listing = await all_carts.list_all()

        assert listing.cart_ids == [5]
        assert listing.remote_available is False
        assert listing.remote_error
        assert listing.remote_count == 0

    @pytest.mark.asyncio
    async def test_remote_wins_policy(self, repository, remote_gateway, make_cart):
        await repository.put(make_cart(5, 7, [(1, 1, "3.00")]))
        remote = make_cart(5, 7, [(2, 2, "1.00")], source=CartSource.REMOTE)
        remote_gateway.carts[5] = remote
        use_case = AllCartsUseCase(repository, remote_gateway, MergePolicy.REMOTE_WINS)

        listing = await use_case.list_all()

        assert listing.carts == [remote]

    @pytest.mark.asyncio
    async def test_most_recent_policy(self, repository, remote_gateway, make_cart):
        newer = make_cart(
            5, 7, [(1, 1, "3.00")], updated_at=datetime(2026, 5, 1, tzinfo=timezone.utc)
        )
        await repository.put(newer)
        remote_gateway.carts[5] = make_cart(
            5,
            7,
            [(2, 2, "1.00")],
            source=CartSource.REMOTE,
            updated_at=datetime(2026, 4, 1, tzinfo=timezone.utc),
        )
        use_case = AllCartsUseCase(repository, remote_gateway, MergePolicy.MOST_RECENT)

        listing = await use_case.list_all()

        assert listing.carts == [newer]


class TestDeleteCart:
    """Test delete-by-id"""

    @pytest.mark.asyncio
    async def test_delete_local(self, all_carts, repository, remote_gateway, make_cart):
        await repository.put(make_cart(5, 7))

        outcome = await all_carts.delete_cart(5)

        assert outcome is DeleteOutcome.LOCAL_DELETED
        assert await repository.get(5) is None
        assert remote_gateway.call_count("delete") == 0

    @pytest.mark.asyncio
    async def test_delete_remote_only_read_only(self, all_carts, remote_gateway, make_cart):
        """Test a read-only remote cart cannot be deleted and stays listed"""
        remote_gateway.carts[5] = make_cart(5, 7, source=CartSource.REMOTE)

        with pytest.raises(UnsupportedOperationError):
            await all_carts.delete_cart(5)

        listing = await all_carts.list_all(ListFilter.ALL)
        assert 5 in listing.cart_ids

    @pytest.mark.asyncio
    async def test_delete_remote_writable(self, all_carts, remote_gateway, make_cart):
        remote_gateway.read_only = False
        remote_gateway.carts[5] = make_cart(5, 7, source=CartSource.REMOTE)

        assert await all_carts.delete_cart(5) is DeleteOutcome.REMOTE_DELETED
        assert 5 not in (await all_carts.list_all()).cart_ids

    @pytest.mark.asyncio
    async def test_delete_absent_everywhere(self, all_carts):
        with pytest.raises(NotFoundError):
            await all_carts.delete_cart(77)

    @pytest.mark.asyncio
    async def test_delete_with_remote_down(self, all_carts, remote_gateway):
        remote_gateway.available = False
        with pytest.raises(GatewayUnavailableError):
            await all_carts.delete_cart(77)

    @pytest.mark.asyncio
    async def test_delete_invalid_id(self, all_carts):
        with pytest.raises(ValidationError):
            await all_carts.delete_cart(0)
