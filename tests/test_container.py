"""
Dependency Container Tests
"""

import httpx
import pytest

from cartsync.domain.entities.cart_entity import CartSource
from cartsync.domain.services.merge_policy import MergePolicy
from cartsync.domain.value_objects.money import Money
from cartsync.domain.value_objects.owner_key import OwnerKey
from cartsync.infrastructure.configuration.config import Settings
from cartsync.infrastructure.container.dependency_injection import (
    DependencyContainer,
    get_container,
    reset_container,
)
from cartsync.infrastructure.identity.session_identity_provider import SessionIdentityProvider

BASE_URL = "https://carts.test"


def remote_service(request: httpx.Request) -> httpx.Response:
    """Minimal DummyJSON stand-in"""
    path = request.url.path
    if path.startswith("/carts/user/"):
        return httpx.Response(404, json={"message": "User not found"})
    if path.startswith("/products/"):
        product_id = int(path.rsplit("/", 1)[-1])
        return httpx.Response(200, json={"id": product_id, "title": "Lamp", "price": 12.5, "thumbnail": ""})
    if path == "/carts":
        return httpx.Response(
            200,
            json={
                "carts": [{"id": 3, "userId": 2, "products": [{"id": 1, "price": 1.0, "quantity": 2}]}],
                "total": 1,
            },
        )
    return httpx.Response(404)


@pytest.fixture
def container():
    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(remote_service))
    settings = Settings(database_url="sqlite:///:memory:", remote_base_url=BASE_URL)
    container = DependencyContainer(settings, http_client=client)
    yield container
    container.cleanup()


class TestDependencyContainer:
    """Test wiring from Settings"""

    @pytest.mark.asyncio
    async def test_end_to_end_add_and_list(self, container, make_cart):
        """Test a wired engine prices from the catalog and ids above stored carts"""
        await container.get_cart_repository().put(make_cart(1_000_050, 3))
        await container.initialize()
        commands = container.get_cart_commands()
        session = container.new_session()

        await commands.identity_changed(session, 7)
        response = await commands.add_item(session, 101, 2)

        assert response.success is True
        assert response.cart.cart_id == 1_000_051
        assert response.cart.total == Money.of("25.00")
        assert response.cart.find_item(101).title == "Lamp"

        listing = (await commands.list_all()).listing
        assert listing.cart_ids == [1_000_051, 1_000_050, 3]
        assert listing.carts[-1].source is CartSource.REMOTE

        await container.aclose()

    @pytest.mark.asyncio
    async def test_aclose_leaves_injected_client_open(self):
        """Test a shared client passed in by the caller is not closed by the container"""
        client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(remote_service))
        settings = Settings(database_url="sqlite:///:memory:", remote_base_url=BASE_URL)
        container = DependencyContainer(settings, http_client=client)

        await container.aclose()

        assert client.is_closed is False
        response = await client.get("/products/1")
        assert response.json()["title"] == "Lamp"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_bind_session_follows_login(self, container):
        session = container.new_session()
        provider = SessionIdentityProvider()
        container.bind_session(provider, session)

        await provider.login(37)

        assert session.owner_key == OwnerKey(7)
        assert session.is_ready
        assert session.current_cart is None

        await container.aclose()

    def test_merge_policy_from_settings(self):
        settings = Settings(database_url="sqlite:///:memory:", merge_policy="remote_wins")
        container = DependencyContainer(settings)
        try:
            assert container.get_all_carts_use_case().merge_policy is MergePolicy.REMOTE_WINS
            assert container.get_identity_mapper().bound == 30
        finally:
            container.cleanup()

    def test_global_container(self):
        try:
            assert get_container() is get_container()
        finally:
            reset_container()
