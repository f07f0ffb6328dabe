"""
Dependency Injection Container

Builds the cart engine from Settings and manages the lifecycle of its
resources (database engine, HTTP clients).
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

import httpx

from cartsync.application.use_cases.all_carts_use_case import AllCartsUseCase
from cartsync.application.use_cases.cart_commands import CartCommands
from cartsync.application.use_cases.cart_reconciliation_use_case import CartReconciliationUseCase
from cartsync.application.use_cases.cart_session import CartSession
from cartsync.domain.repositories.cart_repository import CartRepository
from cartsync.domain.repositories.price_resolver import PriceResolver
from cartsync.domain.repositories.remote_cart_gateway import RemoteCartGateway
from cartsync.domain.services.cart_id_allocator import MonotonicCartIdAllocator
from cartsync.domain.services.identity_mapper import IdentityMapper
from cartsync.domain.services.merge_policy import MergePolicy
from cartsync.infrastructure.cache.quote_cache import ProductQuoteCache
from cartsync.infrastructure.configuration.config import Settings, get_config
from cartsync.infrastructure.database.operations import DatabaseManager
from cartsync.infrastructure.identity.session_identity_provider import SessionIdentityProvider
from cartsync.infrastructure.remote.dummyjson_catalog import DummyJsonProductCatalog
from cartsync.infrastructure.remote.dummyjson_gateway import DummyJsonCartGateway
from cartsync.infrastructure.repositories.sqlalchemy_cart_repository import SQLAlchemyCartRepository
from cartsync.infrastructure.services.price_resolvers import CatalogPriceResolver, FixedPriceResolver

logger = logging.getLogger(__name__)


class DependencyContainer:
    """
    Dependency injection container

    Manages the instantiation and lifecycle of:
    - The durable store and cart repository
    - Remote gateway and product catalog
    - Price resolvers, id allocator and identity mapper
    - Use cases and the command surface
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._instances: Dict[str, Any] = {}
        self._config = config or get_config()
        self._http_client = http_client
        self._clock = clock
        self._initialized = False
        self._logger = logging.getLogger(self.__class__.__name__)
        self._setup_dependencies()

    @property
    def config(self) -> Settings:
        return self._config

    def _setup_dependencies(self):
        """Setup all dependencies and their relationships"""
        self._logger.info("Setting up dependency injection container...")

        self._register_repositories()
        self._register_remote_adapters()
        self._register_services()
        self._register_use_cases()

        self._logger.info("Dependency injection container setup complete")

    def _register_repositories(self):
        db_manager = DatabaseManager(config=self._config)
        db_manager.create_tables()
        self._instances["db_manager"] = db_manager
        self._instances["cart_repository"] = SQLAlchemyCartRepository(db_manager.get_session_factory())
        self._logger.debug("Repositories registered successfully")

    def _register_remote_adapters(self):
        config = self._config
        self._instances["remote_gateway"] = DummyJsonCartGateway(
            base_url=config.remote_base_url,
            timeout=config.remote_timeout_seconds,
            read_only=config.remote_read_only,
            currency=config.currency,
            client=self._http_client,
        )
        self._instances["product_catalog"] = DummyJsonProductCatalog(
            base_url=config.remote_base_url,
            timeout=config.remote_timeout_seconds,
            currency=config.currency,
            client=self._http_client,
        )
        self._logger.debug("Remote adapters registered for %s", config.remote_base_url)

    def _register_services(self):
        config = self._config
        fallback = FixedPriceResolver(
            unit_price=config.fallback_unit_price,
            title_template=config.fallback_title_template,
            thumbnail=config.fallback_thumbnail,
            currency=config.currency,
        )
        self._instances["price_resolver"] = CatalogPriceResolver(
            catalog=self._instances["product_catalog"],
            fallback=fallback,
            cache=ProductQuoteCache(ttl_seconds=config.catalog_cache_ttl_seconds),
        )
        self._instances["id_allocator"] = MonotonicCartIdAllocator(floor=config.local_cart_id_floor)
        self._instances["identity_mapper"] = IdentityMapper(bound=config.owner_key_bound)
        self._logger.debug("Services registered successfully")

    def _register_use_cases(self):
        reconciliation_kwargs: Dict[str, Any] = {
            "cart_repository": self.get_cart_repository(),
            "remote_gateway": self.get_remote_gateway(),
            "price_resolver": self.get_price_resolver(),
            "id_allocator": self.get_id_allocator(),
            "identity_mapper": self.get_identity_mapper(),
            "currency": self._config.currency,
        }
        if self._clock is not None:
            reconciliation_kwargs["clock"] = self._clock

        self._instances["cart_reconciliation_use_case"] = CartReconciliationUseCase(**reconciliation_kwargs)
        self._instances["all_carts_use_case"] = AllCartsUseCase(
            cart_repository=self.get_cart_repository(),
            remote_gateway=self.get_remote_gateway(),
            merge_policy=MergePolicy(self._config.merge_policy),
        )
        self._instances["cart_commands"] = CartCommands(
            reconciliation=self.get_cart_reconciliation_use_case(),
            all_carts=self.get_all_carts_use_case(),
        )
        self._logger.debug("Use cases registered successfully")

    async def initialize(self) -> None:
        """Seed the id allocator from the durable store"""
        if self._initialized:
            return
        stored = await self.get_cart_repository().list_all()
        for cart in stored:
            self.get_id_allocator().observe(cart.cart_id)
        self._initialized = True
        self._logger.info("Container initialized with %d stored carts", len(stored))

    # Factories
    def new_session(self) -> CartSession:
        return CartSession()

    def bind_session(self, provider: SessionIdentityProvider, session: CartSession) -> Callable[[], None]:
        """Subscribe a session to an identity provider"""
        return self.get_cart_commands().bind(provider, session)

    # Getters
    def get_db_manager(self) -> DatabaseManager:
        return self._instances["db_manager"]

    def get_cart_repository(self) -> CartRepository:
        """Get cart repository instance"""
        return self._instances["cart_repository"]

    def get_remote_gateway(self) -> RemoteCartGateway:
        return self._instances["remote_gateway"]

    def get_product_catalog(self) -> DummyJsonProductCatalog:
        return self._instances["product_catalog"]

    def get_price_resolver(self) -> PriceResolver:
        return self._instances["price_resolver"]

    def get_id_allocator(self) -> MonotonicCartIdAllocator:
        return self._instances["id_allocator"]

    def get_identity_mapper(self) -> IdentityMapper:
        return self._instances["identity_mapper"]

    def get_cart_reconciliation_use_case(self) -> CartReconciliationUseCase:
        return self._instances["cart_reconciliation_use_case"]

    def get_all_carts_use_case(self) -> AllCartsUseCase:
        return self._instances["all_carts_use_case"]

    def get_cart_commands(self) -> CartCommands:
        """Get the command surface used by user interfaces"""
        return self._instances["cart_commands"]

    async def aclose(self) -> None:
        """Close HTTP clients and database connections"""
        if "remote_gateway" in self._instances:
            await self.get_remote_gateway().aclose()
        if "product_catalog" in self._instances:
            await self.get_product_catalog().aclose()
        self.cleanup()

    def cleanup(self):
        """Cleanup resources when shutting down"""
        self._logger.info("Cleaning up dependency container...")
        if "db_manager" in self._instances:
            self._instances["db_manager"].close()
        self._instances.clear()


# Global container instance
_container: Optional[DependencyContainer] = None


def get_container() -> DependencyContainer:
    """Get the global dependency container instance"""
    global _container
    if _container is None:
        _container = DependencyContainer()
    return _container


def reset_container():
    """Reset the global container (useful for testing)"""
    global _container
    if _container:
        _container.cleanup()
    _container = None
