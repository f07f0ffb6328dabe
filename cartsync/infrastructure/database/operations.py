"""
Database operations and connection management
"""

import logging
from pathlib import Path
from typing import Any, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from cartsync.infrastructure.configuration.config import get_config
from cartsync.infrastructure.database.models import Base
from cartsync.infrastructure.utilities.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Owns the engine and session factory for the durable store"""

    def __init__(self, config: Optional[Any] = None, database_url: Optional[str] = None):
        """Initialize database manager with configuration"""
        self.config = config or get_config()
        self.database_url = database_url or self.config.database_url
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self.logger = logging.getLogger(__name__)

    def get_engine(self) -> Engine:
        """Get database engine with proper configuration"""
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> Engine:
        """Create database engine with backend-specific settings"""
        engine_kwargs: dict[str, Any] = {"pool_pre_ping": True}

        # SQLite-specific configurations
        if self.database_url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in self.database_url or self.database_url == "sqlite://":
                # One shared connection so every session sees the same in-memory database
                engine_kwargs["poolclass"] = StaticPool
            else:
                self._ensure_sqlite_directory()

        return create_engine(self.database_url, **engine_kwargs)

    def _ensure_sqlite_directory(self) -> None:
        db_path = self.database_url.split("///", 1)[-1]
        if db_path:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    def get_session_factory(self) -> sessionmaker:
        """Get session factory"""
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self.get_engine(),
                expire_on_commit=False,
            )
        return self._session_factory

    def get_session(self) -> Session:
        """Get database session"""
        return self.get_session_factory()()

    def create_tables(self) -> None:
        """Create all database tables"""
        try:
            Base.metadata.create_all(self.get_engine())
            self.logger.info("Database tables created successfully")
        except SQLAlchemyError as e:
            self.logger.error("Failed to create database tables: %s", e, exc_info=True)
            raise StoreUnavailableError(f"Failed to create database tables: {e}", "create_tables") from e

    def drop_tables(self) -> None:
        """Drop all database tables"""
        try:
            Base.metadata.drop_all(self.get_engine())
            self.logger.info("Database tables dropped successfully")
        except SQLAlchemyError as e:
            self.logger.error("Failed to drop database tables: %s", e, exc_info=True)
            raise StoreUnavailableError(f"Failed to drop database tables: {e}", "drop_tables") from e

    def close(self) -> None:
        """Close database connections"""
        if self._engine:
            self._engine.dispose()
            self._engine = None
        self._session_factory = None
        self.logger.info("Database connections closed")


# Global database manager instance
_db_manager: Optional[DatabaseManager] = None


def get_db_manager() -> DatabaseManager:
    """Get global database manager instance"""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


def get_session() -> Session:
    """Get database session - convenience function"""
    return get_db_manager().get_session()
