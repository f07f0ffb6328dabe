"""
Context manager for handling database sessions and exceptions.
"""

import logging
from contextlib import contextmanager
from typing import Callable, Generator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cartsync.infrastructure.utilities.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


@contextmanager
def managed_session(
    session_factory: Callable[[], Session], operation: str = "store operation"
) -> Generator[Session, None, None]:
    """
    Context manager for handling database sessions, including commits, rollbacks,
    and exception logging.

    Yields:
        Session: The SQLAlchemy session object.

    Raises:
        StoreUnavailableError: If a database-related error occurs.
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        logger.error("💥 DATABASE ERROR during %s: %s", operation, e)
        session.rollback()
        raise StoreUnavailableError(f"Durable store failed during {operation}: {e}", operation) from e
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
