"""
================================
Database connectivity utilities.
================================

Provides reusable SQLAlchemy engine creation and availability checks for
code that runs the statement builders against a real database.

Key Features:
    - Connection string resolution from config
    - Engine creation with pre-ping
    - Database availability checking
    - Retry loop while waiting for a database to come up

Example:
    >>> from utils.database_utils import (
    ...     check_database_available,
    ...     create_sqlalchemy_engine,
    ... )
    >>>
    >>> engine = create_sqlalchemy_engine('sqlite:///:memory:')
    >>> check_database_available(engine)
    True
"""

import logging
import time
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from core.config import config

logger = logging.getLogger(__name__)


class DatabaseConnectionError(Exception):
    """Exception raised when database connection fails."""
    pass


def get_connection_string(url: Optional[str] = None) -> str:
    """
    Resolve the database URL.

    Args:
        url: Explicit SQLAlchemy URL (defaults to config.database_url)

    Returns:
        SQLAlchemy database URL
    """
    return url if url is not None else config.database_url


def create_sqlalchemy_engine(
    url: Optional[str] = None,
    echo: Optional[bool] = None
) -> Engine:
    """
    Create a SQLAlchemy engine.

    Args:
        url: SQLAlchemy URL (defaults to config.database_url)
        echo: Enable SQL statement logging (defaults to config.db_echo)

    Returns:
        Configured SQLAlchemy Engine

    Example:
        >>> engine = create_sqlalchemy_engine()
        >>> with engine.begin() as conn:
        ...     conn.exec_driver_sql("SELECT 1")
    """
    return create_engine(
        get_connection_string(url),
        echo=config.db_echo if echo is None else echo,
        pool_pre_ping=True  # Verify connections before using
    )


def check_database_available(engine: Optional[Engine] = None) -> bool:
    """
    Check if the database answers a trivial query.

    Args:
        engine: Engine to check (defaults to a new engine from config)

    Returns:
        True if database is available, False otherwise
    """
    engine = engine or create_sqlalchemy_engine()

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.debug(f"Database not available: {e}")
        return False


def wait_for_database(
    engine: Optional[Engine] = None,
    max_retries: int = 10,
    retry_delay: float = 2
) -> bool:
    """
    Wait for the database to become available with retries.

    Args:
        engine: Engine to check (defaults to a new engine from config)
        max_retries: Maximum number of retry attempts
        retry_delay: Delay between retries in seconds

    Returns:
        True once the database is available

    Raises:
        DatabaseConnectionError: If database never becomes available
    """
    engine = engine or create_sqlalchemy_engine()

    logger.info(f"Waiting for database at {engine.url!r}...")

    for attempt in range(1, max_retries + 1):
        if check_database_available(engine):
            logger.info(f"✅ Database is available (attempt {attempt}/{max_retries})")
            return True

        if attempt < max_retries:
            logger.warning(
                f"⏳ Database not available yet (attempt {attempt}/{max_retries}), "
                f"retrying in {retry_delay}s..."
            )
            time.sleep(retry_delay)

    error_msg = (
        f"Database at {engine.url!r} did not become available "
        f"after {max_retries} attempts"
    )
    logger.error(f"❌ {error_msg}")
    raise DatabaseConnectionError(error_msg)
