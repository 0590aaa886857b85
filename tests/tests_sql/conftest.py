"""
Shared fixtures for sql/ package tests.

Key fixtures:
- engine: in-memory SQLite engine
- connection: transaction-scoped connection with the t_book table created
- sql_events: isolated EventRegistry plus the list of SQLEvents it received
- books: SimpleTable for t_book wired to the isolated registry
"""

from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine

BOOK_TABLE = "t_book"

BOOK_SCHEMA = (
    "CREATE TABLE t_book ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, "
    "name VARCHAR(100) NOT NULL, "
    "tag INTEGER NULL, "
    "deleted BOOLEAN DEFAULT 0, "
    "published_at TEXT NULL, "
    "cover BLOB NULL)"
)


@pytest.fixture
def engine():
    """In-memory SQLite engine, disposed after the test."""
    engine = create_engine("sqlite:///:memory:")
    yield engine
    engine.dispose()


@pytest.fixture
def connection(engine):
    """Connection inside a transaction, with the t_book table created."""
    with engine.begin() as conn:
        conn.exec_driver_sql(BOOK_SCHEMA)
        yield conn


@pytest.fixture
def sql_events():
    """Isolated registry recording every SQLEvent it is notified of."""
    from events.registry import EventRegistry
    from events.sql_events import SQLEvent

    received = []
    bus = EventRegistry(name="test")
    bus.subscribe(SQLEvent, received.append)
    return SimpleNamespace(registry=bus, received=received)


@pytest.fixture
def books(connection, sql_events):
    """SimpleTable for t_book publishing to the isolated registry."""
    from sql.table import SimpleTable

    return SimpleTable(connection, BOOK_TABLE, registry=sql_events.registry)
