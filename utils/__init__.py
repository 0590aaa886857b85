"""
==========================
Utility Functions Package.
==========================

Reusable utility functions for database connectivity.

Modules:
    database_utils: SQLAlchemy engine creation and health checks
"""

__version__ = "1.0.0"
__all__ = [
    'DatabaseConnectionError',
    'wait_for_database',
    'check_database_available',
    'get_connection_string',
    'create_sqlalchemy_engine',
]

from .database_utils import (
    DatabaseConnectionError,
    check_database_available,
    create_sqlalchemy_engine,
    get_connection_string,
    wait_for_database,
)
