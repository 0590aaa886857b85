"""
=================================
Event notification for SQL calls.
=================================

This package provides the synchronous event registry used to observe
every statement executed through the table facade.

Modules:
    registry: EventRegistry, SharedExclusiveLock and the default registry
    sql_events: SQLEvent payload and the logging subscriber

Example:
    >>> from events import EventRegistry, SQLEvent, log_sql_event
    >>>
    >>> bus = EventRegistry()
    >>> bus.subscribe(SQLEvent, log_sql_event)
    >>> bus.notify_all(SQLEvent(query='SELECT 1'))
    (None,)
"""

__version__ = "0.1.0"
__all__ = [
    'EventRegistry', 'SharedExclusiveLock', 'RegistryError',
    'default_registry', 'subscribe', 'notify_all',
    'SQLEvent', 'log_sql_event', 'install_sql_logger'
]

from .registry import (
    EventRegistry,
    RegistryError,
    SharedExclusiveLock,
    default_registry,
    notify_all,
    subscribe,
)
from .sql_events import SQLEvent, install_sql_logger, log_sql_event
