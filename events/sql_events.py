"""
==========================
SQL execution event types.
==========================

SQLEvent is published once after every statement a SimpleTable executes,
whether the driver call succeeded or failed. log_sql_event is a ready-made
subscriber that writes each event to the application log.

Example:
    >>> from events.sql_events import install_sql_logger
    >>>
    >>> install_sql_logger()   # subscribe on the default registry
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .registry import EventRegistry, default_registry

logger = logging.getLogger(__name__)


@dataclass
class SQLEvent:
    """One executed statement.

    Attributes:
        query: Query text as sent to the driver
        args: Bound arguments, in placeholder order
        result: Driver result handle, None when execution failed
        error: Driver exception, None on success
    """

    query: str
    args: List[Any] = field(default_factory=list)
    result: Optional[Any] = None
    error: Optional[BaseException] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


def log_sql_event(event: SQLEvent) -> None:
    """Log an executed statement; failures are logged at ERROR."""
    if event.failed:
        logger.error(f"[SQL]: {event.query} , args: {event.args} , error: {event.error}")
    else:
        logger.debug(f"[SQL]: {event.query} , args: {event.args}")


def install_sql_logger(registry: Optional[EventRegistry] = None) -> EventRegistry:
    """
    Subscribe log_sql_event to SQLEvent.

    Args:
        registry: Registry to subscribe on (defaults to the process-wide one)

    Returns:
        The registry the logger was installed on
    """
    target = registry if registry is not None else default_registry
    target.subscribe(SQLEvent, log_sql_event)
    return target
