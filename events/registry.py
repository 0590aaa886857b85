"""
=============================================
Synchronous event registry for SQL observers.
=============================================

Maps an event shape (the event's class) to an ordered, append-only list of
subscriber callbacks and fans events out to them on the publishing thread.

Concurrency:
    - subscribe() mutates under an exclusive lock
    - notify_all() reads and calls subscribers under a shared lock, so any
      number of notifications run concurrently with each other but never
      concurrently with a subscribe()
    - subscribers run strictly in subscription order and block the
      publisher until they return; their exceptions propagate unchanged

Lifetime:
    A registry is an ordinary object and can be passed to every component
    that publishes or subscribes. For convenience one process-wide default
    registry is created when this module is first imported; the module-level
    subscribe() and notify_all() functions delegate to it. There is no
    unsubscribe: a registration lasts as long as its registry.

Example:
    >>> from events.registry import EventRegistry
    >>>
    >>> class Ping:
    ...     pass
    >>>
    >>> bus = EventRegistry()
    >>> bus.subscribe(Ping, lambda event: 'pong')
    >>> bus.notify_all(Ping())
    ('pong',)
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Tuple, Type

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], Any]

_NO_RESULTS: Tuple[Any, ...] = ()


class RegistryError(RuntimeError):
    """Exception raised when the event registry is used incorrectly."""
    pass


class SharedExclusiveLock:
    """Readers-writer lock built on a single condition variable.

    Any number of threads may hold the shared side at once; the exclusive
    side is held by one thread with no shared holders. Shared acquisition is
    re-entrant, so a subscriber may publish further events.
    """

    def __init__(self):
        self._condition = threading.Condition(threading.Lock())
        self._shared_holders = 0
        self._exclusive_held = False
        self._local = threading.local()

    def held_shared(self) -> bool:
        """True when the calling thread currently holds the shared side."""
        return getattr(self._local, 'depth', 0) > 0

    @contextmanager
    def shared(self) -> Iterator[None]:
        with self._condition:
            while self._exclusive_held:
                self._condition.wait()
            self._shared_holders += 1
        self._local.depth = getattr(self._local, 'depth', 0) + 1
        try:
            yield
        finally:
            self._local.depth -= 1
            with self._condition:
                self._shared_holders -= 1
                if self._shared_holders == 0:
                    self._condition.notify_all()

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        if self.held_shared():
            raise RegistryError(
                "cannot take the exclusive lock while holding the shared lock"
            )
        with self._condition:
            while self._exclusive_held or self._shared_holders:
                self._condition.wait()
            self._exclusive_held = True
        try:
            yield
        finally:
            with self._condition:
                self._exclusive_held = False
                self._condition.notify_all()


class EventRegistry:
    """Event shape to subscriber list mapping with synchronous fan-out.

    Attributes:
        name: Label used in log messages
    """

    def __init__(self, name: str = 'default'):
        self.name = name
        self._handlers: Dict[type, List[EventHandler]] = {}
        self._lock = SharedExclusiveLock()

    def subscribe(self, event_type: Type[Any], handler: EventHandler) -> None:
        """
        Register a handler for every event of the given class.

        Args:
            event_type: Event class the handler listens to
            handler: Callable taking the event; its return value is
                collected by notify_all()

        Raises:
            TypeError: If event_type is not a class or handler is not callable
            RegistryError: If called from a handler during notify_all() on the
                same thread
        """
        if not isinstance(event_type, type):
            raise TypeError(f"event_type must be a class, got {event_type!r}")
        if not callable(handler):
            raise TypeError(f"handler must be callable, got {handler!r}")
        if self._lock.held_shared():
            raise RegistryError(
                f"cannot subscribe to {event_type.__name__} from inside a handler"
            )

        with self._lock.exclusive():
            self._handlers.setdefault(event_type, []).append(handler)

        logger.debug(
            f"Registry '{self.name}': "
            f"{getattr(handler, '__name__', repr(handler))} subscribed to "
            f"{event_type.__name__}"
        )

    def handlers(self, event_type: Type[Any]) -> Tuple[EventHandler, ...]:
        """Snapshot of the handlers subscribed to an event class."""
        with self._lock.shared():
            return tuple(self._handlers.get(event_type, ()))

    def notify_all(self, event: Any) -> Tuple[Any, ...]:
        """
        Send an event to every handler subscribed to its class.

        Handlers run synchronously on the calling thread, in subscription
        order. An exception raised by a handler stops the fan-out and
        propagates to the caller.

        Args:
            event: Event instance; its class selects the handlers

        Returns:
            Handler return values, index-aligned with subscription order.
            The shared empty tuple when nobody is subscribed.
        """
        with self._lock.shared():
            handlers = self._handlers.get(type(event))
            if not handlers:
                return _NO_RESULTS
            return tuple(handler(event) for handler in handlers)


# Process-wide default registry, created once on first import
default_registry = EventRegistry()


def subscribe(event_type: Type[Any], handler: EventHandler) -> None:
    """Subscribe a handler on the default registry."""
    default_registry.subscribe(event_type, handler)


def notify_all(event: Any) -> Tuple[Any, ...]:
    """Notify the default registry's subscribers of an event."""
    return default_registry.notify_all(event)
