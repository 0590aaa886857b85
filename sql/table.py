"""
========================================
Per-table facade over a SQLAlchemy link.
========================================

SimpleTable runs the statement builders against a SQLAlchemy Connection
owned by the caller and publishes an SQLEvent after every execution. The
caller decides transaction boundaries (for example `with engine.begin() as
conn:`); SimpleTable never commits or rolls back.

Driver errors are not handled here: they are published inside the SQLEvent
and then re-raised unchanged.

Example:
    >>> from sqlalchemy import create_engine
    >>> from sql.predicates import EQ
    >>> from sql.table import use
    >>>
    >>> engine = create_engine('sqlite:///:memory:')
    >>> with engine.begin() as conn:
    ...     conn.exec_driver_sql('CREATE TABLE t_book (id INTEGER PRIMARY KEY, name TEXT)')
    ...     books = use(conn, 't_book')
    ...     books.insert({'name': 'Python'})
    ...     row = books.get(None, {'name': EQ('Python')})
    >>> row.get_str('name')
    'Python'
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence

from sqlalchemy.engine import Connection, CursorResult
from sqlalchemy.exc import SQLAlchemyError

from events.registry import EventRegistry, default_registry
from events.sql_events import SQLEvent

from .dml import delete_builder, insert_builder, insert_many_builder, update_builder
from .predicates import Predicate
from .query_builder import Limit, PredicateSet, select_builder
from .values import SQLValue, to_driver_args

logger = logging.getLogger(__name__)


class UnknownFieldError(KeyError):
    """Raised when a Result has no column with the requested name."""

    def __init__(self, name: str):
        super().__init__(f"no field {name}")
        self.name = name


class FieldTypeError(TypeError):
    """Raised when a Result column does not hold the requested kind."""

    def __init__(self, name: str, expected: str, value: Any):
        super().__init__(
            f"field '{name}' is not {expected}: got {type(value).__name__}"
        )
        self.name = name
        self.value = value


class Result(dict):
    """Column name to value mapping for one fetched row.

    Typed accessors raise UnknownFieldError for a missing column and
    FieldTypeError when the stored value is of another kind.
    """

    def _get(self, name: str) -> Any:
        try:
            return self[name]
        except KeyError:
            raise UnknownFieldError(name) from None

    def get_bool(self, name: str) -> bool:
        """Boolean value; integer 0 and 1 are accepted as False and True."""
        value = self._get(name)
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return value == 1
        raise FieldTypeError(name, 'bool', value)

    def get_int(self, name: str) -> int:
        value = self._get(name)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        raise FieldTypeError(name, 'int', value)

    def get_float(self, name: str) -> float:
        value = self._get(name)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        raise FieldTypeError(name, 'float', value)

    def get_str(self, name: str) -> str:
        """Text value; bytes are decoded as UTF-8."""
        value = self._get(name)
        if isinstance(value, str):
            return value
        if isinstance(value, (bytes, bytearray, memoryview)):
            return bytes(value).decode('utf-8')
        raise FieldTypeError(name, 'str', value)

    def get_bytes(self, name: str) -> bytes:
        value = self._get(name)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return bytes(value)
        raise FieldTypeError(name, 'bytes', value)


def _merge_predicates(where: Sequence[Mapping[str, Predicate]]) -> PredicateSet:
    merged = PredicateSet()
    merged.merge(*where)
    return merged


class SimpleTable:
    """Insert, update, delete and query rows of one table.

    Attributes:
        connection: SQLAlchemy Connection the statements run on
        table: Table name
        registry: EventRegistry receiving an SQLEvent per execution
    """

    def __init__(
        self,
        connection: Connection,
        table: str,
        registry: Optional[EventRegistry] = None
    ):
        self.connection = connection
        self.table = table
        self.registry = registry if registry is not None else default_registry

    def execute(self, query: str, args: Optional[Sequence[SQLValue]] = None) -> CursorResult:
        """
        Execute a query and publish the outcome as an SQLEvent.

        Args:
            query: Query text with `?` placeholders
            args: Values bound to the placeholders

        Returns:
            SQLAlchemy CursorResult

        Raises:
            SQLAlchemyError: Driver errors, re-raised unchanged after the
                failure event has been published
        """
        args = list(args) if args else []
        parameters = to_driver_args(args)
        try:
            if parameters:
                result = self.connection.exec_driver_sql(query, parameters)
            else:
                result = self.connection.exec_driver_sql(query)
        except SQLAlchemyError as e:
            self.registry.notify_all(SQLEvent(query=query, args=args, result=None, error=e))
            raise
        self.registry.notify_all(SQLEvent(query=query, args=args, result=result, error=None))
        return result

    def insert(self, values: Mapping[str, SQLValue]) -> Optional[int]:
        """Insert one row and return its row id."""
        query, args = insert_builder(self.table, values)
        return self.execute(query, args).lastrowid

    def insert_many(self, rows: Mapping[str, Sequence[SQLValue]]) -> Optional[int]:
        """Insert several rows and return the row id of the last one."""
        query, args = insert_many_builder(self.table, rows)
        return self.execute(query, args).lastrowid

    def update(self, values: Mapping[str, SQLValue], *where: Mapping[str, Predicate]) -> int:
        """Update rows matching the merged predicate sets; return the row count."""
        query, args = update_builder(self.table, values, _merge_predicates(where))
        return self.execute(query, args).rowcount

    def delete(self, *where: Mapping[str, Predicate]) -> int:
        """Delete rows matching the merged predicate sets; return the row count.

        With no predicates every row is deleted.
        """
        query, args = delete_builder(self.table, _merge_predicates(where))
        return self.execute(query, args).rowcount

    def get(
        self,
        columns: Optional[Sequence[str]] = None,
        *where: Mapping[str, Predicate]
    ) -> Optional[Result]:
        """
        Fetch the first row matching the merged predicate sets.

        Args:
            columns: Columns to select; None or empty selects all
            *where: Predicate sets, merged left to right

        Returns:
            Result for the row, or None when no row matches
        """
        query, args = select_builder(self.table, _merge_predicates(where), columns, Limit(0, 1))
        row = self.execute(query, args).mappings().first()
        if row is None:
            return None
        return Result(row)

    def query(
        self,
        columns: Optional[Sequence[str]] = None,
        *where: Mapping[str, Predicate],
        limit: Optional[Limit] = None
    ) -> List[Result]:
        """
        Fetch every row matching the merged predicate sets.

        Args:
            columns: Columns to select; None or empty selects all
            *where: Predicate sets, merged left to right
            limit: Optional Limit

        Returns:
            List of Result rows
        """
        query, args = select_builder(self.table, _merge_predicates(where), columns, limit)
        return [Result(row) for row in self.execute(query, args).mappings()]


def use(
    connection: Connection,
    table: str,
    registry: Optional[EventRegistry] = None
) -> SimpleTable:
    """Return a SimpleTable for `table` on `connection`."""
    return SimpleTable(connection, table, registry)
