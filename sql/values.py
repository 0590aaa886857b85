"""
================================
SQL values and value containers.
================================

Defines the closed set of scalar kinds that can be bound to a placeholder,
plus the column-oriented containers consumed by the INSERT and UPDATE
builders.

Supported scalar kinds:
    - int, float, str, bytes, bool
    - None (SQL NULL)
    - datetime.datetime (timestamps)

Values stay native Python objects while statements are built. They are
converted only at the driver boundary by to_driver_value().

Example:
    >>> from sql.values import FieldValueSet, MultiRowValueSet
    >>>
    >>> row = FieldValueSet({'name': 'Python', 'tag': 1})
    >>> row.merge({'deleted': False})
    >>>
    >>> rows = MultiRowValueSet({
    ...     'name': ['Python', 'Golang'],
    ...     'tag': [1, 2],
    ... })
    >>> rows.row_count()
    2
"""

from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .errors import UnsupportedValueError

SQLValue = Union[int, float, str, bytes, bool, None, datetime]

_SCALAR_TYPES = (int, float, str, bytes, bool, datetime)


def check_value(value: Any) -> SQLValue:
    """
    Validate that a value belongs to the supported scalar kinds.

    Args:
        value: Value to validate

    Returns:
        The value, unchanged

    Raises:
        UnsupportedValueError: If the value is of any other type
    """
    if value is None or isinstance(value, _SCALAR_TYPES):
        return value
    raise UnsupportedValueError(value)


def check_column(values: Any) -> List[SQLValue]:
    """
    Validate the value sequence of one column in a multi-row insert.

    Text and byte strings are single values, not sequences of rows.

    Raises:
        UnsupportedValueError: If `values` is not a sequence of values or
            holds an unsupported value
    """
    if isinstance(values, (str, bytes, bytearray, memoryview, Mapping)) \
            or not isinstance(values, Iterable):
        raise UnsupportedValueError(values)
    return [check_value(value) for value in values]


def to_driver_value(value: SQLValue) -> Any:
    """
    Convert a value into the form handed to the database driver.

    Booleans become 0/1 integers and timestamps become ISO-8601 text
    with a space separator. Other kinds pass through unchanged.

    Args:
        value: Supported SQL value

    Returns:
        Driver-ready value

    Example:
        >>> to_driver_value(True)
        1
        >>> to_driver_value(datetime(2024, 1, 2, 3, 4, 5))
        '2024-01-02 03:04:05'
    """
    check_value(value)
    # bool is a subclass of int, test it first
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, datetime):
        return value.isoformat(sep=' ')
    return value


def to_driver_args(args: Optional[Iterable[SQLValue]]) -> Tuple[Any, ...]:
    """Convert an argument list into a driver-ready positional tuple."""
    if not args:
        return ()
    return tuple(to_driver_value(arg) for arg in args)


class FieldValueSet(dict):
    """Column name to value mapping describing a single row.

    Column emission order in generated SQL follows insertion order.

    Example:
        >>> values = FieldValueSet(name='Python')
        >>> values.merge({'tag': 1}, {'name': 'Ruby'})
        >>> values
        {'name': 'Ruby', 'tag': 1}
    """

    def merge(self, *others: Mapping[str, SQLValue]) -> None:
        """Merge other mappings in; later mappings overwrite earlier keys."""
        for other in others:
            for name, value in other.items():
                self[name] = value

    def is_empty(self) -> bool:
        return len(self) == 0


class MultiRowValueSet(dict):
    """Column name to value-sequence mapping describing several rows.

    Every sequence holds one value per row, so all sequences are expected
    to share the same length. The check itself happens when the values are
    transposed into rows (see RowMatrix.add_row).
    """

    def merge(self, *others: Mapping[str, Sequence[SQLValue]]) -> None:
        """Merge other mappings in; later mappings overwrite earlier keys."""
        for other in others:
            for name, values in other.items():
                self[name] = values

    def is_empty(self) -> bool:
        return len(self) == 0

    def row_count(self) -> int:
        """Number of rows described; zero columns means zero rows."""
        for values in self.values():
            return len(values)
        return 0
