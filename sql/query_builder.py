"""
============================
SQL Query Builder Utilities.
============================

This module provides the WHERE and SELECT building blocks. All builders
follow the _builder naming convention and return the query text together
with the ordered argument list bound to its `?` placeholders.

Query Builders:
- where_builder: Build a WHERE block from a PredicateSet
- select_builder: Build SELECT statements with optional WHERE and LIMIT

Containers:
- PredicateSet: Field name to Predicate mapping forming a WHERE block
- Limit: Optional (offset, count) pagination descriptor

Usage:
    from sql.predicates import equal, greater_than
    from sql.query_builder import Limit, PredicateSet, select_builder

    query, args = select_builder(
        table='t_book',
        predicates=PredicateSet(name=equal('Python'), tag=greater_than(1)),
        columns=['id', 'name'],
        limit=Limit(0, 10)
    )
    # SELECT id,name FROM t_book WHERE name = ? AND tag > ? LIMIT 0,10
    # args == ['Python', 1]
"""

import logging
from typing import List, Mapping, Optional, Sequence, Tuple

from .errors import InvalidLimitError
from .predicates import Predicate, evaluate
from .values import SQLValue

logger = logging.getLogger(__name__)

WHERE_JOINER = " AND "


class PredicateSet(dict):
    """Field name to Predicate mapping forming a WHERE block.

    Keys are unique; fragments are emitted in insertion order and the
    arguments of fragment i are appended while fragment i is rendered.

    Example:
        >>> where = PredicateSet({'age': greater_or_equal(10)})
        >>> where.merge({'deleted': equal(False)})
    """

    def __init__(self, *args, **kwargs):
        super().__init__()
        self.update(*args, **kwargs)

    def __setitem__(self, field_name: str, predicate: Predicate) -> None:
        if not isinstance(predicate, Predicate):
            raise TypeError(
                f"PredicateSet values must be Predicate, got "
                f"{type(predicate).__name__} for field '{field_name}'"
            )
        super().__setitem__(field_name, predicate)

    def update(self, *args, **kwargs) -> None:
        for field_name, predicate in dict(*args, **kwargs).items():
            self[field_name] = predicate

    def setdefault(self, field_name: str, predicate: Predicate = None) -> Predicate:
        if field_name not in self:
            self[field_name] = predicate
        return self[field_name]

    def merge(self, *others: Mapping[str, Predicate]) -> None:
        """Merge other sets in; later sets overwrite earlier keys."""
        for other in others:
            self.update(other)

    def is_empty(self) -> bool:
        return len(self) == 0


class Limit:
    """Optional pagination descriptor.

    - Limit(): no LIMIT clause
    - Limit(count): first `count` rows (offset 0)
    - Limit(offset, count): `count` rows starting at `offset`

    Example:
        >>> Limit().is_empty()
        True
        >>> Limit(5).begin(), Limit(5).max_num()
        (0, 5)
        >>> Limit(2, 5).begin(), Limit(2, 5).max_num()
        (2, 5)
    """

    def __init__(self, *bounds: int):
        if len(bounds) > 2:
            raise InvalidLimitError(
                f"Limit takes at most 2 bounds (offset, count), got {len(bounds)}"
            )
        for bound in bounds:
            if isinstance(bound, bool) or not isinstance(bound, int):
                raise InvalidLimitError(f"Limit bounds must be int, got {bound!r}")
            if bound < 0:
                raise InvalidLimitError(f"Limit bounds must be >= 0, got {bound}")
        self.bounds: Tuple[int, ...] = tuple(bounds)

    def is_empty(self) -> bool:
        return len(self.bounds) == 0

    def begin(self) -> Optional[int]:
        """Row offset, or None when no limit is set."""
        if not self.bounds:
            return None
        if len(self.bounds) == 1:
            return 0
        return self.bounds[0]

    def max_num(self) -> Optional[int]:
        """Maximum number of rows, or None when no limit is set."""
        if not self.bounds:
            return None
        return self.bounds[-1]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Limit):
            return NotImplemented
        return (self.begin(), self.max_num()) == (other.begin(), other.max_num())

    def __repr__(self) -> str:
        return f"Limit{self.bounds!r}"


def where_builder(
    predicates: Optional[Mapping[str, Predicate]],
    args: Optional[List[SQLValue]] = None
) -> Tuple[str, List[SQLValue], bool]:
    """
    Build a WHERE block from predicates.

    Args:
        predicates: Field name to Predicate mapping (None or empty for none)
        args: Arguments collected so far; predicate arguments are appended
            after them (the list passed in is not modified)

    Returns:
        Tuple of (block, args, has_clause). With no predicates the block is
        empty, args are returned as given and has_clause is False.
    """
    collected = list(args) if args else []
    if not predicates:
        return "", collected, False

    fragments = []
    for field_name, predicate in predicates.items():
        fragment, collected = evaluate(predicate, field_name, collected)
        fragments.append(fragment)

    return "WHERE " + WHERE_JOINER.join(fragments), collected, True


def select_builder(
    table: str,
    predicates: Optional[Mapping[str, Predicate]] = None,
    columns: Optional[Sequence[str]] = None,
    limit: Optional[Limit] = None
) -> Tuple[str, List[SQLValue]]:
    """
    Build a SELECT statement with optional filtering and pagination.

    Args:
        table: Table name
        predicates: Field name to Predicate mapping for the WHERE block
        columns: Column list; empty or None selects `*`
        limit: Optional Limit; absent or empty omits the LIMIT clause

    Returns:
        Tuple of (query, args)

    Raises:
        TypeError: If columns is a string or a mapping

    Example:
        >>> select_builder('t_book', {'id': equal(5)}, ['name'], Limit(1))
        ('SELECT name FROM t_book WHERE id = ? LIMIT 0,1', [5])
    """
    if isinstance(columns, (str, Mapping)):
        raise TypeError(
            f"columns must be a sequence of column names, got "
            f"{type(columns).__name__}; predicate sets follow the columns"
        )
    column_clause = ",".join(columns) if columns else "*"
    blocks = [f"SELECT {column_clause} FROM {table}"]

    where_block, args, has_where = where_builder(predicates)
    if has_where:
        blocks.append(where_block)

    if limit is not None and not limit.is_empty():
        blocks.append(f"LIMIT {limit.begin()},{limit.max_num()}")

    return " ".join(blocks), args
