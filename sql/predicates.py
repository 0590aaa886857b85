"""
=======================================
Predicate expressions for WHERE blocks.
=======================================

A predicate is one comparison, membership, range or pattern operator bound
to its operand values. Evaluating a predicate against a field name yields a
clause fragment and appends its operands to the argument list, one value per
`?` placeholder and in the same left-to-right order.

Predicates are plain data: an Operator tag plus an operand tuple. The SQL
keyword of every operator lives in OPERATOR_KEYWORDS and variable-width
placeholder groups (IN / NOT IN) are computed from the operand count by the
single evaluate() dispatch function.

Constructors:
    - equal, not_equal, greater_than, greater_or_equal, less_than,
      less_or_equal: `<field> <op> ?`
    - in_, not_in: `<field> [NOT] IN (?,?,...)`
    - is_null, not_null: `<field> IS [NOT] NULL`
    - between, not_between: `<field> [NOT] BETWEEN ? AND ?`
    - like, not_like: `<field> [NOT] LIKE ?` with a `%value%` pattern

Short aliases (EQ, NE, GT, GTE, LT, LTE, IN, NI, IS_NULL, NOT_NULL,
BETWEEN, NOT_BETWEEN, LIKE, NOT_LIKE) are exported for compact call sites.

Example:
    >>> from sql.predicates import between, equal, in_
    >>>
    >>> fragment, args = equal(5).evaluate('id', [])
    >>> fragment, args
    ('id = ?', [5])
    >>> in_(['a', 'b']).evaluate('tag', args)
    ('tag IN (?,?)', [5, 'a', 'b'])
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .values import SQLValue, check_value

logger = logging.getLogger(__name__)


class Operator(Enum):
    """Every operator a predicate can carry."""

    EQUAL = 'equal'
    NOT_EQUAL = 'not_equal'
    GREATER_THAN = 'greater_than'
    GREATER_OR_EQUAL = 'greater_or_equal'
    LESS_THAN = 'less_than'
    LESS_OR_EQUAL = 'less_or_equal'
    IN = 'in'
    NOT_IN = 'not_in'
    IS_NULL = 'is_null'
    NOT_NULL = 'not_null'
    BETWEEN = 'between'
    NOT_BETWEEN = 'not_between'
    LIKE = 'like'
    NOT_LIKE = 'not_like'


OPERATOR_KEYWORDS = {
    Operator.EQUAL: '=',
    Operator.NOT_EQUAL: '!=',
    Operator.GREATER_THAN: '>',
    Operator.GREATER_OR_EQUAL: '>=',
    Operator.LESS_THAN: '<',
    Operator.LESS_OR_EQUAL: '<=',
    Operator.IN: 'IN',
    Operator.NOT_IN: 'NOT IN',
    Operator.IS_NULL: 'IS NULL',
    Operator.NOT_NULL: 'IS NOT NULL',
    Operator.BETWEEN: 'BETWEEN',
    Operator.NOT_BETWEEN: 'NOT BETWEEN',
    Operator.LIKE: 'LIKE',
    Operator.NOT_LIKE: 'NOT LIKE',
}

# Fixed operand counts; IN / NOT IN take any number
FIXED_ARITY = {
    Operator.EQUAL: 1,
    Operator.NOT_EQUAL: 1,
    Operator.GREATER_THAN: 1,
    Operator.GREATER_OR_EQUAL: 1,
    Operator.LESS_THAN: 1,
    Operator.LESS_OR_EQUAL: 1,
    Operator.IS_NULL: 0,
    Operator.NOT_NULL: 0,
    Operator.BETWEEN: 2,
    Operator.NOT_BETWEEN: 2,
    Operator.LIKE: 1,
    Operator.NOT_LIKE: 1,
}

_GROUP_OPERATORS = (Operator.IN, Operator.NOT_IN)
_RANGE_OPERATORS = (Operator.BETWEEN, Operator.NOT_BETWEEN)
_NULL_OPERATORS = (Operator.IS_NULL, Operator.NOT_NULL)


@dataclass(frozen=True)
class Predicate:
    """An operator bound to its operand values.

    Attributes:
        operator: Operator tag
        operands: Values bound to the placeholders, in placeholder order
    """

    operator: Operator
    operands: Tuple[SQLValue, ...] = ()

    def __post_init__(self):
        expected = FIXED_ARITY.get(self.operator)
        if expected is not None and len(self.operands) != expected:
            raise ValueError(
                f"{self.operator.name} takes {expected} operand(s), "
                f"got {len(self.operands)}"
            )

    @property
    def arity(self) -> int:
        """Number of placeholders the fragment contains."""
        return len(self.operands)

    def evaluate(
        self,
        field_name: str,
        args: Optional[List[SQLValue]] = None
    ) -> Tuple[str, List[SQLValue]]:
        """Shortcut for evaluate(self, field_name, args)."""
        return evaluate(self, field_name, args)


def evaluate(
    predicate: Predicate,
    field_name: str,
    args: Optional[List[SQLValue]] = None
) -> Tuple[str, List[SQLValue]]:
    """
    Render a predicate against a field name.

    Args:
        predicate: Predicate to render
        field_name: Column the predicate applies to
        args: Arguments collected so far (not modified)

    Returns:
        Tuple of (fragment, args) where args is a new list holding the
        previous arguments followed by exactly predicate.arity operands

    Raises:
        TypeError: If predicate is not a Predicate
    """
    if not isinstance(predicate, Predicate):
        raise TypeError(
            f"PredicateSet values must be Predicate, got "
            f"{type(predicate).__name__} for field '{field_name}'"
        )
    operator = predicate.operator
    keyword = OPERATOR_KEYWORDS[operator]

    if operator in _NULL_OPERATORS:
        fragment = f"{field_name} {keyword}"
    elif operator in _RANGE_OPERATORS:
        fragment = f"{field_name} {keyword} ? AND ?"
    elif operator in _GROUP_OPERATORS:
        if not predicate.operands:
            logger.warning(
                f"Empty {keyword} group for field '{field_name}'; "
                f"some SQL dialects reject '{keyword} ()'"
            )
        placeholders = ",".join("?" * predicate.arity)
        fragment = f"{field_name} {keyword} ({placeholders})"
    else:
        fragment = f"{field_name} {keyword} ?"

    collected = list(args) if args else []
    collected.extend(predicate.operands)
    return fragment, collected


def _compare(operator: Operator, value: SQLValue) -> Predicate:
    return Predicate(operator, (check_value(value),))


def equal(value: SQLValue) -> Predicate:
    """`<field> = ?`"""
    return _compare(Operator.EQUAL, value)


def not_equal(value: SQLValue) -> Predicate:
    """`<field> != ?`"""
    return _compare(Operator.NOT_EQUAL, value)


def greater_than(value: SQLValue) -> Predicate:
    """`<field> > ?`"""
    return _compare(Operator.GREATER_THAN, value)


def greater_or_equal(value: SQLValue) -> Predicate:
    """`<field> >= ?`"""
    return _compare(Operator.GREATER_OR_EQUAL, value)


def less_than(value: SQLValue) -> Predicate:
    """`<field> < ?`"""
    return _compare(Operator.LESS_THAN, value)


def less_or_equal(value: SQLValue) -> Predicate:
    """`<field> <= ?`"""
    return _compare(Operator.LESS_OR_EQUAL, value)


def in_(values: Iterable[SQLValue]) -> Predicate:
    """
    `<field> IN (?,?,...)` with one placeholder per value, in input order.

    An empty collection renders as `<field> IN ()` and contributes no
    arguments.
    """
    return Predicate(Operator.IN, tuple(check_value(v) for v in values))


def not_in(values: Iterable[SQLValue]) -> Predicate:
    """`<field> NOT IN (?,?,...)`; see in_() for the empty case."""
    return Predicate(Operator.NOT_IN, tuple(check_value(v) for v in values))


def is_null() -> Predicate:
    """`<field> IS NULL`"""
    return Predicate(Operator.IS_NULL)


def not_null() -> Predicate:
    """`<field> IS NOT NULL`"""
    return Predicate(Operator.NOT_NULL)


def between(begin: SQLValue, end: SQLValue) -> Predicate:
    """`<field> BETWEEN ? AND ?` bound to (begin, end)."""
    return Predicate(Operator.BETWEEN, (check_value(begin), check_value(end)))


def not_between(begin: SQLValue, end: SQLValue) -> Predicate:
    """`<field> NOT BETWEEN ? AND ?` bound to (begin, end)."""
    return Predicate(Operator.NOT_BETWEEN, (check_value(begin), check_value(end)))


def _contains_pattern(value: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"LIKE pattern must be str, got {type(value).__name__}")
    return f"%{value}%"


def like(value: str) -> Predicate:
    """`<field> LIKE ?` matching values that contain `value`."""
    return Predicate(Operator.LIKE, (_contains_pattern(value),))


def not_like(value: str) -> Predicate:
    """`<field> NOT LIKE ?` matching values that do not contain `value`."""
    return Predicate(Operator.NOT_LIKE, (_contains_pattern(value),))


EQ = equal
NE = not_equal
GT = greater_than
GTE = greater_or_equal
LT = less_than
LTE = less_or_equal
IN = in_
NI = not_in
IS_NULL = is_null
NOT_NULL = not_null
BETWEEN = between
NOT_BETWEEN = not_between
LIKE = like
NOT_LIKE = not_like
