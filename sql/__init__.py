"""
================================================
SQL statement building package with `?` binding.
================================================

This package turns declarative predicate and value descriptions into
parameterized SQL text plus the ordered argument list for its `?`
placeholders.

The package follows a clear organization:
    - values.py: Supported SQL scalar kinds and value containers
    - predicates.py: Predicate expressions and their constructors
    - matrix.py: Row matrix used to transpose multi-row input
    - query_builder.py: PredicateSet, Limit, where_builder, select_builder
    - dml.py: INSERT / multi-row INSERT / UPDATE / DELETE builders
    - table.py: SimpleTable facade running builders on a SQLAlchemy connection
    - errors.py: StatementBuildError hierarchy

Architecture:
    - All builders end with '_builder' suffix and return (query, args)
    - All SQL generation is pure functions (no side effects)
    - Only table.py performs I/O

Example:
    >>> from sql import EQ, GT, insert_builder, update_builder
    >>>
    >>> insert_builder('t', {'name': 'x', 'tag': 1})
    ('INSERT INTO t (name,tag) VALUES (?,?)', ['x', 1])
    >>> update_builder('t', {'name': 'x'}, {'id': EQ(5)})
    ('UPDATE t SET name=? WHERE id = ?', ['x', 5])
"""

__version__ = "1.0.0"
__all__ = [
    # Values
    'SQLValue', 'FieldValueSet', 'MultiRowValueSet',
    'check_value', 'check_column', 'to_driver_value', 'to_driver_args',
    # Predicates
    'Operator', 'Predicate', 'evaluate',
    'equal', 'not_equal', 'greater_than', 'greater_or_equal',
    'less_than', 'less_or_equal', 'in_', 'not_in', 'is_null', 'not_null',
    'between', 'not_between', 'like', 'not_like',
    'EQ', 'NE', 'GT', 'GTE', 'LT', 'LTE', 'IN', 'NI',
    'IS_NULL', 'NOT_NULL', 'BETWEEN', 'NOT_BETWEEN', 'LIKE', 'NOT_LIKE',
    # Builders
    'RowMatrix', 'PredicateSet', 'Limit',
    'where_builder', 'select_builder',
    'insert_builder', 'insert_many_builder', 'update_builder', 'delete_builder',
    # Errors
    'StatementBuildError', 'NoInsertFieldsError', 'NoUpdateFieldsError',
    'RowLengthMismatchError', 'InvalidLimitError', 'UnsupportedValueError',
]

from .dml import delete_builder, insert_builder, insert_many_builder, update_builder
from .errors import (
    InvalidLimitError,
    NoInsertFieldsError,
    NoUpdateFieldsError,
    RowLengthMismatchError,
    StatementBuildError,
    UnsupportedValueError,
)
from .matrix import RowMatrix
from .predicates import (
    BETWEEN,
    EQ,
    GT,
    GTE,
    IN,
    IS_NULL,
    LIKE,
    LT,
    LTE,
    NE,
    NI,
    NOT_BETWEEN,
    NOT_LIKE,
    NOT_NULL,
    Operator,
    Predicate,
    between,
    equal,
    evaluate,
    greater_or_equal,
    greater_than,
    in_,
    is_null,
    less_or_equal,
    less_than,
    like,
    not_between,
    not_equal,
    not_in,
    not_like,
    not_null,
)
from .query_builder import Limit, PredicateSet, select_builder, where_builder
from .values import (
    FieldValueSet,
    MultiRowValueSet,
    SQLValue,
    check_column,
    check_value,
    to_driver_args,
    to_driver_value,
)
