"""
===========================================
Data Manipulation Language (DML) Utilities.
===========================================

This module provides the parameterized INSERT, UPDATE and DELETE builders.
Every builder is a pure function returning (query, args): the query text
uses `?` positional placeholders and args holds one value per placeholder,
in placeholder order.

Functions:
- insert_builder: Single-row INSERT from a column to value mapping
- insert_many_builder: Multi-row INSERT from a column to values mapping
- update_builder: UPDATE ... SET with an optional WHERE block
- delete_builder: DELETE with an optional WHERE block

Usage:
    from sql.dml import insert_many_builder, update_builder
    from sql.predicates import equal

    query, args = update_builder('t', {'name': 'x'}, {'id': equal(5)})
    # UPDATE t SET name=? WHERE id = ?      args == ['x', 5]

    query, args = insert_many_builder('t', {'a': [1, 2], 'b': ['x', 'y']})
    # INSERT INTO t (a,b) VALUES (?,?),(?,?)  args == [1, 'x', 2, 'y']
"""

import logging
from typing import List, Mapping, Optional, Sequence, Tuple

from .errors import NoInsertFieldsError, NoUpdateFieldsError
from .matrix import RowMatrix
from .predicates import Predicate
from .query_builder import where_builder
from .values import SQLValue, check_column, check_value

logger = logging.getLogger(__name__)


def _placeholder_group(width: int) -> str:
    return "(" + ",".join("?" * width) + ")"


def insert_builder(
    table: str,
    values: Mapping[str, SQLValue]
) -> Tuple[str, List[SQLValue]]:
    """
    Generate a single-row INSERT statement.

    Args:
        table: Table name
        values: Column name to value mapping

    Returns:
        Tuple of (query, args); args follow the emitted column order

    Raises:
        NoInsertFieldsError: If values is empty
        UnsupportedValueError: If a column is not a sequence of values or a
            value is not a supported SQL scalar
    """
    if not values:
        raise NoInsertFieldsError(table)

    columns = list(values.keys())
    args = [check_value(values[column]) for column in columns]

    query = (
        f"INSERT INTO {table} ({','.join(columns)}) "
        f"VALUES {_placeholder_group(len(columns))}"
    )
    return query, args


def insert_many_builder(
    table: str,
    rows: Mapping[str, Sequence[SQLValue]]
) -> Tuple[str, List[SQLValue]]:
    """
    Generate a multi-row INSERT statement from column-oriented values.

    Each column's sequence becomes one row of a RowMatrix; transposing it
    yields one tuple per inserted row. Arguments are emitted row-major.

    Args:
        table: Table name
        rows: Column name to value sequence mapping; every sequence holds
            one value per inserted row

    Returns:
        Tuple of (query, args)

    Raises:
        NoInsertFieldsError: If there are no columns or no rows
        RowLengthMismatchError: If the value sequences differ in length
        UnsupportedValueError: If a column is not a sequence of values or a
            value is not a supported SQL scalar
    """
    if not rows:
        raise NoInsertFieldsError(table)

    columns = []
    by_column = RowMatrix()
    for column, column_values in rows.items():
        by_column.add_row(check_column(column_values))
        columns.append(column)

    by_row = by_column.transpose()
    if by_row.num_rows == 0:
        raise NoInsertFieldsError(table)

    args = [value for row in by_row for value in row]
    values_block = ",".join([_placeholder_group(len(columns))] * by_row.num_rows)

    query = f"INSERT INTO {table} ({','.join(columns)}) VALUES {values_block}"
    return query, args


def update_builder(
    table: str,
    values: Mapping[str, SQLValue],
    predicates: Optional[Mapping[str, Predicate]] = None
) -> Tuple[str, List[SQLValue]]:
    """
    Generate an UPDATE statement.

    Args:
        table: Table name
        values: Column name to new value mapping
        predicates: Field name to Predicate mapping for the WHERE block;
            without predicates every row is updated

    Returns:
        Tuple of (query, args); the SET values come first, followed by the
        WHERE arguments

    Raises:
        NoUpdateFieldsError: If values is empty
        UnsupportedValueError: If a column is not a sequence of values or a
            value is not a supported SQL scalar
    """
    if not values:
        raise NoUpdateFieldsError(table)

    set_clauses = []
    args = []
    for column, value in values.items():
        set_clauses.append(f"{column}=?")
        args.append(check_value(value))

    blocks = ["UPDATE", table, "SET", ",".join(set_clauses)]

    where_block, args, has_where = where_builder(predicates, args)
    if has_where:
        blocks.append(where_block)

    return " ".join(blocks), args


def delete_builder(
    table: str,
    predicates: Optional[Mapping[str, Predicate]] = None
) -> Tuple[str, List[SQLValue]]:
    """
    Generate a DELETE statement.

    Without predicates the statement deletes every row of the table. This is
    allowed; guarding against it is the caller's responsibility.

    Args:
        table: Table name
        predicates: Field name to Predicate mapping for the WHERE block

    Returns:
        Tuple of (query, args)
    """
    where_block, args, has_where = where_builder(predicates)
    if not has_where:
        logger.warning(f"DELETE without WHERE block targets every row of '{table}'")
        return f"DELETE FROM {table}", args

    return f"DELETE FROM {table} {where_block}", args
