"""
======================================
Rectangular row matrix with transpose.
======================================

Used by the multi-row INSERT builder to turn column-oriented input
(one sequence of values per column) into row-oriented tuples.

Rectangularity is enforced when rows are added: the first row fixes the
column count and every later row must match it. transpose() relies on that
check and never fails on its own.

Example:
    >>> from sql.matrix import RowMatrix
    >>>
    >>> m = RowMatrix(['a1', 'a2', 'a3'], ['b1', 'b2', 'b3'])
    >>> m.transpose().rows
    [('a1', 'b1'), ('a2', 'b2'), ('a3', 'b3')]
"""

from typing import Any, Iterator, List, Sequence, Tuple

from .errors import RowLengthMismatchError


class RowMatrix:
    """Ordered rows of equal length.

    Attributes:
        rows: Stored rows as tuples
        num_rows: Number of rows
        num_cols: Values per row (0 while the matrix is empty)
    """

    def __init__(self, *rows: Sequence[Any]):
        self.rows: List[Tuple[Any, ...]] = []
        self.num_rows = 0
        self.num_cols = 0
        for row in rows:
            self.add_row(row)

    def add_row(self, row: Sequence[Any]) -> None:
        """
        Append a row.

        Args:
            row: Values of the row

        Raises:
            RowLengthMismatchError: If the matrix already holds rows and the
                new row has a different length
        """
        row = tuple(row)
        if self.num_rows > 0 and len(row) != self.num_cols:
            raise RowLengthMismatchError(self.num_cols, len(row))
        self.rows.append(row)
        self.num_rows += 1
        self.num_cols = len(row)

    def transpose(self) -> "RowMatrix":
        """Return a new matrix with rows and columns exchanged.

        Shapes with a zero dimension keep the other one, so an Nx0 matrix
        transposes to 0xN and back.
        """
        if self.num_rows == 0:
            return RowMatrix(*([()] * self.num_cols))
        transposed = RowMatrix(*zip(*self.rows))
        transposed.num_cols = self.num_rows
        return transposed

    def num_elem(self) -> int:
        return self.num_rows * self.num_cols

    def __iter__(self) -> Iterator[Tuple[Any, ...]]:
        return iter(self.rows)

    def __len__(self) -> int:
        return self.num_rows

    def __eq__(self, other) -> bool:
        if not isinstance(other, RowMatrix):
            return NotImplemented
        return (
            (self.num_rows, self.num_cols, self.rows)
            == (other.num_rows, other.num_cols, other.rows)
        )

    def __repr__(self) -> str:
        return f"RowMatrix({self.num_rows}x{self.num_cols}, rows={self.rows!r})"
