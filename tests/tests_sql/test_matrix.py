"""
Comprehensive pytest suite for sql/matrix.py

Tests cover:
- RowMatrix construction and add_row rectangularity checks
- transpose: shape, element placement, identity, double transpose
"""

import pytest

from sql.errors import RowLengthMismatchError
from sql.matrix import RowMatrix


@pytest.mark.unit
def test_build_rejects_ragged_rows():
    with pytest.raises(RowLengthMismatchError):
        RowMatrix(["a1", "a2"], ["b1", "b2", "b3"])


@pytest.mark.unit
def test_build_empty_matrix():
    m = RowMatrix()

    assert m.num_rows == 0
    assert m.num_cols == 0
    assert m.num_elem() == 0
    assert len(m) == 0


@pytest.mark.unit
def test_add_row():
    m = RowMatrix()
    m.add_row(["a1", "a2"])
    m.add_row(["b1", "b2"])

    assert m.rows[1][1] == "b2"
    assert (m.num_rows, m.num_cols) == (2, 2)


@pytest.mark.unit
def test_first_row_fixes_column_count():
    m = RowMatrix()
    m.add_row([1, 2, 3])

    with pytest.raises(RowLengthMismatchError, match="expected 3 values, got 2"):
        m.add_row([1, 2])

    # rejected rows leave the matrix unchanged
    assert m.num_rows == 1


@pytest.mark.unit
def test_transpose():
    m = RowMatrix(["a1", "a2", "a3"], ["b1", "b2", "b3"])

    t = m.transpose()

    assert (t.num_rows, t.num_cols) == (3, 2)
    assert t.rows[1][1] == "b2"
    assert t.rows[1][0] == "a2"
    assert t.rows[2][1] == "b3"
    # the source matrix is unchanged
    assert (m.num_rows, m.num_cols) == (2, 3)


@pytest.mark.unit
def test_transpose_twice_returns_equal_matrix():
    m = RowMatrix([1, 2, 3], [4, 5, 6], [7, 8, 9], [10, 11, 12])

    assert m.transpose().transpose() == m


@pytest.mark.unit
def test_transpose_preserves_element_identity():
    marker = object()
    m = RowMatrix([marker, 1])

    assert m.transpose().rows[0][0] is marker


@pytest.mark.edge_case
def test_transpose_empty_matrix():
    t = RowMatrix().transpose()

    assert t.num_rows == 0
    assert t == RowMatrix()


@pytest.mark.edge_case
def test_iteration_yields_row_tuples():
    m = RowMatrix([1, 2], [3, 4])

    assert list(m) == [(1, 2), (3, 4)]
    assert m.num_elem() == 4


@pytest.mark.edge_case
def test_equality_with_other_types():
    assert RowMatrix([1]) != [(1,)]


@pytest.mark.regression
@pytest.mark.parametrize("rows", [([], []), ([], [], [])])
def test_transpose_keeps_zero_width_shape(rows):
    """An Nx0 matrix transposes to 0xN and back to Nx0."""
    m = RowMatrix(*rows)

    t = m.transpose()

    assert (t.num_rows, t.num_cols) == (0, len(rows))
    assert t.transpose() == m
    assert t.transpose().rows == [()] * len(rows)


@pytest.mark.regression
def test_matrices_of_different_empty_shapes_differ():
    assert RowMatrix([], []) != RowMatrix()
