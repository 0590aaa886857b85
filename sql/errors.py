"""
=================================
Statement building error classes.
=================================

Every failure raised while building a statement derives from
StatementBuildError, so callers can catch the whole family at once.
Builders raise before producing any output and never touch caller state.
"""


class StatementBuildError(Exception):
    """Base exception for statement building failures."""
    pass


class NoInsertFieldsError(StatementBuildError):
    """Raised when an INSERT is requested without any column values."""

    def __init__(self, table: str = ""):
        message = "no insert fields"
        if table:
            message = f"{message} for table '{table}'"
        super().__init__(message)
        self.table = table


class NoUpdateFieldsError(StatementBuildError):
    """Raised when an UPDATE is requested without any column values."""

    def __init__(self, table: str = ""):
        message = "no update fields"
        if table:
            message = f"{message} for table '{table}'"
        super().__init__(message)
        self.table = table


class RowLengthMismatchError(StatementBuildError):
    """Raised when a row does not match the column count of a RowMatrix."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"row length mismatch: expected {expected} values, got {actual}"
        )
        self.expected = expected
        self.actual = actual


class InvalidLimitError(StatementBuildError, ValueError):
    """Raised when a Limit is built from invalid bounds."""
    pass


class UnsupportedValueError(StatementBuildError, TypeError):
    """Raised when a value is not one of the supported SQL scalar kinds."""

    def __init__(self, value):
        super().__init__(
            f"unsupported SQL value of type {type(value).__name__}: {value!r}"
        )
        self.value = value
