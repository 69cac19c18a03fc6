"""Exception types raised by sql-scaffold.

Errors are raised synchronously at the offending call. Rendering never raises
for structural reasons; validation errors only surface from ``validate()``.
"""

from typing import Any


class SqlScaffoldError(Exception):
    """Base class for all sql-scaffold errors."""


class UnsupportedInputError(SqlScaffoldError, TypeError):
    """Raised when a converter has no rule for the given input type.

    Attributes:
        converter_name: Name of the call-site converter that rejected the value
        value: The rejected value
    """

    def __init__(self, converter_name: str, value: Any):
        self.converter_name = converter_name
        self.value = value
        super().__init__(
            f"Unsupported input for {converter_name}: {type(value).__name__} ({value!r})"
        )


class QueryValidationError(SqlScaffoldError, ValueError):
    """Raised by ``validate()`` when a structural rule is violated.

    Attributes:
        reason: Human-readable description of the violated rule
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class ColumnNotFoundError(SqlScaffoldError, LookupError):
    """Raised in strict mode when a column to retarget was never added."""
