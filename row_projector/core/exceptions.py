"""row_projector exception hierarchy.

Mapping failures surface directly to the caller of ``map``. There is no
retry and no partial instance: a row either becomes an object or raises.
"""

from __future__ import annotations

from typing import Any


class RowProjectorError(Exception):
    """Base exception for all row_projector errors."""


# --- Mapping ---


class MappingError(RowProjectorError):
    """Base for mapping errors."""


def _type_name(target_type: Any) -> str:
    return getattr(target_type, "__name__", None) or repr(target_type)


class InvalidTargetType(MappingError):
    """Raised at compilation when the target type has no usable constructor."""

    def __init__(self, target_type: Any, detail: str) -> None:
        self.target_type = target_type
        self.detail = detail
        super().__init__(f"Cannot map to {_type_name(target_type)}: {detail}")


class ColumnNotFound(MappingError, KeyError):
    """Raised when a bound column is missing from the source row."""

    def __init__(self, column: str, available: list[str] | None = None) -> None:
        self.column = column
        self.available = available
        message = f"Column not found: '{column}'"
        if available is not None:
            message += f" (available: {available})"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class InvalidConversion(MappingError, ValueError):
    """Raised when a present column value cannot be coerced to its declared type."""

    def __init__(
        self,
        value: Any,
        target_type: Any,
        column: str | None = None,
        detail: str | None = None,
    ) -> None:
        self.value = value
        self.target_type = target_type
        self.column = column
        where = f" for column '{column}'" if column is not None else ""
        message = f"Cannot convert {value!r} to {_type_name(target_type)}{where}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


# --- Reader ---


class ReaderError(RowProjectorError):
    """Raised on invalid use of a DataReader."""
