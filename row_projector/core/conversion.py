"""Column value conversion.

Converts loosely-typed values returned by database drivers into the types
declared on constructor parameters. ``None`` is the database null marker
and always becomes the declared type's static default.

Coercion itself is delegated to Pydantic's ``TypeAdapter`` in lax mode,
with a few driver-specific adjustments applied first (bytes decoding,
``datetime`` narrowing, enum lookup by member name).
"""

from __future__ import annotations

import inspect
import types
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, Union, get_args, get_origin
from uuid import UUID

from pydantic import TypeAdapter, ValidationError

from row_projector.core.exceptions import InvalidConversion

_SCALAR_TYPES: frozenset[type] = frozenset(
    {bool, int, float, str, bytes, Decimal, datetime, date, time, timedelta, UUID}
)

# Types whose zero-argument constructor is their "no value" default
_ZERO_DEFAULT_TYPES: frozenset[type] = frozenset(
    {bool, int, float, str, bytes, Decimal, timedelta}
)

_MISSING: Any = object()


def _is_passthrough(target_type: Any) -> bool:
    return target_type is inspect.Parameter.empty or target_type is Any


def unwrap_type(target_type: Any) -> tuple[Any, bool]:
    """Strip ``Annotated`` and ``Optional`` wrappers.

    Returns:
        ``(base_type, nullable)``. Unions of several non-None types are
        returned unchanged.
    """
    if get_origin(target_type) is Annotated:
        target_type = get_args(target_type)[0]

    origin = get_origin(target_type)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(target_type) if arg is not type(None)]
        nullable = len(args) < len(get_args(target_type))
        if len(args) == 1:
            base, _ = unwrap_type(args[0])
            return base, nullable
        return target_type, nullable

    return target_type, False


def is_supported(target_type: Any) -> bool:
    """Return True if values of *target_type* can be read from a column."""
    if _is_passthrough(target_type):
        return True
    base, _ = unwrap_type(target_type)
    if base is Any:
        return True
    # Parameterized generics such as list[int] are never column types
    if get_origin(base) is not None or not isinstance(base, type):
        return False
    return base in _SCALAR_TYPES or issubclass(base, Enum)


def default_for(target_type: Any) -> Any:
    """Return the static default used when a column holds NULL.

    ``int`` → 0, ``str`` → "", ``bool`` → False and so on. Nullable,
    temporal, UUID, enum and unannotated types default to None.
    """
    if _is_passthrough(target_type):
        return None
    base, nullable = unwrap_type(target_type)
    if nullable:
        return None
    if base in _ZERO_DEFAULT_TYPES:
        return base()
    return None


def _prepare(value: Any, base: type) -> Any:
    """Adjust raw driver values before validation."""
    if base is str:
        if isinstance(value, (bytes, bytearray, memoryview)):
            return bytes(value).decode("utf-8")
        if isinstance(value, (int, float, Decimal, UUID)):
            return str(value)
        if isinstance(value, (date, time)):
            return value.isoformat()
        return value

    # Numeric flag columns (TINYINT, NUMBER(1)): any non-zero value is true
    if base is bool and isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return value != 0

    if base is bytes and isinstance(value, (bytearray, memoryview)):
        return bytes(value)

    if base is date and isinstance(value, datetime):
        return value.date()

    if base is datetime and isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time())

    if base is UUID and isinstance(value, (bytes, bytearray)) and len(value) == 16:
        return UUID(bytes=bytes(value))

    if isinstance(base, type) and issubclass(base, Enum) and isinstance(value, str):
        if value in base.__members__ and value not in base._value2member_map_:
            return base[value]

    return value


def _describe(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        errors = exc.errors()
        if errors:
            return str(errors[0]["msg"])
    return str(exc)


class ValueConverter:
    """Converter for a single declared type.

    Built once per constructor parameter at compile time so that per-row
    conversion never inspects the type again.

    Args:
        target_type: The declared parameter type.
        default: Value returned for NULL. Defaults to ``default_for(target_type)``.

    Raises:
        TypeError: If *target_type* is not a supported column type.
    """

    __slots__ = ("target_type", "default", "_base", "_adapter")

    def __init__(self, target_type: Any, default: Any = _MISSING) -> None:
        if not is_supported(target_type):
            raise TypeError(f"Unsupported column type: {target_type!r}")
        self.target_type = target_type
        self.default = default_for(target_type) if default is _MISSING else default

        if _is_passthrough(target_type):
            self._base: Any = Any
            self._adapter: TypeAdapter[Any] | None = None
        else:
            self._base, _ = unwrap_type(target_type)
            self._adapter = None if self._base is Any else TypeAdapter(self._base)

    def __call__(self, value: Any, column: str | None = None) -> Any:
        if value is None:
            return self.default
        if self._adapter is None:
            return value

        try:
            return self._adapter.validate_python(_prepare(value, self._base))
        except ValueError as e:
            # ValidationError and UnicodeDecodeError are both ValueErrors
            raise InvalidConversion(value, self.target_type, column, _describe(e)) from e

    def __repr__(self) -> str:
        return f"ValueConverter({self.target_type!r}, default={self.default!r})"


@lru_cache(maxsize=256)
def converter_for(target_type: Any) -> ValueConverter:
    """Return a shared converter for *target_type*."""
    return ValueConverter(target_type)


def convert(
    value: Any,
    target_type: Any,
    default: Any = _MISSING,
    *,
    column: str | None = None,
) -> Any:
    """Convert a raw column value to *target_type*.

    Args:
        value: Raw value from the driver. ``None`` means NULL.
        target_type: Declared type to convert to.
        default: Returned when *value* is None. Defaults to the static
            default of *target_type* (see ``default_for``).
        column: Column name used in error messages.

    Raises:
        InvalidConversion: If a present value cannot be converted.
    """
    if value is None:
        return default_for(target_type) if default is _MISSING else default
    try:
        converter = converter_for(target_type)
    except TypeError:
        # Unhashable Annotated metadata cannot be cached
        converter = ValueConverter(target_type)
    return converter(value, column)
