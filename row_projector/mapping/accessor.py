"""Column accessors.

A ColumnAccessor reads one named value out of a source row. There is one
implementation per source shape; the compiler picks it once and binds
every parameter through it.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from row_projector.core.enums import SourceShape
from row_projector.core.exceptions import ColumnNotFound
from row_projector.reader import DataReader


@runtime_checkable
class ColumnAccessor(Protocol):
    """Reads a named column from a source without advancing it."""

    def get(self, source: Any, name: str) -> Any:
        """Return the raw value of column *name*."""
        ...


class CursorAccessor:
    """Accessor for a DataReader positioned on its current row."""

    def __init__(self, case_insensitive: bool = False) -> None:
        self._case_insensitive = case_insensitive

    def get(self, source: DataReader, name: str) -> Any:
        return source.get_value(name, case_insensitive=self._case_insensitive)


def _row_keys(row: Any) -> list[str] | None:
    keys = getattr(row, "keys", None)
    if keys is None:
        return None
    return list(keys())


class RowAccessor:
    """Accessor for materialized rows: dicts, sqlite3.Row, other mappings.

    Name matching follows the row type: dict keys match exactly, while
    sqlite3.Row already matches case-insensitively. DataReader is always
    exact unless ``case_insensitive`` is set, so the same query can resolve
    ``NAME`` for ``name`` on the row path and raise ColumnNotFound on the
    cursor path.
    """

    def __init__(self, case_insensitive: bool = False) -> None:
        self._case_insensitive = case_insensitive

    def get(self, source: Any, name: str) -> Any:
        try:
            return source[name]
        except (KeyError, IndexError):
            # sqlite3.Row raises IndexError for unknown keys
            pass

        keys = _row_keys(source)
        if self._case_insensitive and keys is not None:
            folded = name.lower()
            for key in keys:
                if isinstance(key, str) and key.lower() == folded:
                    return source[key]
        raise ColumnNotFound(name, keys)


def accessor_for(shape: SourceShape, case_insensitive: bool = False) -> ColumnAccessor:
    """Return the accessor for a source shape."""
    if shape is SourceShape.CURSOR:
        return CursorAccessor(case_insensitive)
    return RowAccessor(case_insensitive)
