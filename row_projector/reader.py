"""Forward-only data reader over a DB-API cursor.

DataReader is the cursor-shaped source for a Mapper. It reads one row at a
time and resolves column names to ordinals from ``cursor.description``.
Handles both tuple-like rows and dict-like rows from different drivers.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from row_projector.core.exceptions import ColumnNotFound, ReaderError


class DataReader:
    """Forward-only, single-pass reader positioned on a current row.

    Args:
        cursor: DB-API 2.0 cursor with an executed query.

    Raises:
        ReaderError: If the cursor has no result set.
    """

    def __init__(self, cursor: Any) -> None:
        if cursor.description is None:
            raise ReaderError("Cursor has no result set")
        self._cursor = cursor
        self._columns: list[str] = [desc[0] for desc in cursor.description]
        self._ordinals: dict[str, int] = {}
        self._folded: dict[str, int] = {}
        for index, name in enumerate(self._columns):
            self._ordinals.setdefault(name, index)
            self._folded.setdefault(name.lower(), index)
        self._current: Any = None
        self._position = -1
        self._exhausted = False

    @property
    def columns(self) -> list[str]:
        return list(self._columns)

    @property
    def position(self) -> int:
        """Zero-based index of the current row, -1 before the first read."""
        return self._position

    def read(self) -> bool:
        """Advance to the next row. Returns False once the cursor is exhausted."""
        if self._exhausted:
            return False
        row = self._cursor.fetchone()
        if row is None:
            self._current = None
            self._exhausted = True
            return False

        # Dict-like rows (psycopg dict_row, MySQL dict cursor) are keyed by name
        if isinstance(row, dict):
            row = tuple(row[name] for name in self._columns)

        self._current = row
        self._position += 1
        return True

    def ordinal(self, name: str, *, case_insensitive: bool = False) -> int:
        """Return the index of column *name*.

        Raises:
            ColumnNotFound: If no column has that name.
        """
        index = self._ordinals.get(name)
        if index is None and case_insensitive:
            index = self._folded.get(name.lower())
        if index is None:
            raise ColumnNotFound(name, self.columns)
        return index

    def get_value(self, name: str, *, case_insensitive: bool = False) -> Any:
        """Return the value of column *name* on the current row."""
        if self._current is None:
            state = "exhausted" if self._exhausted else "not positioned; call read() first"
            raise ReaderError(f"No current row: reader is {state}")
        return self._current[self.ordinal(name, case_insensitive=case_insensitive)]

    def __getitem__(self, name: str) -> Any:
        return self.get_value(name)

    def __iter__(self) -> Iterator[DataReader]:
        while self.read():
            yield self

    def close(self) -> None:
        """Close the underlying cursor."""
        self._exhausted = True
        self._current = None
        close = getattr(self._cursor, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> DataReader:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
