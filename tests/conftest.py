"""Shared test fixtures."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator

import pytest


@pytest.fixture
def sqlite_conn() -> Iterator[sqlite3.Connection]:
    """SQLite in-memory connection with a populated users table."""
    conn = sqlite3.connect(":memory:")
    conn.execute(
        "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, balance TEXT, "
        "created_at TEXT, active INTEGER, status TEXT)"
    )
    conn.executemany(
        "INSERT INTO users (id, name, balance, created_at, active, status) "
        "VALUES (?, ?, ?, ?, ?, ?)",
        [
            (1, "Alice", "10.50", "2024-01-02T03:04:05", 1, "active"),
            (2, "Bob", None, None, 0, "SUSPENDED"),
            (3, None, "0", "2024-06-30T00:00:00", None, None),
        ],
    )
    conn.commit()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def rows_conn(sqlite_conn: sqlite3.Connection) -> sqlite3.Connection:
    """Same database, returning sqlite3.Row materialized rows."""
    sqlite_conn.row_factory = sqlite3.Row
    return sqlite_conn


class FakeCursor:
    """Minimal DB-API cursor over in-memory rows."""

    def __init__(self, columns: list[str], rows: list[object]) -> None:
        self.description = [(name, None, None, None, None, None, None) for name in columns]
        self._rows = list(rows)
        self.closed = False

    def fetchone(self) -> object:
        if not self._rows:
            return None
        return self._rows.pop(0)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_cursor():
    """Helper to build a FakeCursor.

    Usage:
        make_cursor(["id", "name"], [(1, "a"), (2, "b")])
    """

    def _make(columns: list[str], rows: list[object]) -> FakeCursor:
        return FakeCursor(columns, rows)

    return _make
