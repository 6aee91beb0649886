"""Mapper protocol.

Row-iteration code calls map_one for a single materialized row and
map_many for a list of them.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class RowMapper(Protocol[T]):
    """Base mapper protocol."""

    def map_one(self, row: Any) -> T:
        """Map a single row to a target object."""
        ...

    def map_many(self, rows: list[Any]) -> list[T]:
        """Map multiple rows to a list of target objects."""
        ...
