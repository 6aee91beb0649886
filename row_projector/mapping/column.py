"""Column annotation and row constructor marker."""

from __future__ import annotations

from typing import Any, TypeVar

F = TypeVar("F")


class Column:
    """Annotation naming the column a parameter binds to.

    Usage:
        def __init__(self, id: Annotated[int, Column("USER_ID")]) -> None: ...
    """

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"Column({self.name!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Column) and other.name == self.name

    def __hash__(self) -> int:
        return hash((Column, self.name))


def row_constructor(func: F) -> F:
    """Mark a classmethod or staticmethod as the constructor used for rows.

    The first marked factory in class body order takes precedence over
    ``__init__``. Works above or below ``@classmethod``.
    """
    target: Any = func.__func__ if isinstance(func, (classmethod, staticmethod)) else func
    target.__row_constructor__ = True
    return func
