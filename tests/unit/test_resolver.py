"""Unit tests for constructor resolution."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Annotated, NamedTuple, Optional, Protocol

import pytest
from pydantic import BaseModel

from row_projector.core.config import MapperOptions
from row_projector.core.exceptions import InvalidTargetType
from row_projector.mapping.column import Column, row_constructor
from row_projector.mapping.resolver import resolve_constructor


@dataclass
class User:
    id: int
    name: str


class Account:
    def __init__(self, id: int, tags: list[str], balance: Optional[Decimal] = None) -> None:
        self.id = id
        self.tags = tags
        self.balance = balance


class Point:
    def __init__(self, x: int, y: int, label: str) -> None:
        self.x = x
        self.y = y
        self.label = label

    @row_constructor
    @classmethod
    def from_row(cls, x: int, y: int) -> Point:
        return cls(x, y, "row")

    @classmethod
    @row_constructor
    def from_other_row(cls, z: int) -> Point:
        return cls(z, z, "other")


class Coordinates(NamedTuple):
    lat: float
    lon: float


class Employee:
    def __init__(self, id: Annotated[int, Column("EMP_ID")], name: str) -> None:
        self.id = id
        self.name = name


class Varargs:
    def __init__(self, id: int, *args: int, flag, **kwargs: str) -> None:
        self.id = id
        self.flag = flag


class PositionalOnly:
    def __init__(self, id: int, /, name: str) -> None:
        self.id = id
        self.name = name


class UserModel(BaseModel):
    id: int
    email: str


class Shape(ABC):
    @abstractmethod
    def area(self) -> float: ...


class Closeable(Protocol):
    def close(self) -> None: ...


class TestResolveConstructor:
    def test_dataclass_parameters_in_declaration_order(self) -> None:
        signature = resolve_constructor(User)
        assert signature.factory is User
        assert [p.name for p in signature.parameters] == ["id", "name"]
        assert [p.annotation for p in signature.parameters] == [int, str]
        assert [p.default for p in signature.parameters] == [0, ""]
        assert signature.columns == ("id", "name")

    def test_unsupported_parameters_are_dropped(self) -> None:
        signature = resolve_constructor(Account)
        assert [p.name for p in signature.parameters] == ["id", "balance"]
        assert signature.dropped == ("tags",)

    def test_unsupported_parameters_rejected_in_reject_mode(self) -> None:
        options = MapperOptions(unsupported_parameters="reject")
        with pytest.raises(InvalidTargetType, match="tags"):
            resolve_constructor(Account, options)

    def test_first_marked_factory_wins(self) -> None:
        signature = resolve_constructor(Point)
        assert signature.factory == Point.from_row
        assert [p.name for p in signature.parameters] == ["x", "y"]

    def test_named_tuple_uses_class_annotations(self) -> None:
        signature = resolve_constructor(Coordinates)
        assert [(p.name, p.annotation) for p in signature.parameters] == [
            ("lat", float),
            ("lon", float),
        ]

    def test_pydantic_model(self) -> None:
        signature = resolve_constructor(UserModel)
        assert [p.name for p in signature.parameters] == ["id", "email"]

    def test_column_annotation_renames_column(self) -> None:
        signature = resolve_constructor(Employee)
        assert signature.columns == ("EMP_ID", "name")
        assert signature.parameters[0].name == "id"

    def test_aliases_rename_column(self) -> None:
        options = MapperOptions(aliases={"user_name": "name"})
        signature = resolve_constructor(User, options)
        assert signature.columns == ("id", "user_name")

    def test_varargs_skipped_and_untyped_kept(self) -> None:
        signature = resolve_constructor(Varargs)
        assert [p.name for p in signature.parameters] == ["id", "flag"]
        assert signature.parameters[1].default is None

    def test_positional_only_flag(self) -> None:
        signature = resolve_constructor(PositionalOnly)
        assert [p.positional for p in signature.parameters] == [True, False]

    def test_resolution_is_deterministic(self) -> None:
        assert resolve_constructor(Account) == resolve_constructor(Account)


class TestInvalidTargetType:
    def test_not_a_class(self) -> None:
        with pytest.raises(InvalidTargetType, match="not a class"):
            resolve_constructor(42)

    def test_abstract_class(self) -> None:
        with pytest.raises(InvalidTargetType, match="abstract"):
            resolve_constructor(Shape)

    def test_protocol(self) -> None:
        with pytest.raises(InvalidTargetType):
            resolve_constructor(Closeable)

    def test_error_carries_target(self) -> None:
        with pytest.raises(InvalidTargetType) as exc_info:
            resolve_constructor(Shape)
        assert exc_info.value.target_type is Shape
