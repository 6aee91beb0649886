"""Projection plan data classes.

Frozen dataclasses describing a resolved constructor and the compiled
projection built from it. Used by Mapper at execution time.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from row_projector.core.enums import SourceShape


@dataclass(frozen=True)
class ParameterBinding:
    """A constructor parameter bound to a source column."""

    name: str
    column: str
    annotation: Any
    default: Any  # value used when the column is NULL
    positional: bool = False


@dataclass(frozen=True)
class ConstructorSignature:
    """Constructor selected for a target type and its bindable parameters."""

    target_type: type
    factory: Callable[..., Any]
    parameters: tuple[ParameterBinding, ...]
    dropped: tuple[str, ...] = ()

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(p.column for p in self.parameters)


@dataclass(frozen=True)
class Projection:
    """Compiled row-to-object function for one source shape."""

    signature: ConstructorSignature
    shape: SourceShape
    function: Callable[[Any], Any]

    @property
    def target_type(self) -> type:
        return self.signature.target_type

    def __call__(self, source: Any) -> Any:
        return self.function(source)
