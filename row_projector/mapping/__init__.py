"""Mapping layer - compile rows into typed objects."""

from __future__ import annotations

from row_projector.mapping.accessor import (
    ColumnAccessor,
    CursorAccessor,
    RowAccessor,
    accessor_for,
)
from row_projector.mapping.column import Column, row_constructor
from row_projector.mapping.compiler import compile_projection
from row_projector.mapping.mapper import Mapper
from row_projector.mapping.plan import ConstructorSignature, ParameterBinding, Projection
from row_projector.mapping.protocol import RowMapper
from row_projector.mapping.resolver import resolve_constructor

__all__ = [
    "Mapper",
    "RowMapper",
    "Column",
    "row_constructor",
    "compile_projection",
    "resolve_constructor",
    "ColumnAccessor",
    "CursorAccessor",
    "RowAccessor",
    "accessor_for",
    "ConstructorSignature",
    "ParameterBinding",
    "Projection",
]
