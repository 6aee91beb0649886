"""row_projector - compiled row-to-object projection engine."""

from __future__ import annotations

from row_projector.core.config import MapperOptions
from row_projector.core.conversion import ValueConverter, convert, default_for, is_supported
from row_projector.core.enums import SourceShape
from row_projector.core.exceptions import (
    ColumnNotFound,
    InvalidConversion,
    InvalidTargetType,
    MappingError,
    ReaderError,
    RowProjectorError,
)
from row_projector.mapping import (
    Column,
    ColumnAccessor,
    CursorAccessor,
    Mapper,
    Projection,
    RowAccessor,
    RowMapper,
    compile_projection,
    resolve_constructor,
    row_constructor,
)
from row_projector.reader import DataReader

__all__ = [
    # Mapping
    "Mapper",
    "RowMapper",
    "Column",
    "row_constructor",
    "compile_projection",
    "resolve_constructor",
    "Projection",
    # Accessors
    "ColumnAccessor",
    "CursorAccessor",
    "RowAccessor",
    # Reader
    "DataReader",
    # Conversion
    "ValueConverter",
    "convert",
    "default_for",
    "is_supported",
    # Config
    "MapperOptions",
    # Enums
    "SourceShape",
    # Exceptions
    "RowProjectorError",
    "MappingError",
    "InvalidTargetType",
    "ColumnNotFound",
    "InvalidConversion",
    "ReaderError",
]
