"""Row-to-object mapper with cached compiled projections.

Supports plain classes, dataclasses, named tuples and Pydantic models.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Generic, TypeVar

from row_projector.core.config import DEFAULT_OPTIONS, MapperOptions
from row_projector.core.enums import SourceShape
from row_projector.mapping.accessor import ColumnAccessor
from row_projector.mapping.compiler import compile_projection
from row_projector.mapping.plan import Projection
from row_projector.reader import DataReader

T = TypeVar("T")


class Mapper(Generic[T]):
    """Maps cursor rows and materialized rows to instances of *target_type*.

    Each source shape gets its own projection, compiled on first use and
    reused for the lifetime of the mapper. Compilation is guarded by a lock:
    concurrent first calls compile exactly once and all observe the same
    projection.

    Args:
        target_type: The class to construct from row data.
        options: Mapper options.
        aliases: Column-name to parameter-name mapping; merged into *options*.
        initializer: Callback invoked with every newly mapped instance.
        accessor: Column accessor for the cursor path, replacing the built-in
            DataReader accessor (for example a driver-specific value reader).
            Materialized rows always use the built-in row accessor.
    """

    def __init__(
        self,
        target_type: type[T],
        options: MapperOptions | None = None,
        *,
        aliases: dict[str, str] | None = None,
        initializer: Callable[[T], None] | None = None,
        accessor: ColumnAccessor | None = None,
    ) -> None:
        options = options or DEFAULT_OPTIONS
        if aliases:
            options = options.model_copy(update={"aliases": {**options.aliases, **aliases}})
        self._target_type = target_type
        self._options = options
        self._initializer = initializer
        self._accessor = accessor
        self._projections: dict[SourceShape, Projection] = {}
        self._lock = threading.Lock()

    @property
    def target_type(self) -> type[T]:
        return self._target_type

    @property
    def options(self) -> MapperOptions:
        return self._options

    @property
    def initializer(self) -> Callable[[T], None] | None:
        return self._initializer

    def set_initializer(self, initializer: Callable[[T], None] | None) -> None:
        """Register (or clear) the post-construction hook."""
        self._initializer = initializer

    def projection(self, shape: SourceShape) -> Projection:
        """Return the projection for *shape*, compiling it on first use."""
        projection = self._projections.get(shape)
        if projection is None:
            with self._lock:
                projection = self._projections.get(shape)
                if projection is None:
                    projection = compile_projection(
                        self._target_type,
                        shape,
                        self._options,
                        accessor=self._accessor if shape is SourceShape.CURSOR else None,
                    )
                    self._projections[shape] = projection
        return projection

    def is_compiled(self, shape: SourceShape) -> bool:
        return shape in self._projections

    def _apply(self, shape: SourceShape, source: Any) -> T:
        instance: T = self.projection(shape)(source)
        if self._initializer is not None:
            self._initializer(instance)
        return instance

    def map_reader(self, reader: Any) -> T:
        """Map the current row of a cursor source. Does not advance it.

        *reader* is a DataReader, or whatever source the custom accessor reads.
        """
        return self._apply(SourceShape.CURSOR, reader)

    def map_row(self, row: Any) -> T:
        """Map a materialized row (dict, sqlite3.Row or other mapping)."""
        return self._apply(SourceShape.ROW, row)

    def map(self, source: Any) -> T:
        """Map either source shape, dispatching on its type."""
        if isinstance(source, DataReader):
            return self.map_reader(source)
        return self.map_row(source)

    def map_one(self, row: Any) -> T:
        """Map a single materialized row."""
        return self.map_row(row)

    def map_many(self, rows: Iterable[Any]) -> list[T]:
        """Map all rows via map_row."""
        return [self.map_row(row) for row in rows]

    def iter_reader(self, reader: DataReader) -> Iterator[T]:
        """Advance *reader* row by row, yielding one instance per row."""
        while reader.read():
            yield self.map_reader(reader)
