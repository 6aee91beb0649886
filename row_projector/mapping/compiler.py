"""Projection compiler.

Turns a resolved constructor into a per-row function. All reflection
happens here, once; the returned projection only performs column lookups,
conversions and the constructor call.
"""

from __future__ import annotations

import logging
from typing import Any

from row_projector.core.config import DEFAULT_OPTIONS, MapperOptions
from row_projector.core.conversion import ValueConverter
from row_projector.core.enums import SourceShape
from row_projector.mapping.accessor import ColumnAccessor, accessor_for
from row_projector.mapping.plan import Projection
from row_projector.mapping.resolver import resolve_constructor

logger = logging.getLogger(__name__)


def compile_projection(
    target_type: Any,
    shape: SourceShape,
    options: MapperOptions | None = None,
    accessor: ColumnAccessor | None = None,
) -> Projection:
    """Build the projection for *target_type* reading from *shape* sources.

    Args:
        target_type: Class to instantiate once per row.
        shape: Source shape the projection will be applied to.
        options: Mapper options (aliases, case folding, unsupported types).
        accessor: Column accessor to read through. Defaults to the built-in
            accessor for *shape*. It is bound once, here.

    Returns:
        An immutable Projection.

    Raises:
        InvalidTargetType: If the target has no usable constructor.
    """
    options = options or DEFAULT_OPTIONS
    signature = resolve_constructor(target_type, options)
    if accessor is None:
        accessor = accessor_for(shape, options.case_insensitive)
    get = accessor.get
    factory = signature.factory

    positional: list[tuple[str, ValueConverter]] = []
    keyword: list[tuple[str, str, ValueConverter]] = []
    for binding in signature.parameters:
        converter = ValueConverter(binding.annotation, binding.default)
        if binding.positional:
            positional.append((binding.column, converter))
        else:
            keyword.append((binding.name, binding.column, converter))

    positional_steps = tuple(positional)
    keyword_steps = tuple(keyword)

    def project(source: Any) -> Any:
        args = [conv(get(source, column), column) for column, conv in positional_steps]
        kwargs = {name: conv(get(source, column), column) for name, column, conv in keyword_steps}
        return factory(*args, **kwargs)

    logger.debug(
        "Compiled %s projection for %s binding columns %s",
        shape.value,
        target_type.__name__,
        list(signature.columns),
    )
    return Projection(signature=signature, shape=shape, function=project)
