"""Constructor resolution.

Selects the constructor a projection will call and the parameters it can
bind. Resolution is deliberately simple: the first declared constructor
wins, with no overload or arity matching against the available columns.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Annotated, Any, ForwardRef, get_args, get_origin, get_type_hints

from row_projector.core.config import DEFAULT_OPTIONS, MapperOptions
from row_projector.core.conversion import default_for, is_supported
from row_projector.core.exceptions import InvalidTargetType
from row_projector.mapping.column import Column
from row_projector.mapping.plan import ConstructorSignature, ParameterBinding

logger = logging.getLogger(__name__)

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def _marked_factory(target_type: type) -> Callable[..., Any] | None:
    """Return the first public ``@row_constructor`` factory in declaration order."""
    for klass in target_type.__mro__:
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            func = attr.__func__ if isinstance(attr, (classmethod, staticmethod)) else None
            if func is None or name.startswith("_"):
                continue
            if getattr(func, "__row_constructor__", False):
                return getattr(target_type, name)  # type: ignore[no-any-return]
    return None


def _class_hints(target_type: type) -> dict[str, Any]:
    """Class-level annotations, used for parameters the signature leaves untyped."""
    try:
        return get_type_hints(target_type, include_extras=True)
    except (NameError, TypeError):
        return {}


def _signature(target_type: type, factory: Callable[..., Any]) -> inspect.Signature:
    try:
        try:
            return inspect.signature(factory, eval_str=True)
        except NameError:
            # Unresolvable forward reference; keep the string annotations
            return inspect.signature(factory)
    except (ValueError, TypeError) as e:
        raise InvalidTargetType(target_type, f"no inspectable public constructor ({e})") from e


def _column_name(name: str, annotation: Any, options: MapperOptions) -> str:
    if get_origin(annotation) is Annotated:
        for arg in get_args(annotation)[1:]:
            if isinstance(arg, Column):
                return arg.name
    return options.column_for(name)


def resolve_constructor(
    target_type: Any,
    options: MapperOptions | None = None,
) -> ConstructorSignature:
    """Resolve the constructor signature for *target_type*.

    Candidates, in order: public classmethods or staticmethods marked with
    ``@row_constructor``, then the class itself. Only the first candidate is
    considered. Parameters whose type is not convertible are dropped, or
    rejected when ``options.unsupported_parameters == "reject"``.

    Raises:
        InvalidTargetType: If the target has no usable constructor.
    """
    options = options or DEFAULT_OPTIONS

    if not isinstance(target_type, type):
        raise InvalidTargetType(target_type, "target is not a class")
    if getattr(target_type, "_is_protocol", False):
        raise InvalidTargetType(target_type, "protocols cannot be instantiated")
    if inspect.isabstract(target_type):
        raise InvalidTargetType(target_type, "abstract classes cannot be instantiated")

    factory = _marked_factory(target_type) or target_type
    sig = _signature(target_type, factory)
    hints = _class_hints(target_type)

    bindings: list[ParameterBinding] = []
    dropped: list[str] = []
    for param in sig.parameters.values():
        if param.kind in _SKIPPED_KINDS:
            continue

        annotation = param.annotation
        if annotation is inspect.Parameter.empty or isinstance(annotation, (str, ForwardRef)):
            annotation = hints.get(param.name, annotation)

        if not is_supported(annotation):
            dropped.append(param.name)
            continue

        bindings.append(
            ParameterBinding(
                name=param.name,
                column=_column_name(param.name, annotation, options),
                annotation=annotation,
                default=default_for(annotation),
                positional=param.kind is inspect.Parameter.POSITIONAL_ONLY,
            )
        )

    if dropped:
        if options.unsupported_parameters == "reject":
            raise InvalidTargetType(
                target_type, f"parameters of unsupported types: {dropped}"
            )
        logger.debug(
            "Leaving parameters %s of %s unbound: unsupported types",
            dropped,
            target_type.__name__,
        )

    return ConstructorSignature(
        target_type=target_type,
        factory=factory,
        parameters=tuple(bindings),
        dropped=tuple(dropped),
    )
