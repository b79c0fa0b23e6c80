"""Parameter extraction: the single seam between ``inspect`` and the invoker.

Turns a method signature into an ordered tuple of ParameterSpec. Schema
generation and call-time coercion both consume the same tuple, so their
view of the parameters cannot drift apart.
"""

from __future__ import annotations

import inspect
import types
from collections.abc import Sequence, Set
from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Any, Callable, Union, get_args, get_origin, get_type_hints

from toolbind.foundation.errors import SchemaGenerationError

from .context import ToolContext

MISSING: Any = inspect.Parameter.empty
NONE_TYPE = type(None)

_COLLECTION_TYPES = (list, tuple, set, frozenset, Sequence, Set)
_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


class TypeKind(StrEnum):
    """Semantic category of a declared parameter type."""
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"
    ENUM = "enum"
    COLLECTION = "collection"
    OBJECT = "object"
    CONTEXT = "context"


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    """One method parameter, in signature order.

    Attributes:
        name: Parameter name, also the JSON field name
        annotation: Type as declared (may be ``X | None``)
        type: Declared type with an optional wrapper removed
        kind: Semantic category driving schema and coercion
        default: Signature default, or MISSING
        keyword_only: Must be passed by keyword
    """
    name: str
    annotation: Any
    type: Any
    kind: TypeKind
    default: Any = MISSING
    keyword_only: bool = False

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    @property
    def is_context(self) -> bool:
        return self.kind is TypeKind.CONTEXT


def unwrap_optional(annotation: Any) -> Any:
    """``X | None`` / ``Optional[X]`` -> ``X``; anything else unchanged."""
    if get_origin(annotation) in (Union, types.UnionType):
        args = [a for a in get_args(annotation) if a is not NONE_TYPE]
        if len(args) == 1:
            return args[0]
    return annotation


def classify(annotation: Any) -> TypeKind:
    """Map a (non-optional) annotation to its TypeKind."""
    tp = unwrap_optional(annotation)
    origin = get_origin(tp)
    if origin is None and inspect.isclass(tp):
        if issubclass(tp, ToolContext):
            return TypeKind.CONTEXT
        if issubclass(tp, Enum):
            return TypeKind.ENUM
        if issubclass(tp, bool):
            return TypeKind.BOOLEAN
        if issubclass(tp, int):
            return TypeKind.INTEGER
        if issubclass(tp, float):
            return TypeKind.NUMBER
        if issubclass(tp, str):
            return TypeKind.STRING
        if issubclass(tp, (bytes, bytearray)):
            return TypeKind.OBJECT
        if issubclass(tp, _COLLECTION_TYPES):
            return TypeKind.COLLECTION
        return TypeKind.OBJECT
    # list[int], Sequence[Model], set[str]; dict and Mapping stay OBJECT
    if inspect.isclass(origin) and issubclass(origin, _COLLECTION_TYPES) and not issubclass(origin, (str, bytes)):
        return TypeKind.COLLECTION
    return TypeKind.OBJECT


def resolve_hints(function: Callable[..., Any]) -> dict[str, Any]:
    try:
        return get_type_hints(function)
    except (NameError, TypeError) as e:
        raise SchemaGenerationError(
            f"Cannot resolve type hints of '{function.__qualname__}': {e}",
            callback=function.__name__,
        ) from e


def extract_parameters(function: Callable[..., Any], *, skip_first: bool) -> tuple[ParameterSpec, ...]:
    """Build the ParameterSpec tuple of ``function``.

    Args:
        function: Plain (unbound) function
        skip_first: Drop the receiver (``self``/``cls``) of instance and class methods

    Unannotated parameters are treated as ``str``. Variadic parameters
    cannot be described as named fields and raise SchemaGenerationError.
    """
    hints = resolve_hints(function)
    params = list(inspect.signature(function).parameters.values())
    if skip_first:
        params = params[1:]

    specs: list[ParameterSpec] = []
    for param in params:
        if param.kind in _VARIADIC:
            raise SchemaGenerationError(
                f"Variadic parameter '{param.name}' of '{function.__qualname__}' cannot be described",
                callback=function.__name__,
            )
        annotation = hints.get(param.name, str)
        specs.append(ParameterSpec(
            name=param.name,
            annotation=annotation,
            type=unwrap_optional(annotation),
            kind=classify(annotation),
            default=param.default,
            keyword_only=param.kind is inspect.Parameter.KEYWORD_ONLY,
        ))
    return tuple(specs)


def return_annotation(function: Callable[..., Any]) -> Any:
    """Declared return type, ``NONE_TYPE`` for ``-> None``, or MISSING when undeclared."""
    return resolve_hints(function).get("return", MISSING)
