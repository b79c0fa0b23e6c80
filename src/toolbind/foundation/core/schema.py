"""Input-schema generation from a ParameterSpec tuple.

Builds a Pydantic model over the describable parameters with
``create_model`` and lifts its JSON Schema into a standalone document:

    {
      "$schema": "https://json-schema.org/draft/2020-12/schema",
      "type": "object",
      "properties": {...},
      "required": [...],
      "$defs": {...}
    }

Properties are keyed by parameter name, leading underscores included.
Context parameters are left out of the document entirely. Enum parameters
are described by member *names*, which is what call-time coercion accepts.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Literal

from pydantic import BaseModel, Field, PydanticUserError, TypeAdapter, create_model

from toolbind.foundation.config import DRAFT_2020_12
from toolbind.foundation.errors import JsonDict, SchemaGenerationError
from toolbind.io import codec

from .params import ParameterSpec, TypeKind

# Kinds coerced structurally through a TypeAdapter at call time
STRUCTURAL_KINDS = frozenset({TypeKind.COLLECTION, TypeKind.OBJECT})


@dataclass(frozen=True, slots=True)
class SchemaResult:
    """Output of schema generation, computed once per callback."""
    document: JsonDict
    text: str
    accepts_context: bool
    adapters: Mapping[str, TypeAdapter[Any]]


def _enum_field_type(spec: ParameterSpec) -> Any:
    names = tuple(spec.type.__members__)
    literal = Literal[names]  # type: ignore[valid-type]
    return literal if spec.annotation is spec.type else literal | None


def _field(spec: ParameterSpec, alias: str | None = None) -> tuple[Any, Any]:
    """(annotation, FieldInfo) for create_model."""
    annotation = _enum_field_type(spec) if spec.kind is TypeKind.ENUM else spec.annotation
    extra = {"alias": alias} if alias else {}
    if not spec.has_default:
        return annotation, Field(..., **extra)
    default = spec.default.name if isinstance(spec.default, Enum) else spec.default
    return annotation, Field(default=default, **extra)


def _field_names(params: list[ParameterSpec]) -> dict[str, str]:
    """Model field name per parameter.

    Pydantic rejects field names with a leading underscore, so such
    parameters get a mangled field name and keep their own name as alias.
    """
    taken = {p.name for p in params}
    names: dict[str, str] = {}
    for p in params:
        field = p.name
        if field.startswith("_"):
            field = p.name.lstrip("_") or "field"
            while field in taken:
                field += "_"
            taken.add(field)
        names[p.name] = field
    return names


def generate_schema(
    model_name: str,
    params: tuple[ParameterSpec, ...],
    *,
    dialect: str = DRAFT_2020_12,
    pretty: bool = True,
) -> SchemaResult:
    """Describe ``params`` as a JSON Schema object document.

    Args:
        model_name: Name for the intermediate Pydantic model (shows up in titles)
        params: Parameters in signature order
        dialect: URI written to ``$schema``
        pretty: Indent the rendered text

    Raises:
        SchemaGenerationError: a parameter type cannot be modeled
    """
    accepts_context = any(p.is_context for p in params)
    described = [p for p in params if not p.is_context]

    try:
        field_names = _field_names(described)
        fields = {
            field_names[p.name]: _field(p, alias=None if field_names[p.name] == p.name else p.name)
            for p in described
        }
        model: type[BaseModel] = create_model(model_name, **fields)  # type: ignore[call-overload]
        raw = model.model_json_schema()
        adapters = {p.name: TypeAdapter(p.annotation) for p in described if p.kind in STRUCTURAL_KINDS}
    except (PydanticUserError, TypeError, NameError, ValueError) as e:
        raise SchemaGenerationError(f"Cannot generate input schema for '{model_name}': {e}",
                                    callback=model_name) from e

    document: JsonDict = {"$schema": dialect, "type": "object", "properties": raw.get("properties", {})}
    if required := raw.get("required"):
        document["required"] = required
    if defs := raw.get("$defs"):
        document["$defs"] = defs

    text = codec.pretty(document) if pretty else codec.encode_str(document)
    return SchemaResult(
        document=document,
        text=text,
        accepts_context=accepts_context,
        adapters=MappingProxyType(adapters),
    )
