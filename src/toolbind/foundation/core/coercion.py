"""Call-time coercion of loosely-typed JSON values to declared parameter types."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from pydantic import ValidationError

from toolbind.foundation.errors import CoercionError
from toolbind.io import codec

from .params import ParameterSpec, TypeKind

if TYPE_CHECKING:
    from pydantic import TypeAdapter

    from toolbind.io.codec import Codec

_BOOLEANS = {"true": True, "false": False}


def canonical_text(value: object) -> str:
    """Textual form of a decoded JSON value.

    Booleans render as JSON literals, containers as compact JSON, everything
    else through ``str``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return codec.encode_str(value)
    return str(value)


def _parse_bool(text: str) -> bool:
    try:
        return _BOOLEANS[text.strip().lower()]
    except KeyError:
        raise ValueError(f"invalid literal for bool: {text!r}") from None


_PARSERS: dict[TypeKind, Callable[[str], Any]] = {
    TypeKind.INTEGER: int,
    TypeKind.NUMBER: float,
    TypeKind.BOOLEAN: _parse_bool,
}


def coerce(
    value: object,
    spec: ParameterSpec,
    *,
    adapter: TypeAdapter[Any] | None = None,
    json_codec: Codec | None = None,
    callback: str = "<unresolved>",
) -> Any:
    """Convert ``value`` to ``spec``'s declared type.

    ``None`` always stays ``None``. Structural kinds (collections, models,
    mappings) are re-encoded to JSON and validated by ``adapter``.

    Raises:
        CoercionError: the value cannot be converted
    """
    if value is None:
        return None

    match spec.kind:
        case TypeKind.STRING:
            return canonical_text(value)
        case TypeKind.INTEGER | TypeKind.NUMBER | TypeKind.BOOLEAN:
            text = canonical_text(value)
            try:
                return _PARSERS[spec.kind](text)
            except ValueError:
                raise CoercionError(
                    f"Cannot convert {text!r} to {spec.kind} for parameter '{spec.name}'",
                    parameter=spec.name, callback=callback,
                ) from None
        case TypeKind.ENUM:
            text = canonical_text(value)
            try:
                return spec.type.__members__[text]
            except KeyError:
                allowed = ", ".join(spec.type.__members__)
                raise CoercionError(
                    f"Unknown value {text!r} for enum {spec.type.__name__} of parameter '{spec.name}' "
                    f"(expected one of: {allowed})",
                    parameter=spec.name, callback=callback,
                ) from None
        case TypeKind.CONTEXT:
            raise CoercionError(f"Parameter '{spec.name}' is injected, not read from input",
                                parameter=spec.name, callback=callback)
        case _:
            if adapter is None:
                raise CoercionError(f"No type adapter for parameter '{spec.name}'",
                                    parameter=spec.name, callback=callback)
            raw = (json_codec or codec.get_codec()).encode(value)
            try:
                return adapter.validate_json(raw)
            except ValidationError as e:
                raise CoercionError(
                    f"Cannot convert value of parameter '{spec.name}' to {_type_name(spec.type)}: "
                    f"{e.error_count()} validation error(s): {_first_error(e)}",
                    parameter=spec.name, callback=callback,
                ) from e


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or repr(tp)


def _first_error(e: ValidationError) -> str:
    err = e.errors()[0]
    loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
    return f"{loc}: {err.get('msg', 'invalid')}"
