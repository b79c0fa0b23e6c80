"""JSON codec for callback input, output and schema documents.

orjson is a core dependency - no fallback to stdlib json. Values orjson
cannot serialize natively (pydantic models, sets, classes) go through
``_default``.

Usage:
    >>> from toolbind.io.codec import encode_str, decode
    >>> encode_str({"city": "Barcelona"})
    '{"city":"Barcelona"}'
    >>> decode('{"unit": "CELSIUS"}')
    {'unit': 'CELSIUS'}
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import orjson
from pydantic import BaseModel

if TYPE_CHECKING:
    from toolbind.foundation.errors import JsonValue

JSONDecodeError = orjson.JSONDecodeError

_OPTIONS = orjson.OPT_NON_STR_KEYS | orjson.OPT_UTC_Z
_PRETTY_OPTIONS = _OPTIONS | orjson.OPT_INDENT_2


def _default(obj: object) -> object:
    """Fallback serializer for types orjson doesn't handle."""
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    if isinstance(obj, type):
        return f"{obj.__module__}.{obj.__qualname__}"
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


@runtime_checkable
class Codec(Protocol):
    """Protocol for JSON codecs."""

    name: str
    content_type: str

    def encode(self, data: object) -> bytes: ...
    def decode(self, data: bytes | str) -> JsonValue: ...


class OrjsonCodec:
    """orjson codec - 3-10x faster than stdlib json.

    Features: native datetime/uuid/enum support, dataclasses.
    """

    __slots__ = ()
    name = "orjson"
    content_type = "application/json"

    def encode(self, data: object) -> bytes:
        return orjson.dumps(data, default=_default, option=_OPTIONS)

    def decode(self, data: bytes | str) -> JsonValue:
        return orjson.loads(data)


_orjson = OrjsonCodec()


def get_codec() -> Codec:
    """Get the default codec."""
    return _orjson


# ═══════════════════════════════════════════════════════════════════════════════
# Direct Functions (hot path - no indirection)
# ═══════════════════════════════════════════════════════════════════════════════

def encode(data: object) -> bytes:
    """Encode to JSON bytes (orjson)."""
    return orjson.dumps(data, default=_default, option=_OPTIONS)


def encode_str(data: object) -> str:
    """Encode to JSON string (orjson)."""
    return orjson.dumps(data, default=_default, option=_OPTIONS).decode()


def pretty(data: object) -> str:
    """Encode to an indented JSON string."""
    return orjson.dumps(data, default=_default, option=_PRETTY_OPTIONS).decode()


def decode(data: bytes | str) -> JsonValue:
    """Decode from JSON bytes/str (orjson)."""
    return orjson.loads(data)
