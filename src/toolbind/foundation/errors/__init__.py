"""Unified error handling for toolbind.

- ErrorCode: Standard error codes for callback failures
- CallbackError: Structured, renderable error model
- CallbackException and subclasses: raised by resolution, construction and calls
- JSON type aliases
"""

from .errors import (
    CallbackError,
    CallbackException,
    CoercionError,
    DecodeError,
    ErrorCode,
    InvalidArgumentError,
    InvocationError,
    NotFoundError,
    SchemaGenerationError,
    classify_exception,
)
from .types import JsonDict, JsonMapping, JsonPrimitive, JsonValue

__all__ = [
    # Error model
    "ErrorCode", "CallbackError", "classify_exception",
    # Exceptions
    "CallbackException", "InvalidArgumentError", "NotFoundError", "SchemaGenerationError",
    "DecodeError", "CoercionError", "InvocationError",
    # JSON aliases
    "JsonDict", "JsonMapping", "JsonPrimitive", "JsonValue",
]
