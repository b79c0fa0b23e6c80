"""Standardized error handling for callbacks.

Provides error codes, the structured CallbackError response, and the
exception hierarchy raised by resolution, construction and invocation.
Uses Pydantic for validation and serialization.
"""

from __future__ import annotations

import traceback
from enum import StrEnum
from functools import lru_cache
from typing import Annotated, ClassVar

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class ErrorCode(StrEnum):
    """Standard error codes for callback failures.

    Used for programmatic error handling and retry decisions.
    """
    NOT_FOUND = "NOT_FOUND"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    SCHEMA_GENERATION = "SCHEMA_GENERATION"
    DECODE = "DECODE"
    COERCION = "COERCION"
    INVOCATION = "INVOCATION"
    TIMEOUT = "TIMEOUT"
    NETWORK_ERROR = "NETWORK_ERROR"
    RATE_LIMITED = "RATE_LIMITED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    UNKNOWN = "UNKNOWN"


# Flattened pattern -> code mapping, checked in insertion order
_PATTERN_CODES: dict[str, ErrorCode] = {
    "timeout": ErrorCode.TIMEOUT,
    "connection": ErrorCode.NETWORK_ERROR,
    "network": ErrorCode.NETWORK_ERROR,
    "rate": ErrorCode.RATE_LIMITED,
    "permission": ErrorCode.PERMISSION_DENIED,
    "forbidden": ErrorCode.PERMISSION_DENIED,
    "json": ErrorCode.DECODE,
    "decode": ErrorCode.DECODE,
    "notfound": ErrorCode.NOT_FOUND,
    "keyerror": ErrorCode.NOT_FOUND,
    "value": ErrorCode.INVALID_ARGUMENT,
}
_PATTERN_KEYS = tuple(_PATTERN_CODES.keys())


@lru_cache(maxsize=256)
def _classify_cached(exc_key: str) -> ErrorCode:
    haystack = exc_key.lower()
    for pattern in _PATTERN_KEYS:
        if pattern in haystack:
            return _PATTERN_CODES[pattern]
    return ErrorCode.UNKNOWN


def classify_exception(exc: BaseException) -> ErrorCode:
    """Map a foreign exception to an error code via its type name and message."""
    if isinstance(exc, CallbackException):
        return exc.error.code
    return _classify_cached(f"{type(exc).__name__} {exc}")


# Pre-computed retryable codes set for O(1) lookup
_RETRYABLE_CODES: frozenset[ErrorCode] = frozenset({
    ErrorCode.RATE_LIMITED,
    ErrorCode.TIMEOUT,
    ErrorCode.NETWORK_ERROR,
})


class CallbackError(BaseModel):
    """Structured error response for callback failures.

    Attributes:
        callback: Name of the callback (or lookup key) that failed
        message: Human-readable error message
        code: Machine-readable error code for programmatic handling
        recoverable: Whether the error might succeed on retry
        details: Optional detailed information (e.g., stack trace)
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        validate_default=True,
        json_schema_extra={
            "title": "Callback Error",
            "description": "Structured error from callback resolution or invocation",
            "examples": [{
                "callback": "getWeather",
                "message": "Unknown value 'KELVIN' for enum Unit",
                "code": "COERCION",
                "recoverable": False,
            }],
        },
    )

    callback: Annotated[str, Field(min_length=1, description="Name of the callback that produced the error")]
    message: Annotated[str, Field(min_length=1, description="Human-readable error message")]
    code: ErrorCode = Field(default=ErrorCode.UNKNOWN, description="Machine-readable error classification")
    recoverable: bool = Field(default=False, description="Whether retry might succeed")
    details: str | None = Field(default=None, description="Optional detailed error info (e.g., stack trace)")

    @field_validator("message", mode="before")
    @classmethod
    def _ensure_message(cls, v: str | Exception) -> str:
        """Accept Exception objects and extract message."""
        return str(v) if isinstance(v, Exception) else v

    @computed_field
    @property
    def is_retryable(self) -> bool:
        """Whether this error is typically retryable (rate limits, timeouts, network)."""
        return self.code in _RETRYABLE_CODES

    @computed_field
    @property
    def severity(self) -> str:
        """Error severity level for logging/display."""
        if self.code in _RETRYABLE_CODES:
            return "warning"
        if self.code in (ErrorCode.NOT_FOUND, ErrorCode.SCHEMA_GENERATION):
            return "critical"
        return "error"

    def render(self) -> str:
        """Format error for LLM consumption."""
        parts = [f"**Callback Error ({self.callback}):** {self.message}"]
        if self.recoverable:
            parts.append("\n_This error may be recoverable - consider retrying or trying an alternative approach._")
        if self.details:
            parts.append(f"\n\nDetails:\n```\n{self.details}\n```")
        return "".join(parts)

    __str__ = render


class CallbackException(Exception):
    """Base exception carrying a CallbackError.

    Subclasses fix the ErrorCode; construct with a message and the
    callback name (or the lookup key when no callback exists yet).
    """

    code: ClassVar[ErrorCode] = ErrorCode.UNKNOWN

    def __init__(self, message: str, *, callback: str = "<unresolved>", recoverable: bool = False,
                 details: str | None = None) -> None:
        self.error = CallbackError(
            callback=callback or "<unresolved>",
            message=message,
            code=self.code,
            recoverable=recoverable,
            details=details,
        )
        super().__init__(message)

    @property
    def message(self) -> str:
        return self.error.message

    def render(self) -> str:
        return self.error.render()


class InvalidArgumentError(CallbackException, ValueError):
    """Malformed construction or call arguments. A caller bug, never retryable."""
    code = ErrorCode.INVALID_ARGUMENT


class NotFoundError(InvalidArgumentError):
    """Resolution could not find the requested object or method."""
    code = ErrorCode.NOT_FOUND


class SchemaGenerationError(CallbackException):
    """A parameter type cannot be modeled as JSON Schema."""
    code = ErrorCode.SCHEMA_GENERATION


class DecodeError(CallbackException):
    """Call input is not a well-formed JSON object."""
    code = ErrorCode.DECODE


class CoercionError(CallbackException):
    """A field value cannot be converted to its declared parameter type."""
    code = ErrorCode.COERCION

    def __init__(self, message: str, *, parameter: str, callback: str = "<unresolved>") -> None:
        self.parameter = parameter
        super().__init__(message, callback=callback)


class InvocationError(CallbackException):
    """The target method raised. The original exception is kept as ``cause``."""
    code = ErrorCode.INVOCATION

    def __init__(self, callback: str, cause: BaseException, *, include_trace: bool = True) -> None:
        self.cause = cause
        self.cause_code = classify_exception(cause)
        super().__init__(
            f"{type(cause).__name__}: {cause}",
            callback=callback,
            recoverable=self.cause_code in _RETRYABLE_CODES,
            details="".join(traceback.format_exception(cause)) if include_trace else None,
        )
