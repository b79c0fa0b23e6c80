"""Extra request parameters for model-provider calls.

Holds additional HTTP headers, query parameters and body fields that a
provider client merges into its outgoing request. Fluent and mutable while
being configured; read access goes through read-only views.

Example:
    >>> extra = (ExtraParameters()
    ...     .header("X-Custom-Header", "custom-value")
    ...     .query("api-version", "2024-02-15-preview")
    ...     .body("enable_thinking", True))
    >>> extra.headers["X-Custom-Header"]
    'custom-value'
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Self

from toolbind.foundation.errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Mapping


def _check(kind: str, key: str, value: object) -> None:
    if not key or not key.strip():
        raise InvalidArgumentError(f"{kind} key must not be null or empty")
    if value is None:
        raise InvalidArgumentError(f"{kind} value must not be null")


class ExtraParameters:
    """Extra headers, query parameters and body fields, in insertion order."""

    __slots__ = ("_headers", "_query", "_body")

    def __init__(
        self,
        headers: Mapping[str, str] | None = None,
        query: Mapping[str, str] | None = None,
        body: Mapping[str, object] | None = None,
    ) -> None:
        self._headers: dict[str, str] = dict(headers or {})
        self._query: dict[str, str] = dict(query or {})
        self._body: dict[str, object] = dict(body or {})

    def header(self, key: str, value: str) -> Self:
        _check("Header", key, value)
        self._headers[key] = value
        return self

    def query(self, key: str, value: str) -> Self:
        _check("Query parameter", key, value)
        self._query[key] = value
        return self

    def body(self, key: str, value: object) -> Self:
        _check("Body field", key, value)
        self._body[key] = value
        return self

    @property
    def headers(self) -> Mapping[str, str]:
        return MappingProxyType(self._headers)

    @property
    def query_params(self) -> Mapping[str, str]:
        return MappingProxyType(self._query)

    @property
    def body_fields(self) -> Mapping[str, object]:
        return MappingProxyType(self._body)

    @property
    def is_empty(self) -> bool:
        return not (self._headers or self._query or self._body)

    def copy(self) -> ExtraParameters:
        """Independent copy; later changes to either side don't leak."""
        return ExtraParameters(self._headers, self._query, self._body)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExtraParameters):
            return NotImplemented
        return (self._headers, self._query, self._body) == (other._headers, other._query, other._body)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ExtraParameters(headers={self._headers!r}, query={self._query!r}, body={self._body!r})"
