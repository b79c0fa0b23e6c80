"""Out-of-band invocation context injected into callback methods.

A method declaring a parameter annotated with ``ToolContext`` receives the
caller-supplied context in that slot. The parameter never appears in the
generated input schema and is never read from the JSON payload.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from toolbind.foundation.errors import InvalidArgumentError


class ToolContext(Mapping[str, object]):
    """Read-only mapping of caller-supplied runtime values.

    Example:
        >>> ctx = ToolContext({"user_id": "u-42"})
        >>> ctx["user_id"]
        'u-42'
        >>> ToolContext().is_empty
        True
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, object] | None = None, /, **kw: object) -> None:
        self._data: Mapping[str, object] = MappingProxyType({**(data or {}), **kw})

    @classmethod
    def of(cls, value: ToolContext | Mapping[str, object] | None, *, callback: str = "") -> ToolContext | None:
        """Normalise a caller-supplied context; plain mappings are wrapped."""
        if value is None or isinstance(value, ToolContext):
            return value
        if not isinstance(value, Mapping):
            raise InvalidArgumentError(f"Tool context must be a mapping, got {type(value).__name__}", callback=callback)
        return cls(value)

    @property
    def context(self) -> Mapping[str, object]:
        return self._data

    @property
    def is_empty(self) -> bool:
        return not self._data

    def __getitem__(self, key: str) -> object:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"ToolContext({dict(self._data)!r})"
