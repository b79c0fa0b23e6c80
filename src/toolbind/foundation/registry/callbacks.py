"""Callback registry: a named set of callbacks offered to a model.

Provides:
- Registration and lookup by callback name
- Descriptor listing and provider-neutral function-tool definitions
- Non-raising execution by name, for orchestration loops
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING

from toolbind.foundation.errors import CallbackError, ErrorCode, InvalidArgumentError, JsonDict
from toolbind.runtime.observability import get_logger

if TYPE_CHECKING:
    from toolbind.foundation.core import CallbackDescriptor, FunctionCallback, ToolContext

log = get_logger("toolbind.registry")


class CallbackRegistry:
    """Registry of FunctionCallbacks keyed by name.

    Example:
        >>> callbacks = CallbackRegistry()
        >>> callbacks.register(MethodCallback.from_registry(objects, "weatherService", "getWeather",
        ...                                                 "Get weather information for a city"))
        >>> callbacks.to_openai()
        [{'type': 'function', 'function': {'name': 'getWeather', ...}}]
        >>> callbacks.execute("getWeather", '{"city": "Barcelona", "unit": "CELSIUS"}')
        'Weather in Barcelona: 23°CELSIUS'
    """

    __slots__ = ("_callbacks",)

    def __init__(self) -> None:
        self._callbacks: dict[str, FunctionCallback] = {}

    def register(self, callback: FunctionCallback) -> FunctionCallback:
        """Register a callback; returns it so the call can be chained."""
        name = callback.name
        if name in self._callbacks:
            raise InvalidArgumentError(f"Callback '{name}' already registered. Use unregister() first.",
                                       callback=name)
        self._callbacks[name] = callback
        log.debug("registered callback", callback=name)
        return callback

    def register_all(self, *callbacks: FunctionCallback) -> None:
        for cb in callbacks:
            self.register(cb)

    def unregister(self, name: str) -> bool:
        """Remove a callback by name. Returns True if found."""
        return self._callbacks.pop(name, None) is not None

    def get(self, name: str) -> FunctionCallback | None:
        return self._callbacks.get(name)

    def clear(self) -> None:
        self._callbacks.clear()

    def __getitem__(self, name: str) -> FunctionCallback:
        """Get callback by name, raises KeyError if not found."""
        return self._callbacks[name]

    def __contains__(self, name: object) -> bool:
        return name in self._callbacks

    def __len__(self) -> int:
        return len(self._callbacks)

    def __iter__(self) -> Iterator[FunctionCallback]:
        return iter(self._callbacks.values())

    # ─────────────────────────────────────────────────────────────────
    # Formatting
    # ─────────────────────────────────────────────────────────────────

    def describe_all(self) -> list[CallbackDescriptor]:
        return [cb.describe() for cb in self._callbacks.values()]

    def describe(self) -> str:
        """Markdown list of callbacks for prompts."""
        return "\n".join(f"- **{d.name}**: {d.description}" for d in self.describe_all())

    def to_openai(self) -> list[JsonDict]:
        """Function-tool definitions in the OpenAI ``tools`` format."""
        return [
            {"type": "function", "function": {"name": d.name, "description": d.description, "parameters": d.parameters}}
            for d in self.describe_all()
        ]

    # ─────────────────────────────────────────────────────────────────
    # Execution
    # ─────────────────────────────────────────────────────────────────

    def execute(
        self,
        name: str,
        function_input: str,
        tool_context: ToolContext | Mapping[str, object] | None = None,
    ) -> str:
        """Run a callback by name, rendering any failure as text for the model."""
        if (cb := self._callbacks.get(name)) is None:
            log.warning("unknown callback requested", callback=name)
            available = ", ".join(self._callbacks) or "none"
            return CallbackError(
                callback=name or "<unnamed>",
                message=f"Callback '{name}' not found. Available: {available}",
                code=ErrorCode.NOT_FOUND,
            ).render()
        return cb.execute(function_input, tool_context)
