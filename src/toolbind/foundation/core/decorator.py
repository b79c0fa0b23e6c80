"""Decorator-based callback definition for module-level functions.

Turns a plain function into a static MethodCallback with a schema inferred
from its type hints.

Example:
    >>> @callback(description="Convert a temperature between units")
    ... def convert(value: float, source: Unit, target: Unit) -> float:
    ...     return _convert(value, source, target)
    ...
    >>> convert.call('{"value": 21.5, "source": "CELSIUS", "target": "FAHRENHEIT"}')
    '70.7'
    >>> registry.register(convert)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, overload

from .method import MethodCallback
from .target import CallableTarget, MethodKind

if TYPE_CHECKING:
    from toolbind.foundation.config import ToolbindSettings
    from toolbind.io.codec import Codec


def _extract_description(docstring: str | None) -> str | None:
    """First line of a docstring."""
    if not docstring:
        return None
    first = docstring.strip().split("\n")[0].strip()
    return first or None


@overload
def callback(func: Callable[..., Any]) -> MethodCallback: ...

@overload
def callback(
    *,
    description: str | None = None,
    codec: Codec | None = None,
    settings: ToolbindSettings | None = None,
) -> Callable[[Callable[..., Any]], MethodCallback]: ...


def callback(
    func: Callable[..., Any] | None = None,
    *,
    description: str | None = None,
    codec: Codec | None = None,
    settings: ToolbindSettings | None = None,
) -> MethodCallback | Callable[[Callable[..., Any]], MethodCallback]:
    """Create a MethodCallback from a function.

    The callback is named after the function; there is no separate name.

    Args:
        func: The function to wrap (used when the decorator is applied without parens)
        description: Defaults to the first line of the docstring
        codec: JSON codec override
        settings: Settings override

    Raises:
        InvalidArgumentError: no description given and the function has no docstring

    Example:
        >>> @callback
        ... def greet(name: str) -> str:
        ...     '''Greet someone by name.'''
        ...     return f"Hello, {name}"
        ...
        >>> greet.call('{"name": "Ada"}')
        'Hello, Ada'
    """
    def decorator(fn: Callable[..., Any]) -> MethodCallback:
        target = CallableTarget(None, fn, fn.__name__, MethodKind.STATIC, None)
        desc = description or _extract_description(fn.__doc__) or ""
        return MethodCallback(target, desc, codec=codec, settings=settings)

    return decorator(func) if func is not None else decorator
