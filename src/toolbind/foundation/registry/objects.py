"""Object registry: named target objects that callbacks are resolved against.

The resolver only needs the ``Registry`` protocol. ``ObjectRegistry`` is the
in-memory implementation; it keeps registration order, which decides which
object wins when several match a type.
"""

from __future__ import annotations

import inspect
from collections.abc import Iterator
from typing import Protocol, runtime_checkable

from toolbind.foundation.errors import InvalidArgumentError
from toolbind.runtime.interception import is_proxy, proxy_interfaces, proxy_target


@runtime_checkable
class Registry(Protocol):
    """Lookup surface the callback resolver works against."""

    def lookup_by_name(self, name: str) -> object | None: ...
    def lookup_all_by_type(self, tp: type) -> list[tuple[str, object]]: ...
    def is_intercepted(self, obj: object) -> bool: ...
    def intercepted_interfaces(self, obj: object) -> tuple[type, ...]: ...


def _assignable(obj: object, tp: type) -> bool:
    """Whether ``obj`` can stand in for ``tp``.

    A proxy is assignable only to its interfaces (and their bases), not to
    the concrete class of the object it wraps.
    """
    if is_proxy(obj):
        return any(tp in iface.__mro__ for iface in proxy_interfaces(obj))
    if tp in type(obj).__mro__:
        return True
    if getattr(tp, "_is_protocol", False):
        return getattr(tp, "_is_runtime_protocol", False) and isinstance(obj, tp)
    return isinstance(obj, tp)


class ObjectRegistry:
    """In-memory Registry keyed by name.

    Example:
        >>> registry = ObjectRegistry()
        >>> registry.register("weatherService", WeatherServiceImpl())
        >>> registry.register("auditedWeather", proxy(WeatherServiceImpl(), WeatherService,
        ...                                           interceptors=[LoggingInterceptor()]))
        >>> [n for n, _ in registry.lookup_all_by_type(WeatherService)]
        ['weatherService', 'auditedWeather']
    """

    __slots__ = ("_objects",)

    def __init__(self) -> None:
        self._objects: dict[str, object] = {}

    def register(self, name: str, obj: object) -> object:
        """Register ``obj`` under ``name``; returns ``obj``.

        Raises:
            InvalidArgumentError: blank name, ``None`` object, or name already taken
        """
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError("Object name must not be empty")
        if obj is None:
            raise InvalidArgumentError(f"Object registered as '{name}' must not be None")
        if name in self._objects:
            raise InvalidArgumentError(f"Object '{name}' already registered. Use unregister() first.")
        self._objects[name] = obj
        return obj

    def unregister(self, name: str) -> bool:
        """Remove an object by name. Returns True if found."""
        return self._objects.pop(name, None) is not None

    def lookup_by_name(self, name: str) -> object | None:
        return self._objects.get(name)

    def lookup_all_by_type(self, tp: type) -> list[tuple[str, object]]:
        """All (name, object) pairs assignable to ``tp``, in registration order."""
        if not inspect.isclass(tp):
            raise InvalidArgumentError(f"Expected a type, got {type(tp).__name__}")
        return [(n, o) for n, o in self._objects.items() if _assignable(o, tp)]

    def is_intercepted(self, obj: object) -> bool:
        return is_proxy(obj)

    def intercepted_interfaces(self, obj: object) -> tuple[type, ...]:
        return proxy_interfaces(obj) if is_proxy(obj) else ()

    def unwrap(self, obj: object) -> object:
        """The object behind a proxy, or ``obj`` itself."""
        return proxy_target(obj) if is_proxy(obj) else obj

    def names(self) -> list[str]:
        return list(self._objects)

    def __getitem__(self, name: str) -> object:
        return self._objects[name]

    def __contains__(self, name: object) -> bool:
        return name in self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[str]:
        return iter(self._objects)

    def __repr__(self) -> str:
        return f"ObjectRegistry({', '.join(self._objects)})"
