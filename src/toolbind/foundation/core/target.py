"""CallableTarget: one resolved method plus the object it is called on."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Callable

from toolbind.foundation.errors import InvalidArgumentError
from toolbind.runtime.interception import is_proxy, proxy_target


class MethodKind(StrEnum):
    INSTANCE = "instance"
    STATIC = "static"
    CLASS = "class"


@dataclass(frozen=True, slots=True)
class CallableTarget:
    """Immutable (owner, method) pair identifying exactly one callable unit.

    Attributes:
        owner: Receiver object (may be an InterceptingProxy); None for static methods
        function: The plain function behind the method
        name: Attribute name the method is reached by
        kind: Instance, static or class method
        declaring_class: Class the method was found on
        intercepted: Method was taken from an interception interface; calls go through the owner
    """
    owner: object | None
    function: Callable[..., Any]
    name: str
    kind: MethodKind = MethodKind.INSTANCE
    declaring_class: type | None = None
    intercepted: bool = False

    @property
    def is_static(self) -> bool:
        """True when no receiver instance is needed."""
        return self.kind is not MethodKind.INSTANCE

    @property
    def owner_name(self) -> str:
        if self.declaring_class is not None:
            return self.declaring_class.__qualname__
        if self.owner is not None:
            return type(proxy_target(self.owner)).__qualname__
        return self.function.__module__

    @classmethod
    def from_raw(cls, owner: object | None, raw: object, name: str, declaring_class: type | None,
                 *, intercepted: bool = False) -> CallableTarget:
        """Build from a raw class attribute (function, staticmethod or classmethod)."""
        if isinstance(raw, staticmethod):
            return cls(owner, raw.__func__, name, MethodKind.STATIC, declaring_class, intercepted)
        if isinstance(raw, classmethod):
            return cls(owner, raw.__func__, name, MethodKind.CLASS, declaring_class, intercepted)
        if inspect.isfunction(raw):
            return cls(owner, raw, name, MethodKind.INSTANCE, declaring_class, intercepted)
        raise InvalidArgumentError(f"'{name}' is not a method: {type(raw).__name__}", callback=name)

    @classmethod
    def of(cls, owner: object | None, method: str | Callable[..., Any]) -> CallableTarget:
        """Build a target from an owner and a method name, bound method or function.

        A plain function with no owner is treated as static.

        Example:
            >>> CallableTarget.of(service, "getWeather")
            >>> CallableTarget.of(None, service.getWeather)    # owner taken from the bound method
            >>> CallableTarget.of(None, format_report)         # module-level function
        """
        from .resolver import find_method, locate  # resolver builds targets too

        if isinstance(method, str):
            if owner is None:
                raise InvalidArgumentError(f"Owner required to look up method '{method}'", callback=method)
            return locate(owner, method)

        if inspect.ismethod(method):
            receiver = method.__self__
            if isinstance(receiver, type):
                return cls(owner, method.__func__, method.__name__, MethodKind.CLASS, receiver)
            return cls(receiver, method.__func__, method.__name__, MethodKind.INSTANCE, type(receiver))

        if inspect.isfunction(method):
            if owner is None:
                return cls(None, method, method.__name__, MethodKind.STATIC, None)
            klass = owner if isinstance(owner, type) else type(owner)
            found = find_method(klass, method.__name__)
            if found is not None and _unwrap(found[0]) is method:
                return cls.from_raw(None if isinstance(owner, type) else owner, found[0], method.__name__, found[1])
            return cls(owner, method, method.__name__, MethodKind.INSTANCE, klass)

        if callable(method) and is_proxy(owner):
            # bound proxy attribute: intercepted wrapper around the target method
            name = getattr(method, "__name__", None)
            if name is None:
                raise InvalidArgumentError(f"Cannot determine method name of {method!r}")
            return locate(owner, name)

        raise InvalidArgumentError(f"Unsupported method reference: {method!r}")


def _unwrap(raw: object) -> object:
    return raw.__func__ if isinstance(raw, (staticmethod, classmethod)) else raw
