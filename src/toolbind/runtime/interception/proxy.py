"""Interface-based interception proxies.

An ``InterceptingProxy`` stands in for a target object. Methods declared
on its interfaces run through the interceptor chain; every other attribute
is forwarded untouched. Registries recognise proxies explicitly through
``is_proxy``/``proxy_interfaces`` rather than by inspecting the target.

Example:
    >>> class WeatherService(Protocol):
    ...     def getWeather(self, city: str, unit: Unit) -> str: ...
    >>> svc = proxy(WeatherServiceImpl(), WeatherService, interceptors=[LoggingInterceptor()])
    >>> svc.getWeather("Barcelona", Unit.CELSIUS)   # logged, then delegated
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Sequence
from typing import Any, Protocol

from toolbind.foundation.errors import InvalidArgumentError

from .interceptor import Interceptor, MethodInvocation, compose

_SKIPPED_BASES = (object, Protocol)


def declared_methods(interface: type) -> dict[str, object]:
    """Public methods declared on an interface and its bases, in definition order.

    Values are the raw class attributes (functions, staticmethods or
    classmethods). Subclass definitions win over inherited ones.
    """
    found: dict[str, object] = {}
    for klass in interface.__mro__:
        if klass in _SKIPPED_BASES or klass.__module__ == "typing":
            continue
        for name, value in vars(klass).items():
            if name.startswith("_") or name in found:
                continue
            if inspect.isfunction(value) or isinstance(value, (staticmethod, classmethod)):
                found[name] = value
    return found


def _default_interfaces(target: object) -> tuple[type, ...]:
    return tuple(
        c for c in type(target).__mro__[1:]
        if c not in _SKIPPED_BASES and (inspect.isabstract(c) or getattr(c, "_is_protocol", False))
    )


class InterceptingProxy:
    """Proxy routing interface method calls through an interceptor chain."""

    __slots__ = ("__target", "__interfaces", "__interceptors", "__chain", "__methods")

    def __init__(
        self,
        target: object,
        interfaces: Sequence[type] = (),
        interceptors: Sequence[Interceptor] = (),
    ) -> None:
        if target is None:
            raise InvalidArgumentError("Proxy target must not be None")
        interfaces = tuple(interfaces) or _default_interfaces(target)
        if not interfaces:
            raise InvalidArgumentError(f"No interfaces to proxy for '{type(target).__qualname__}'")

        methods: set[str] = set()
        for iface in interfaces:
            if not isinstance(iface, type):
                raise InvalidArgumentError(f"Proxy interface must be a class, got {iface!r}")
            declared = declared_methods(iface)
            if missing := [name for name in declared if not callable(getattr(target, name, None))]:
                raise InvalidArgumentError(
                    f"'{type(target).__qualname__}' does not implement {iface.__qualname__}: missing {', '.join(missing)}"
                )
            methods.update(declared)

        self.__target = target
        self.__interfaces = interfaces
        self.__interceptors = tuple(interceptors)
        self.__chain = compose(self.__interceptors)
        self.__methods = frozenset(methods)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_InterceptingProxy__"):
            # unset slot during construction or copy
            raise AttributeError(name)
        attr = getattr(self.__target, name)
        if name not in self.__methods or not callable(attr):
            return attr
        chain, target = self.__chain, self.__target

        @functools.wraps(attr)
        def intercepted(*args: Any, **kwargs: Any) -> Any:
            return chain(MethodInvocation(target=target, method_name=name, args=args, kwargs=kwargs))

        return intercepted

    def __repr__(self) -> str:
        names = ", ".join(i.__qualname__ for i in self.__interfaces)
        return f"<InterceptingProxy [{names}] for {self.__target!r}>"


def proxy(target: object, *interfaces: type, interceptors: Sequence[Interceptor] = ()) -> InterceptingProxy:
    """Wrap ``target`` in an InterceptingProxy.

    With no interfaces given, the target's abstract base classes and
    protocols are used.
    """
    return InterceptingProxy(target, interfaces, interceptors)


def is_proxy(obj: object) -> bool:
    return isinstance(obj, InterceptingProxy)


def proxy_interfaces(obj: object) -> tuple[type, ...]:
    """Interfaces exposed by a proxy, in declared order (empty for plain objects)."""
    if not isinstance(obj, InterceptingProxy):
        return ()
    return obj._InterceptingProxy__interfaces  # type: ignore[attr-defined]


def proxy_target(obj: object) -> object:
    """The object behind a proxy, or ``obj`` itself when it isn't one."""
    if not isinstance(obj, InterceptingProxy):
        return obj
    return obj._InterceptingProxy__target  # type: ignore[attr-defined]
