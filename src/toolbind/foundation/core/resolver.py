"""Callback resolution: find a target object and a method on it.

Targets are looked up in a Registry either by name or by type. When the
object found is an interception proxy, the method is taken from the proxy's
interfaces so that calls keep going through the interceptor chain.

Method lookup is by name only and the first match wins; there is no
disambiguation by arity or parameter types.
"""

from __future__ import annotations

import inspect
from collections.abc import Sequence
from typing import TYPE_CHECKING

from toolbind.foundation.errors import InvalidArgumentError, NotFoundError
from toolbind.runtime.interception import declared_methods, is_proxy, proxy_interfaces, proxy_target
from toolbind.runtime.observability import get_logger

from .target import CallableTarget

if TYPE_CHECKING:
    from toolbind.foundation.registry import Registry

log = get_logger("toolbind.resolver")


def find_method(klass: type, name: str) -> tuple[object, type] | None:
    """First method called ``name`` along ``klass``'s MRO, with its declaring class."""
    for c in klass.__mro__:
        if name in vars(c):
            raw = vars(c)[name]
            if inspect.isfunction(raw) or isinstance(raw, (staticmethod, classmethod)):
                return raw, c
            return None
    return None


def find_method_in_interfaces(interfaces: Sequence[type], name: str) -> tuple[object, type] | None:
    """Scan interfaces in declared order; the first one declaring ``name`` wins."""
    for iface in interfaces:
        if (raw := declared_methods(iface).get(name)) is not None:
            return raw, iface
    return None


def locate(owner: object, method_name: str, *, registry: Registry | None = None) -> CallableTarget:
    """Find ``method_name`` on ``owner`` (an instance, a proxy, or a class).

    Proxies, and objects the registry reports as intercepted, are scanned
    through their interfaces and marked so that calls are dispatched through
    the owner. Everything else is scanned through its own class.

    Raises:
        NotFoundError: no method of that name exists
    """
    intercepted = True
    if registry is not None and registry.is_intercepted(owner):
        interfaces = tuple(registry.intercepted_interfaces(owner))
        found = find_method_in_interfaces(interfaces, method_name)
        scanned = type(proxy_target(owner))
    elif is_proxy(owner):
        found = find_method_in_interfaces(proxy_interfaces(owner), method_name)
        scanned = type(proxy_target(owner))
    else:
        scanned = owner if isinstance(owner, type) else type(owner)
        intercepted = False
        found = find_method(scanned, method_name)

    if found is None:
        raise NotFoundError(f"Method '{method_name}' not found in '{scanned.__qualname__}'", callback=method_name)
    raw, declaring = found
    return CallableTarget.from_raw(None if isinstance(owner, type) else owner, raw, method_name, declaring,
                                   intercepted=intercepted)


def resolve(registry: Registry, bean_name_or_type: str | type, method_name: str) -> CallableTarget:
    """Resolve a registered object and one of its methods into a CallableTarget.

    Args:
        registry: Where targets are registered
        bean_name_or_type: Registered name, or a type all candidates must be assignable to
        method_name: Name of the method to expose

    By type, the first intercepted candidate (in registration order) is
    preferred; otherwise the first candidate.

    Raises:
        NotFoundError: object or method missing
        InvalidArgumentError: malformed arguments

    Example:
        >>> registry = ObjectRegistry()
        >>> registry.register("weatherService", proxy(WeatherServiceImpl(), WeatherService))
        >>> target = resolve(registry, WeatherService, "getWeather")
    """
    if registry is None:
        raise InvalidArgumentError("Registry must not be None")
    if bean_name_or_type is None:
        raise InvalidArgumentError("Bean name or type must not be None")
    if not isinstance(method_name, str) or not method_name.strip():
        raise InvalidArgumentError("Method name must not be empty")

    if isinstance(bean_name_or_type, str):
        name = bean_name_or_type
        if (bean := registry.lookup_by_name(name)) is None:
            raise NotFoundError(f"No object named '{name}' found in registry", callback=name)
    elif isinstance(bean_name_or_type, type):
        candidates = registry.lookup_all_by_type(bean_name_or_type)
        type_name = bean_name_or_type.__qualname__
        if not candidates:
            raise NotFoundError(f"No object of type '{type_name}' found in registry", callback=type_name)
        name, bean = next(
            ((n, obj) for n, obj in candidates if registry.is_intercepted(obj)),
            candidates[0],
        )
    else:
        raise InvalidArgumentError(
            "bean_name_or_type must be either a str (object name) or a type, "
            f"got {type(bean_name_or_type).__name__}"
        )

    target = locate(bean, method_name, registry=registry)
    log.debug("resolved callback target", bean=name, method=method_name,
              intercepted=registry.is_intercepted(bean), declaring=target.owner_name)
    return target
