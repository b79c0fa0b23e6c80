"""Toolbind - Expose plain Python methods as model-callable callbacks.

Resolves an object and one of its methods, infers a JSON Schema for the
method's parameters, and turns loosely-typed JSON input from a model into a
typed call whose result comes back as a JSON-compatible string.

Quick Start (Builder):
    >>> from enum import Enum
    >>> from toolbind import MethodCallback
    >>>
    >>> class Unit(Enum):
    ...     CELSIUS = "C"
    ...     FAHRENHEIT = "F"
    >>>
    >>> class WeatherService:
    ...     def getWeather(self, city: str, unit: Unit) -> str:
    ...         return f"Weather in {city}: 23°{unit.name}"
    >>>
    >>> cb = MethodCallback.builder() \\
    ...     .owner(WeatherService()) \\
    ...     .method("getWeather") \\
    ...     .description("Get weather information for a city") \\
    ...     .build()
    >>> cb.call('{"city": "Barcelona", "unit": "CELSIUS"}')
    'Weather in Barcelona: 23°CELSIUS'

Registry Resolution (through an interception proxy):
    >>> from toolbind import ObjectRegistry, proxy, LoggingInterceptor
    >>>
    >>> objects = ObjectRegistry()
    >>> objects.register("weatherService", proxy(WeatherServiceImpl(), WeatherService,
    ...                                          interceptors=[LoggingInterceptor()]))
    >>> cb = MethodCallback.from_registry(objects, WeatherService, "getWeather",
    ...                                   "Get weather information for a city")

Decorator:
    >>> from toolbind import callback
    >>>
    >>> @callback(description="Add two integers")
    ... def add(a: int, b: int) -> int:
    ...     return a + b
    >>> add.call('{"a": 2, "b": "3"}')
    '5'

Offering callbacks to a model:
    >>> from toolbind import CallbackRegistry
    >>> callbacks = CallbackRegistry()
    >>> callbacks.register(cb)
    >>> callbacks.to_openai()                      # function-tool definitions
    >>> callbacks.execute("getWeather", args_json)  # errors rendered as text
"""

from __future__ import annotations

__version__ = "0.1.0"

# Core
from .foundation.core import (
    CallableTarget,
    CallbackDescriptor,
    FunctionCallback,
    MethodCallback,
    MethodCallbackBuilder,
    MethodKind,
    ToolContext,
    callback,
    resolve,
)

# Errors
from .foundation.errors import (
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

# Registries
from .foundation.registry import CallbackRegistry, ObjectRegistry, Registry

# Configuration
from .foundation.config import ToolbindSettings, clear_settings_cache, get_settings

# Interception
from .runtime.interception import (
    BeforeAdvice,
    InterceptingProxy,
    Interceptor,
    LoggingInterceptor,
    MethodInvocation,
    NameMatchInterceptor,
    proxy,
)

# Logging
from .runtime.observability import configure_logging, get_logger

# Request extras
from .io.extra import ExtraParameters

__all__ = [
    # Version
    "__version__",
    # Core
    "FunctionCallback",
    "CallbackDescriptor",
    "MethodCallback",
    "MethodCallbackBuilder",
    "CallableTarget",
    "MethodKind",
    "ToolContext",
    "callback",
    "resolve",
    # Errors
    "ErrorCode",
    "CallbackError",
    "CallbackException",
    "InvalidArgumentError",
    "NotFoundError",
    "SchemaGenerationError",
    "DecodeError",
    "CoercionError",
    "InvocationError",
    "classify_exception",
    # Registries
    "Registry",
    "ObjectRegistry",
    "CallbackRegistry",
    # Configuration
    "ToolbindSettings",
    "get_settings",
    "clear_settings_cache",
    # Interception
    "Interceptor",
    "MethodInvocation",
    "InterceptingProxy",
    "proxy",
    "LoggingInterceptor",
    "NameMatchInterceptor",
    "BeforeAdvice",
    # Logging
    "get_logger",
    "configure_logging",
    # Extras
    "ExtraParameters",
]
