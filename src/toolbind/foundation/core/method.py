"""MethodCallback: expose a Python method as a model-callable callback.

Supports:
- Instance, static and class methods, and module-level functions
- Any number of parameters (including none)
- Primitive, enum, collection, model and dataclass parameter/return types
- A ``ToolContext`` parameter injected from the caller instead of the input
- Targets behind an InterceptingProxy (calls go through its interceptors)

The input JSON Schema is inferred from the method's signature once, at
construction. Every call then decodes the JSON input, coerces each field to
its declared type, invokes the method and encodes the result.

Example:
    >>> class WeatherService:
    ...     def getWeather(self, city: str, unit: Unit) -> str:
    ...         return f"Weather in {city}: 23°{unit.name}"
    ...
    >>> cb = MethodCallback.builder() \\
    ...     .function_object(WeatherService()) \\
    ...     .method("getWeather") \\
    ...     .description("Get weather information for a city") \\
    ...     .build()
    >>> cb.call('{"city": "Barcelona", "unit": "CELSIUS"}')
    'Weather in Barcelona: 23°CELSIUS'
"""

from __future__ import annotations

import dataclasses
import inspect
from enum import Enum
from collections.abc import Mapping, Sequence, Set
from typing import TYPE_CHECKING, Any, Callable, Self, get_origin, is_typeddict

from pydantic import BaseModel

from toolbind.foundation.config import get_settings
from toolbind.foundation.errors import DecodeError, InvalidArgumentError, InvocationError
from toolbind.io import codec as default_codec
from toolbind.runtime.interception import is_proxy
from toolbind.runtime.observability import get_logger

from .callback import CallbackDescriptor, FunctionCallback
from .coercion import coerce
from .context import ToolContext
from .params import MISSING, NONE_TYPE, ParameterSpec, extract_parameters, return_annotation, unwrap_optional
from .resolver import resolve
from .schema import generate_schema
from .target import CallableTarget, MethodKind

if TYPE_CHECKING:
    from pydantic import TypeAdapter

    from toolbind.foundation.config import ToolbindSettings
    from toolbind.foundation.registry import Registry
    from toolbind.io.codec import Codec

_JSON_BASES: tuple[type, ...] = (BaseModel, Mapping, list, tuple, set, frozenset, Sequence, Set)
_TEXT_TYPES: tuple[type, ...] = (str, bytes, bytearray)


def _is_json_type(tp: Any) -> bool:
    """Whether results declared as ``tp`` are serialized as JSON."""
    tp = unwrap_optional(tp)
    origin = get_origin(tp) or tp
    if origin is type:
        return True
    if not inspect.isclass(origin):
        return False
    if issubclass(origin, _TEXT_TYPES):
        return False
    return issubclass(origin, _JSON_BASES) or dataclasses.is_dataclass(origin) or is_typeddict(tp)


def _is_json_value(value: object) -> bool:
    if isinstance(value, _TEXT_TYPES):
        return False
    return (isinstance(value, (BaseModel, Mapping, list, tuple, set, frozenset, type))
            or dataclasses.is_dataclass(value))


def _pascal(name: str) -> str:
    parts = name.replace("-", "_").split("_")
    return "".join(p[:1].upper() + p[1:] for p in parts if p)


class MethodCallback(FunctionCallback):
    """FunctionCallback that invokes a method through signature introspection.

    Immutable after construction; safe to share across threads. A call never
    mutates the callback, so one failed call leaves it fully usable.

    Args:
        target: Resolved (owner, method) pair
        description: What the method does, for the model. Must not be blank.
        codec: JSON codec for decoding input and encoding structured results
        settings: Overrides the global settings (schema dialect, void result text)

    Raises:
        InvalidArgumentError: missing method, blank description, or no owner for an instance method
        SchemaGenerationError: a parameter type cannot be described
    """

    __slots__ = ("_target", "_descriptor", "_params", "_adapters", "_accepts_context",
                 "_return_type", "_codec", "_void_result", "_log_inputs", "_log")

    def __init__(
        self,
        target: CallableTarget,
        description: str,
        *,
        codec: Codec | None = None,
        settings: ToolbindSettings | None = None,
    ) -> None:
        if target is None or target.function is None:
            raise InvalidArgumentError("Method must not be null")
        if not isinstance(description, str) or not description.strip():
            raise InvalidArgumentError("Description must not be empty", callback=target.name)
        if target.owner is None and not target.is_static:
            raise InvalidArgumentError("Function object must be provided for non-static methods",
                                       callback=target.name)

        cfg = settings or get_settings()
        self._target = target
        self._codec: Codec = codec or default_codec.get_codec()
        self._void_result = cfg.invocation.void_result
        self._log_inputs = cfg.invocation.log_inputs

        self._params: tuple[ParameterSpec, ...] = extract_parameters(
            target.function, skip_first=target.kind is not MethodKind.STATIC,
        )
        self._return_type = return_annotation(target.function)
        schema = generate_schema(
            f"{_pascal(target.name)}Input", self._params,
            dialect=cfg.json_schema.dialect, pretty=cfg.json_schema.pretty,
        )
        self._adapters: Mapping[str, TypeAdapter[Any]] = schema.adapters
        self._accepts_context = schema.accepts_context
        self._descriptor = CallbackDescriptor(name=target.name, description=description,
                                              input_schema=schema.text)

        self._log = get_logger("toolbind.callback").bind_callback(target.name, target.owner_name)
        self._log.debug("generated input schema", schema=schema.text, accepts_context=self._accepts_context)

    # ─────────────────────────────────────────────────────────────────
    # Construction helpers
    # ─────────────────────────────────────────────────────────────────

    @classmethod
    def builder(cls) -> MethodCallbackBuilder:
        return MethodCallbackBuilder()

    @classmethod
    def from_registry(
        cls,
        registry: Registry,
        bean_name_or_type: str | type,
        method_name: str,
        description: str,
        *,
        codec: Codec | None = None,
    ) -> MethodCallback:
        """Resolve a registered object's method and build a callback for it.

        If a type matches several objects, an intercepted (proxied) one is
        preferred so calls keep going through its interceptors.

        Example:
            >>> cb = MethodCallback.from_registry(registry, "weatherService", "getWeather",
            ...                                   "Get weather information for a city")
        """
        return cls(resolve(registry, bean_name_or_type, method_name), description, codec=codec)

    # ─────────────────────────────────────────────────────────────────
    # FunctionCallback contract
    # ─────────────────────────────────────────────────────────────────

    def describe(self) -> CallbackDescriptor:
        return self._descriptor

    @property
    def target(self) -> CallableTarget:
        return self._target

    @property
    def parameters(self) -> tuple[ParameterSpec, ...]:
        return self._params

    @property
    def accepts_context(self) -> bool:
        return self._accepts_context

    def call(self, function_input: str, tool_context: ToolContext | Mapping[str, object] | None = None) -> str:
        """Decode ``function_input``, coerce arguments, invoke, and encode the result.

        Raises:
            InvalidArgumentError: a non-empty context was given but the method takes none
            DecodeError: input is not a JSON object
            CoercionError: a field cannot be converted to its parameter type
            InvocationError: the method itself raised
        """
        ctx = ToolContext.of(tool_context, callback=self.name)
        if ctx is not None and not ctx.is_empty and not self._accepts_context:
            raise InvalidArgumentError("Configured method does not accept ToolContext as input parameter!",
                                       callback=self.name)

        fields = self._decode(function_input)
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for spec in self._params:
            value = ctx if spec.is_context else self._argument(spec, fields)
            if spec.keyword_only:
                kwargs[spec.name] = value
            else:
                args.append(value)

        if self._log_inputs:
            self._log.debug("invoking", input=function_input)
        else:
            self._log.debug("invoking", fields=len(fields))
        return self._encode(self._invoke(args, kwargs))

    # ─────────────────────────────────────────────────────────────────
    # Call steps
    # ─────────────────────────────────────────────────────────────────

    def _decode(self, function_input: str | bytes) -> dict[str, Any]:
        if not isinstance(function_input, (str, bytes, bytearray)):
            raise InvalidArgumentError(f"Function input must be a JSON string, got {type(function_input).__name__}",
                                       callback=self.name)
        try:
            fields = self._codec.decode(function_input)
        except default_codec.JSONDecodeError as e:
            raise DecodeError(f"Malformed JSON input: {e}", callback=self.name) from e
        if not isinstance(fields, dict):
            raise DecodeError(f"Function input must be a JSON object, got {type(fields).__name__}",
                              callback=self.name)
        return fields

    def _argument(self, spec: ParameterSpec, fields: Mapping[str, Any]) -> Any:
        if spec.name not in fields:
            return spec.default if spec.has_default else None
        return coerce(fields[spec.name], spec, adapter=self._adapters.get(spec.name),
                      json_codec=self._codec, callback=self.name)

    def _invoke(self, args: list[Any], kwargs: dict[str, Any]) -> Any:
        t = self._target
        try:
            if t.owner is not None and (t.intercepted or is_proxy(t.owner)):
                return getattr(t.owner, t.name)(*args, **kwargs)
            match t.kind:
                case MethodKind.INSTANCE:
                    return t.function(t.owner, *args, **kwargs)
                case MethodKind.CLASS:
                    return t.function(type(t.owner) if t.owner is not None else t.declaring_class, *args, **kwargs)
                case _:
                    return t.function(*args, **kwargs)
        except Exception as e:
            self._log.warning("invocation failed", error=f"{type(e).__name__}: {e}")
            raise InvocationError(self.name, e) from e

    def _encode(self, result: Any) -> str:
        rt = self._return_type
        if rt is NONE_TYPE or (rt is MISSING and result is None):
            return self._void_result
        if (rt is MISSING and _is_json_value(result)) or (rt is not MISSING and _is_json_type(rt)):
            return self._codec.encode(result).decode()
        if isinstance(result, Enum):
            return result.name
        return "null" if result is None else str(result)

    def __repr__(self) -> str:
        params = ", ".join(f"{p.name}: {p.kind}" for p in self._params)
        return f"MethodCallback({self._target.owner_name}.{self.name}({params}))"


class MethodCallbackBuilder:
    """Fluent builder for MethodCallback.

    Example:
        >>> MethodCallback.builder().function_object(svc).method("getWeather") \\
        ...     .description("Get weather information for a city").build()
    """

    __slots__ = ("_owner", "_method", "_description", "_codec")

    def __init__(self) -> None:
        self._owner: object | None = None
        self._method: str | Callable[..., Any] | None = None
        self._description: str | None = None
        self._codec: Codec | None = None

    def owner(self, owner: object | None) -> Self:
        """Object the method is called on; None for static methods and functions."""
        self._owner = owner
        return self

    function_object = owner

    def method(self, method: str | Callable[..., Any]) -> Self:
        if method is None:
            raise InvalidArgumentError("Method must not be null")
        self._method = method
        return self

    def description(self, description: str) -> Self:
        if not isinstance(description, str) or not description.strip():
            raise InvalidArgumentError("Description must not be empty")
        self._description = description
        return self

    def codec(self, codec: Codec) -> Self:
        self._codec = codec
        return self

    def build(self) -> MethodCallback:
        if self._method is None:
            raise InvalidArgumentError("Method must not be null")
        target = CallableTarget.of(self._owner, self._method)
        return MethodCallback(target, self._description or "", codec=self._codec)
