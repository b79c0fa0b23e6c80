"""Foundation - Core building blocks for toolbind.

Contains: callback abstractions, resolution, error handling, registries, testing, config.
"""

from __future__ import annotations

__all__ = [
    # Core
    "FunctionCallback", "CallbackDescriptor", "MethodCallback", "MethodCallbackBuilder",
    "callback", "ToolContext", "CallableTarget", "MethodKind", "resolve",
    # Errors
    "ErrorCode", "CallbackError", "CallbackException", "classify_exception",
    "InvalidArgumentError", "NotFoundError", "SchemaGenerationError",
    "DecodeError", "CoercionError", "InvocationError",
    # Registry
    "Registry", "ObjectRegistry", "CallbackRegistry",
    # Testing
    "CallRecorder", "RecordedCall",
    # Config
    "ToolbindSettings", "get_settings", "clear_settings_cache",
    "SchemaSettings", "InvocationSettings", "LoggingSettings",
]


def __getattr__(name: str):
    """Lazy imports to avoid circular dependencies."""
    if name in ("FunctionCallback", "CallbackDescriptor", "MethodCallback", "MethodCallbackBuilder",
                "callback", "ToolContext", "CallableTarget", "MethodKind", "resolve"):
        from . import core
        return getattr(core, name)

    if name in ("ErrorCode", "CallbackError", "CallbackException", "classify_exception",
                "InvalidArgumentError", "NotFoundError", "SchemaGenerationError",
                "DecodeError", "CoercionError", "InvocationError"):
        from . import errors
        return getattr(errors, name)

    if name in ("Registry", "ObjectRegistry", "CallbackRegistry"):
        from . import registry
        return getattr(registry, name)

    if name in ("CallRecorder", "RecordedCall"):
        from . import testing
        return getattr(testing, name)

    if name in ("ToolbindSettings", "get_settings", "clear_settings_cache",
                "SchemaSettings", "InvocationSettings", "LoggingSettings"):
        from . import config
        return getattr(config, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
