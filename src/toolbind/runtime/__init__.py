"""Runtime - Call interception and observability.

Contains: interception proxies, structured logging.
"""

from __future__ import annotations

__all__ = [
    # Interception
    "Interceptor", "MethodInvocation", "Proceed", "compose",
    "InterceptingProxy", "proxy", "is_proxy", "proxy_interfaces", "proxy_target",
    "LoggingInterceptor", "NameMatchInterceptor", "BeforeAdvice",
    # Observability
    "BoundLogger", "get_logger", "configure_logging", "log_context", "set_renderer",
    "ConsoleRenderer", "JsonRenderer", "NoOpRenderer", "CapturingRenderer",
]


def __getattr__(name: str):
    """Lazy imports to avoid circular dependencies."""
    if name in ("Interceptor", "MethodInvocation", "Proceed", "compose",
                "InterceptingProxy", "proxy", "is_proxy", "proxy_interfaces", "proxy_target",
                "LoggingInterceptor", "NameMatchInterceptor", "BeforeAdvice"):
        from . import interception
        return getattr(interception, name)

    if name in ("BoundLogger", "get_logger", "configure_logging", "log_context", "set_renderer",
                "ConsoleRenderer", "JsonRenderer", "NoOpRenderer", "CapturingRenderer"):
        from . import observability
        return getattr(observability, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
