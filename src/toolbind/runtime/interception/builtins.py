"""Built-in interceptors: logging, name matching and before-advice."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable

from toolbind.foundation.errors import CallbackException, classify_exception

from .interceptor import Interceptor, MethodInvocation, Proceed

logger = logging.getLogger("toolbind.interception")


@dataclass(slots=True)
class LoggingInterceptor:
    """Log proxied calls with timing and outcome.

    Logs at INFO level for successful calls, ERROR for exceptions.
    Duration is stored on the invocation as 'duration_ms'.

    Args:
        log: Logger instance to use (defaults to toolbind.interception)
        log_args: Whether to include call arguments (default False for privacy)

    Example:
        >>> svc = proxy(WeatherServiceImpl(), WeatherService, interceptors=[LoggingInterceptor(log_args=True)])
    """

    log: logging.Logger = field(default_factory=lambda: logger)
    log_args: bool = False

    def __call__(self, invocation: MethodInvocation, proceed: Proceed) -> Any:
        name = invocation.method_name
        start = time.perf_counter()

        arg_str = f" args={invocation.args!r} kwargs={invocation.kwargs!r}" if self.log_args else ""
        self.log.info(f"[{name}] Starting{arg_str}")

        try:
            result = proceed(invocation)
        except Exception as e:
            duration_ms = (time.perf_counter() - start) * 1000
            invocation["duration_ms"] = duration_ms
            code = classify_exception(e)
            invocation["error_code"] = code.value
            if isinstance(e, CallbackException):
                self.log.error(f"[{name}] EXCEPTION ({duration_ms:.1f}ms) [{code}]: {e.message}")
            else:
                self.log.exception(f"[{name}] EXCEPTION ({duration_ms:.1f}ms) [{code}]: {e}")
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        invocation["duration_ms"] = duration_ms
        self.log.info(f"[{name}] OK ({duration_ms:.1f}ms)")
        return result


class NameMatchInterceptor:
    """Apply ``inner`` only to calls of the named methods; others pass straight through.

    Example:
        >>> NameMatchInterceptor(LoggingInterceptor(), "getWeather")
    """

    __slots__ = ("inner", "names")

    def __init__(self, inner: Interceptor, *names: str) -> None:
        if not names:
            raise ValueError("NameMatchInterceptor needs at least one method name")
        self.inner = inner
        self.names = frozenset(names)

    def __call__(self, invocation: MethodInvocation, proceed: Proceed) -> Any:
        if invocation.method_name in self.names:
            return self.inner(invocation, proceed)
        return proceed(invocation)


class BeforeAdvice:
    """Run ``callback(method_name, args, target)`` before each call proceeds."""

    __slots__ = ("callback",)

    def __init__(self, callback: Callable[[str, tuple[Any, ...], object], None]) -> None:
        self.callback = callback

    def __call__(self, invocation: MethodInvocation, proceed: Proceed) -> Any:
        self.callback(invocation.method_name, invocation.args, invocation.target)
        return proceed(invocation)
