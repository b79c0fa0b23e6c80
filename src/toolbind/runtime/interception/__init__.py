"""Interception proxies for cross-cutting concerns around target methods.

Interceptors wrap calls made through an ``InterceptingProxy`` in
continuation-passing style; the first interceptor is the outermost.
"""

from .builtins import BeforeAdvice, LoggingInterceptor, NameMatchInterceptor
from .interceptor import Interceptor, MethodInvocation, Proceed, compose
from .proxy import InterceptingProxy, declared_methods, is_proxy, proxy, proxy_interfaces, proxy_target

__all__ = [
    # Core
    "Interceptor", "MethodInvocation", "Proceed", "compose",
    # Proxies
    "InterceptingProxy", "proxy", "is_proxy", "proxy_interfaces", "proxy_target", "declared_methods",
    # Built-ins
    "LoggingInterceptor", "NameMatchInterceptor", "BeforeAdvice",
]
