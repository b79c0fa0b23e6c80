"""Core interceptor types and chain composition.

Interceptors follow continuation-passing style: each one receives the
method invocation and a ``proceed`` function to call downstream. The
innermost step performs the real call on the target.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, runtime_checkable


@dataclass(slots=True)
class MethodInvocation:
    """A single intercepted call on a proxied target.

    Interceptors may replace ``args``/``kwargs`` before proceeding and use
    ``data`` to share request-scoped state along the chain.

    Example:
        >>> inv = MethodInvocation(target=svc, method_name="getWeather", args=("Paris",))
        >>> inv["attempt"] = 1
        >>> inv.get("attempt")
        1
    """

    target: object
    method_name: str
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)
    data: dict[str, object] = field(default_factory=dict)

    def __getitem__(self, key: str) -> object:
        return self.data[key]

    def __setitem__(self, key: str, value: object) -> None:
        self.data[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self.data

    def get(self, key: str, default: object = None) -> object:
        return self.data.get(key, default)


# Type alias for the continuation function
Proceed = Callable[[MethodInvocation], Any]


@runtime_checkable
class Interceptor(Protocol):
    """Protocol for method interceptors.

    Implement ``__call__`` to wrap the call with custom logic.

    Example:
        >>> class TimingInterceptor:
        ...     def __call__(self, invocation, proceed):
        ...         start = time.perf_counter()
        ...         try:
        ...             return proceed(invocation)
        ...         finally:
        ...             invocation["duration"] = time.perf_counter() - start
    """

    def __call__(self, invocation: MethodInvocation, proceed: Proceed) -> Any:
        """Run interceptor logic and return the (possibly replaced) result."""
        ...


def _invoke_target(invocation: MethodInvocation) -> Any:
    return getattr(invocation.target, invocation.method_name)(*invocation.args, **invocation.kwargs)


def compose(interceptors: Sequence[Interceptor]) -> Proceed:
    """Compose interceptors into a single call function.

    Args:
        interceptors: Ordered list of interceptors (first = outermost)

    Returns:
        Composed function: (invocation) -> result
    """
    chain: Proceed = _invoke_target
    for ic in reversed(interceptors):
        # Capture ic and current chain in closure
        def make_wrapper(i: Interceptor, nxt: Proceed) -> Proceed:
            def wrapped(invocation: MethodInvocation) -> Any:
                return i(invocation, nxt)
            return wrapped
        chain = make_wrapper(ic, chain)
    return chain
