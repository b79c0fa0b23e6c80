"""Observability for callback execution: structured logging.

Quick Start:
    >>> from toolbind.runtime.observability import configure_logging, get_logger
    >>> configure_logging(format="json", level="DEBUG")
    >>> get_logger("setup").info("callbacks registered", count=3)
"""

from .logging import (
    BoundLogger,
    CapturingRenderer,
    ConsoleRenderer,
    JsonRenderer,
    LogEntry,
    LogRenderer,
    NoOpRenderer,
    StructuredLogger,
    configure_logging,
    get_logger,
    log_context,
    set_renderer,
)

__all__ = [
    "BoundLogger", "CapturingRenderer", "ConsoleRenderer", "JsonRenderer", "LogEntry", "LogRenderer",
    "NoOpRenderer", "StructuredLogger", "configure_logging", "get_logger", "log_context", "set_renderer",
]
