"""Structured logging module: context-aware logging for callbacks."""

from .logger import (
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
    "BoundLogger",
    "CapturingRenderer",
    "ConsoleRenderer",
    "JsonRenderer",
    "LogEntry",
    "LogRenderer",
    "NoOpRenderer",
    "StructuredLogger",
    "configure_logging",
    "get_logger",
    "log_context",
    "set_renderer",
]
