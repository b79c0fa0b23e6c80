"""Test helpers for code that exposes callbacks."""

from .recorder import CallRecorder, RecordedCall

__all__ = ["CallRecorder", "RecordedCall"]
