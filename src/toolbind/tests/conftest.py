"""Shared fixtures: quiet logging and fresh settings for every test."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from toolbind.foundation.config import clear_settings_cache
from toolbind.runtime.observability import CapturingRenderer, NoOpRenderer, set_renderer


@pytest.fixture(autouse=True)
def _isolate() -> Iterator[None]:
    clear_settings_cache()
    set_renderer(NoOpRenderer(), "INFO")
    yield
    set_renderer(None, "INFO")
    clear_settings_cache()


@pytest.fixture
def captured_logs() -> CapturingRenderer:
    """Install a renderer that records every entry at DEBUG and above."""
    renderer = CapturingRenderer()
    set_renderer(renderer, "DEBUG")
    return renderer
