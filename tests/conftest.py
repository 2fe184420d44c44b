"""Shared fixtures: keep cached settings from leaking between tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from patternlab.core.settings import load_settings


@pytest.fixture(autouse=True)  # type: ignore[misc]
def fresh_settings() -> Generator[None, None, None]:
    """Rebuild settings around every test so `monkeypatch.setenv` takes effect."""
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()
