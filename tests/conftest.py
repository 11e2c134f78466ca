"""Shared fixtures for the Chronolens test-suite.

Settings are cached behind `load_settings()`; tests that patch the
environment would otherwise leak their overrides into later tests, so the
cache is cleared around every test.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest

from chronolens.core.settings import load_settings


@pytest.fixture(autouse=True)  # type: ignore[misc]
def _fresh_settings() -> Generator[None, None, None]:
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()
