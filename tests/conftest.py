"""Pytest fixtures for kmeans-topics tests."""

from typing import Generator

import pytest

from kmeans_topics.config.settings import get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Generator[None, None, None]:
    """Reload settings for every test so env overrides take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
