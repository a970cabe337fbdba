"""
Shared pytest fixtures for the tracker engine tests.
"""

import pytest

from engine.settings import get_settings
from tests.fakes import NOW, FakeTrainingStore, FixedClock


@pytest.fixture
def store() -> FakeTrainingStore:
    return FakeTrainingStore()


@pytest.fixture
def clock() -> FixedClock:
    """Clock pinned to NOW (2026-03-02 12:00 UTC)."""
    return FixedClock(NOW)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; start every test from a clean cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
