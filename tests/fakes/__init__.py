"""
Fake implementations for testing.

Provides an in-memory TrainingStore plus factory helpers for sessions and
histories, so engine tests run without touching the filesystem.

Usage:
    from tests.fakes import FakeTrainingStore, create_test_history

    store = FakeTrainingStore()
    store.seed_history("UPPER_A - DB Flat Bench Press", create_test_history(weights=[20, 20, 20]))
"""

from datetime import datetime, timezone
from typing import Optional

from tests.fakes.training_store import (
    FakeTrainingStore,
    create_test_history,
    create_test_session,
)

__all__ = [
    "FakeTrainingStore",
    "create_test_session",
    "create_test_history",
    "create_training_store",
    "FixedClock",
    "NOW",
]

# Fixed "current time" for clock-dependent tests
NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# Factory Functions
# =============================================================================


def create_training_store(
    *,
    phase: Optional[str] = None,
    histories: Optional[dict] = None,
) -> FakeTrainingStore:
    """
    Create a FakeTrainingStore with optional phase and seeded histories.

    Args:
        phase: Raw phase value to seed
        histories: Mapping of exercise key -> list of SessionEntry

    Returns:
        Configured FakeTrainingStore
    """
    store = FakeTrainingStore()
    if phase is not None:
        store.seed_phase(phase)
    for key, entries in (histories or {}).items():
        store.seed_history(key, entries)
    return store


class FixedClock:
    """Callable clock returning a settable aware datetime."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now
