"""
Domain models for the BUILD tracker engine.

This package contains pure domain models that are independent of
infrastructure concerns (storage backend, CLI).

These models represent the core training concepts:
- WorkoutSet: One logged set (weight / reps / reps in reserve)
- SessionEntry: One performance of an exercise on a date
- ExerciseDefinition: Static rep range / RIR prescription
- DeloadState: Deload lifecycle record
- MobilityCheck / PainReport: Self-check sliding windows
- TrainingPhase: building / maintenance / recovery
- UnlockRecord: Permanent unlock of a harder variant

Usage:
    >>> from domain.models import SessionEntry, WorkoutSet

    >>> entry = SessionEntry(
    ...     date="2026-01-05T10:00:00Z",
    ...     sets=[WorkoutSet(weight=20, reps=12, rir=2)],
    ... )

    >>> # Serialize to the persisted JSON shape (camelCase keys)
    >>> data = entry.model_dump(mode="json", by_alias=True)
"""

from domain.models.checks import MobilityCheck, MobilityResponse, PainReport, PainSeverity
from domain.models.deload import DeloadState, DeloadType
from domain.models.exercise_definition import ExerciseDefinition
from domain.models.phase import DeloadSensitivity, TrainingPhase, UnlockPriority
from domain.models.session import SessionEntry
from domain.models.unlock import UnlockRecord
from domain.models.workout_set import WorkoutSet

__all__ = [
    # Records
    "WorkoutSet",
    "SessionEntry",
    "ExerciseDefinition",
    "DeloadState",
    "MobilityCheck",
    "PainReport",
    "UnlockRecord",
    # Enums
    "DeloadType",
    "MobilityResponse",
    "PainSeverity",
    "TrainingPhase",
    "DeloadSensitivity",
    "UnlockPriority",
]
