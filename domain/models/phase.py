"""
Training phase enums and the policy vocabularies derived from them.
"""

from enum import Enum
from typing import Any


class TrainingPhase(str, Enum):
    """User-selected training phase."""

    BUILDING = "building"  # Progressive overload, all unlocks
    MAINTENANCE = "maintenance"  # Frozen load, tempo focus
    RECOVERY = "recovery"  # Decrease only, safety first

    @classmethod
    def parse(cls, value: Any) -> "TrainingPhase":
        """
        Coerce a stored value into a phase.

        Anything missing, unknown or of the wrong type falls back to
        BUILDING.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.BUILDING


class DeloadSensitivity(str, Enum):
    """How eagerly the time-based deload trigger fires."""

    NORMAL = "normal"  # 6 weeks
    HIGH = "high"  # 4 weeks
    VERY_HIGH = "very_high"  # 2 weeks


class UnlockPriority(str, Enum):
    """How unlocked exercises are ranked for the current phase."""

    ALL = "all"
    BODYWEIGHT_PRIORITY = "bodyweight_priority"
    SAFETY_FIRST = "safety_first"
