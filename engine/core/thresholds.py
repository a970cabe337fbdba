"""
Tuning constants for the decision engine.

Every number that shapes a decision lives here so the rules stay readable
and tests can reference the same values the engine uses.
"""

from dataclasses import dataclass, field
from typing import Dict

from domain.models import DeloadSensitivity


@dataclass(frozen=True)
class HistoryLimits:
    """Sliding-window sizes enforced by the store."""

    sessions_per_exercise: int = 8
    checks_per_key: int = 10


@dataclass(frozen=True)
class ProgressionThresholds:
    plateau_window: int = 3  # Sessions at the same first-set weight
    gap_failure_rir: float = 0  # Best set taken to failure after a load jump
    success_rir_min: float = 2  # Best set at the top of the range inside this RIR band
    success_rir_max: float = 3


@dataclass(frozen=True)
class PerformanceThresholds:
    min_sessions_for_regression: int = 2
    rep_drop_ratio: float = 0.25  # 25% average rep drop vs previous session
    rep_variance_ratio: float = 0.5  # (max - min) / max within one session
    low_rir_ceiling: float = 1  # Every set at RIR <= 1


@dataclass(frozen=True)
class DeloadThresholds:
    weeks_by_sensitivity: Dict[DeloadSensitivity, int] = field(
        default_factory=lambda: {
            DeloadSensitivity.NORMAL: 6,
            DeloadSensitivity.HIGH: 4,
            DeloadSensitivity.VERY_HIGH: 2,
        }
    )
    duration_days: int = 7
    regression_exercise_count: int = 2
    fatigue_score: float = 8
    fatigue_consecutive_sessions: int = 2


@dataclass(frozen=True)
class UnlockThresholds:
    milestone_lookback_sessions: int = 3
    mobility_confirmations: int = 3


@dataclass(frozen=True)
class ReadinessWeights:
    """Weights and caps for the equipment-transition readiness score."""

    strength: float = 0.4
    weeks: float = 0.2
    mobility: float = 0.3
    pain_free: float = 0.1
    weight_contribution: float = 80  # Share of the strength sub-score from load
    rep_rir_contribution: float = 20  # Bonus when reps and RIR targets are met
    max_painful_sessions: int = 1


HISTORY_LIMITS = HistoryLimits()
PROGRESSION = ProgressionThresholds()
PERFORMANCE = PerformanceThresholds()
DELOAD = DeloadThresholds()
UNLOCK = UnlockThresholds()
READINESS = ReadinessWeights()
