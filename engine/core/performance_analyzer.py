"""
Performance Analyzer.

Flags regressions and form breakdown from exercise history. The checks are
deliberately conservative: they warn on clear patterns, not on normal
session-to-session variation, and stay silent during a deload.

Detection order (first match wins):
- alert: first-set weight dropped vs the previous session
- alert: average reps dropped 25%+ vs the previous session
- warning: reps within one session vary by 50%+ of the best set
- warning: every set at RIR 0-1

Analysis never raises; failures are logged and reported as GOOD.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence
import logging

from application.ports import TrainingStore
from domain.models import SessionEntry, WorkoutSet
from engine.core.thresholds import PERFORMANCE, PerformanceThresholds

logger = logging.getLogger(__name__)


class PerformanceStatus(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    ALERT = "alert"


class PerformancePattern(str, Enum):
    REGRESSION = "regression"
    FORM_BREAKDOWN = "form_breakdown"


@dataclass
class PerformanceResult:
    """Outcome of a performance check."""

    status: PerformanceStatus
    message: Optional[str] = None
    pattern: Optional[PerformancePattern] = None

    @classmethod
    def good(cls) -> "PerformanceResult":
        return cls(status=PerformanceStatus.GOOD)


class PerformanceAnalyzer:
    """
    Read-only analyzer over stored exercise history.
    """

    def __init__(self, store: TrainingStore, thresholds: PerformanceThresholds = PERFORMANCE):
        self._store = store
        self._thresholds = thresholds

    def analyze_exercise_performance(
        self,
        exercise_key: str,
        current_sets: Sequence[WorkoutSet] = (),
    ) -> PerformanceResult:
        """
        Analyze an exercise for regression or form breakdown.

        Args:
            exercise_key: Composite key "<workout> - <exercise name>"
            current_sets: Sets of an in-progress session; when empty the
                last stored session is analyzed instead

        Returns:
            PerformanceResult (GOOD during a deload or without history)
        """
        try:
            history = self._store.get_exercise_history(exercise_key)

            if self._store.get_deload_state().active:
                return PerformanceResult.good()

            if not history:
                return PerformanceResult.good()

            if len(history) >= self._thresholds.min_sessions_for_regression:
                result = self.detect_weight_regression(history) or self.detect_rep_drop(history)
                if result:
                    return result

            sets = list(current_sets) if current_sets else history[-1].sets
            result = self.detect_intra_set_variance(sets) or self.detect_low_rir(sets)
            if result:
                return result

            return PerformanceResult.good()

        except Exception:
            logger.exception(f"Performance analysis failed for {exercise_key}")
            return PerformanceResult.good()

    # =========================================================================
    # Regression checks (previous session vs last session)
    # =========================================================================

    def detect_weight_regression(
        self, history: Sequence[SessionEntry]
    ) -> Optional[PerformanceResult]:
        if len(history) < 2:
            return None

        old_weight = history[-2].first_set_weight
        new_weight = history[-1].first_set_weight
        if old_weight is None or new_weight is None:
            return None

        if new_weight < old_weight:
            return PerformanceResult(
                status=PerformanceStatus.ALERT,
                message=(
                    f"Weight regressed from {old_weight:g}kg to {new_weight:g}kg"
                    " - check if recovering from illness/deload"
                ),
                pattern=PerformancePattern.REGRESSION,
            )
        return None

    def detect_rep_drop(self, history: Sequence[SessionEntry]) -> Optional[PerformanceResult]:
        if len(history) < 2:
            return None

        previous, last = history[-2], history[-1]
        if not previous.has_sets or not last.has_sets:
            return None

        avg_old = _average_reps(previous.sets)
        avg_new = _average_reps(last.sets)
        if avg_old == 0:
            return None

        drop = (avg_old - avg_new) / avg_old
        if drop >= self._thresholds.rep_drop_ratio:
            return PerformanceResult(
                status=PerformanceStatus.ALERT,
                message=f"Rep performance dropped {round(drop * 100)}% - possible overtraining",
                pattern=PerformancePattern.REGRESSION,
            )
        return None

    # =========================================================================
    # Form checks (one session)
    # =========================================================================

    def detect_intra_set_variance(
        self, sets: Sequence[WorkoutSet]
    ) -> Optional[PerformanceResult]:
        if len(sets) < 2:
            return None

        reps = [s.reps for s in sets if s.reps]
        if len(reps) < 2:
            return None

        max_reps, min_reps = max(reps), min(reps)
        if (max_reps - min_reps) / max_reps >= self._thresholds.rep_variance_ratio:
            return PerformanceResult(
                status=PerformanceStatus.WARNING,
                message=(
                    f"Reps inconsistent within session ({'/'.join(str(r) for r in reps)})"
                    " - form may be breaking down"
                ),
                pattern=PerformancePattern.FORM_BREAKDOWN,
            )
        return None

    def detect_low_rir(self, sets: Sequence[WorkoutSet]) -> Optional[PerformanceResult]:
        if not sets:
            return None

        # Missing RIR counts as comfortably high
        ceiling = self._thresholds.low_rir_ceiling
        if all(s.rir is not None and s.rir <= ceiling for s in sets):
            return PerformanceResult(
                status=PerformanceStatus.WARNING,
                message="Training too close to failure - leave 2-3 reps in reserve",
                pattern=PerformancePattern.FORM_BREAKDOWN,
            )
        return None


def _average_reps(sets: List[WorkoutSet]) -> float:
    return sum(s.reps or 0 for s in sets) / len(sets)
