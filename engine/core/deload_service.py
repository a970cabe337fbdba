"""
Deload Service.

Owns the deload lifecycle (inactive -> active -> inactive) and decides when
a deload week should be suggested:
- time: weeks since the last deload reach the phase threshold
- performance: enough exercises are regressing
- fatigue: fatigue score stays high for consecutive sessions

The performance and fatigue signals come from injectable sources. With the
defaults they never fire, leaving the time trigger as the only active one.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Optional, Sequence
import logging
import math

from application.exceptions import DeloadStateError
from application.ports import TrainingStore
from domain.models import DeloadState, DeloadType
from domain.models.timestamps import SECONDS_PER_DAY, utc_now, whole_weeks_between
from engine.core.phase_service import PhaseService
from engine.core.thresholds import DELOAD, DeloadThresholds

logger = logging.getLogger(__name__)


class DeloadReason(str, Enum):
    TIME = "time"
    PERFORMANCE = "performance"
    FATIGUE = "fatigue"


@dataclass
class DeloadTrigger:
    """Whether a deload should be suggested, and why."""

    trigger: bool
    reason: Optional[DeloadReason] = None
    weeks: Optional[int] = None
    regressions: Optional[int] = None
    score: Optional[float] = None


def _no_regressions() -> int:
    return 0


def _no_fatigue_scores() -> Sequence[float]:
    return ()


class DeloadService:
    """
    Deload state machine over the training store.

    Args:
        store: Training store (injected)
        phase_service: Source of the time-trigger threshold
        regression_counter: Returns how many exercises are currently regressing
        fatigue_scores: Returns recent per-session fatigue scores, oldest first
        clock: Returns the current aware UTC datetime
    """

    def __init__(
        self,
        store: TrainingStore,
        phase_service: PhaseService,
        *,
        regression_counter: Callable[[], int] = _no_regressions,
        fatigue_scores: Callable[[], Sequence[float]] = _no_fatigue_scores,
        clock: Callable[[], datetime] = utc_now,
        thresholds: DeloadThresholds = DELOAD,
    ):
        self._store = store
        self._phase_service = phase_service
        self._regression_counter = regression_counter
        self._fatigue_scores = fatigue_scores
        self._clock = clock
        self._thresholds = thresholds

    # =========================================================================
    # Triggers
    # =========================================================================

    def should_trigger_deload(self) -> DeloadTrigger:
        """
        Check the triggers in order: time, performance, fatigue.

        Returns:
            DeloadTrigger; never triggers while a deload is active
        """
        try:
            state = self._store.get_deload_state()
            if state.active:
                return DeloadTrigger(trigger=False)

            threshold = self._phase_service.get_deload_threshold_weeks()
            weeks = self.calculate_weeks_since_deload(state.last_deload_date)
            if weeks >= threshold:
                return DeloadTrigger(trigger=True, reason=DeloadReason.TIME, weeks=weeks)

            regressions = self._regression_counter()
            if regressions >= self._thresholds.regression_exercise_count:
                return DeloadTrigger(
                    trigger=True, reason=DeloadReason.PERFORMANCE, regressions=regressions
                )

            score = self._check_fatigue()
            if score is not None:
                return DeloadTrigger(trigger=True, reason=DeloadReason.FATIGUE, score=score)

            return DeloadTrigger(trigger=False)

        except Exception:
            logger.exception("Deload trigger check failed")
            return DeloadTrigger(trigger=False)

    def _check_fatigue(self) -> Optional[float]:
        """Latest score if the last N sessions all reached the fatigue threshold."""
        needed = self._thresholds.fatigue_consecutive_sessions
        scores = list(self._fatigue_scores())[-needed:]
        if len(scores) < needed:
            return None
        if all(s >= self._thresholds.fatigue_score for s in scores):
            return scores[-1]
        return None

    def calculate_weeks_since_deload(self, last_deload_date: Optional[datetime]) -> int:
        """Whole weeks since the last deload; 0 when there has never been one."""
        if last_deload_date is None:
            return 0
        return whole_weeks_between(last_deload_date, self._clock())

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start_deload(self, deload_type: str = DeloadType.STANDARD.value) -> DeloadState:
        """
        Start a deload week now.

        Raises:
            DeloadStateError: If a deload is already active
            ValueError: If deload_type is not a known type
        """
        parsed_type = DeloadType(deload_type)
        state = self._store.get_deload_state()
        if state.active:
            raise DeloadStateError("A deload is already active")

        now = self._clock()
        new_state = state.model_copy(
            update={
                "active": True,
                "deload_type": parsed_type,
                "start_date": now,
                "end_date": now + timedelta(days=self._thresholds.duration_days),
            }
        )
        self._store.save_deload_state(new_state)
        logger.info(f"Started {parsed_type.value} deload until {new_state.end_date.isoformat()}")
        return new_state

    def end_deload(self) -> DeloadState:
        """
        End the active deload; its start date becomes the last deload date.

        Raises:
            DeloadStateError: If no deload is active
        """
        with self._store.transaction():
            state = self._store.get_deload_state()
            if not state.active:
                raise DeloadStateError("No deload is active")

            new_state = state.model_copy(
                update={
                    "active": False,
                    "last_deload_date": state.start_date,
                    "deload_type": None,
                    "start_date": None,
                    "end_date": None,
                }
            )
            self._store.save_deload_state(new_state)

        logger.info("Deload ended")
        return new_state

    def postpone_deload(self) -> DeloadState:
        """Dismiss the current suggestion and count the dismissal."""
        state = self._store.get_deload_state()
        new_state = state.model_copy(update={"dismissed_count": state.dismissed_count + 1})
        self._store.save_deload_state(new_state)
        logger.info(f"Deload postponed ({new_state.dismissed_count} dismissals)")
        return new_state

    def get_days_remaining(self) -> int:
        """Days left in the active deload, rounded up; 0 when inactive or past."""
        try:
            state = self._store.get_deload_state()
        except Exception:
            logger.exception("Failed to read deload state")
            return 0

        if not state.active or state.end_date is None:
            return 0

        seconds = (state.end_date - self._clock()).total_seconds()
        return max(0, math.ceil(seconds / SECONDS_PER_DAY))
