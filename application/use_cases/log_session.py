"""
LogSession Use Case.

Records a completed exercise session: appends it to the exercise history
(trimmed to the most recent sessions), stores the post-exercise pain
report, and optionally runs the performance analyzer on the new entry.
History and pain report are written in one store transaction.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence

from application.exceptions import StoreValidationError
from application.ports import TrainingStore
from domain.models import PainSeverity, SessionEntry, WorkoutSet
from domain.models.timestamps import utc_now

if TYPE_CHECKING:
    from engine.core.performance_analyzer import PerformanceAnalyzer, PerformanceResult

logger = logging.getLogger(__name__)

PAIN_LEVELS = {
    PainSeverity.MINOR: 1,
    PainSeverity.SIGNIFICANT: 2,
}


@dataclass
class LogSessionResult:
    """Result of the LogSession use case execution."""

    success: bool
    entry: Optional[SessionEntry] = None
    history_length: int = 0
    performance: Optional["PerformanceResult"] = None
    error: Optional[str] = None
    validation_errors: List[str] = field(default_factory=list)


class LogSessionUseCase:
    """
    Use case for logging one exercise session.

    Orchestrates the following workflow:
    1. Validate the session (key, at least one set, pain fields)
    2. Append the session to the exercise history
    3. Store the pain report (pain-free when no pain is given)
    4. Analyze the updated history for regressions or form breakdown

    Usage:
        >>> use_case = LogSessionUseCase(store=store, analyzer=analyzer)
        >>> result = use_case.execute(
        ...     exercise_key="UPPER_A - DB Flat Bench Press",
        ...     sets=[WorkoutSet(weight=20, reps=12, rir=2)] * 3,
        ... )
        >>> if result.success:
        ...     print(result.performance.status)
    """

    def __init__(
        self,
        store: TrainingStore,
        analyzer: Optional["PerformanceAnalyzer"] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            store: Training store for history and pain reports
            analyzer: Optional performance analyzer run after saving
            clock: Source of the session date when none is given
        """
        self._store = store
        self._analyzer = analyzer
        self._clock = clock

    def execute(
        self,
        exercise_key: str,
        sets: Sequence[WorkoutSet],
        *,
        date: Optional[datetime] = None,
        start_time: Optional[float] = None,
        end_time: Optional[float] = None,
        pain_location: Optional[str] = None,
        pain_severity: Optional[str] = None,
    ) -> LogSessionResult:
        """
        Execute the log session workflow.

        Args:
            exercise_key: Composite key "<workout> - <exercise name>"
            sets: Logged sets, in order
            date: Session date (defaults to now)
            start_time: Optional session start (epoch ms)
            end_time: Optional session end (epoch ms)
            pain_location: Where pain was felt, if any
            pain_severity: "minor" or "significant", if any

        Returns:
            LogSessionResult with the stored entry and analysis
        """
        validation_errors = self._validate(exercise_key, sets, pain_location, pain_severity)
        if validation_errors:
            logger.warning(f"Session validation failed: {validation_errors}")
            return LogSessionResult(
                success=False,
                error="Session validation failed",
                validation_errors=validation_errors,
            )

        had_pain = pain_location is not None or pain_severity is not None
        severity = PainSeverity(pain_severity) if pain_severity else None
        pain_level = PAIN_LEVELS.get(severity, 1) if had_pain else None

        try:
            entry = SessionEntry(
                date=date or self._clock(),
                sets=list(sets),
                start_time=start_time,
                end_time=end_time,
                pain_level=pain_level,
            )

            with self._store.transaction():
                history = self._store.get_exercise_history(exercise_key)
                history.append(entry)
                self._store.save_exercise_history(exercise_key, history)
                self._store.save_pain_report(
                    exercise_key,
                    had_pain=had_pain,
                    location=pain_location,
                    severity=severity.value if severity else None,
                )
                history_length = len(self._store.get_exercise_history(exercise_key))

            logger.info(f"Logged {len(entry.sets)} set(s) for {exercise_key}")

        except StoreValidationError as e:
            logger.warning(f"Session rejected by store: {e}")
            return LogSessionResult(success=False, error=str(e), validation_errors=[str(e)])

        except Exception as e:
            logger.exception(f"LogSession use case failed: {e}")
            return LogSessionResult(success=False, error=str(e))

        performance = None
        if self._analyzer is not None:
            performance = self._analyzer.analyze_exercise_performance(exercise_key)

        return LogSessionResult(
            success=True,
            entry=entry,
            history_length=history_length,
            performance=performance,
        )

    def _validate(
        self,
        exercise_key: str,
        sets: Sequence[WorkoutSet],
        pain_location: Optional[str],
        pain_severity: Optional[str],
    ) -> List[str]:
        errors: List[str] = []

        if not exercise_key or not exercise_key.strip():
            errors.append("Exercise key is required")

        if not sets:
            errors.append("At least one set is required")

        if pain_severity is not None and pain_severity not in {s.value for s in PainSeverity}:
            errors.append("Pain severity must be minor or significant")

        if pain_location is not None and not pain_location.strip():
            errors.append("Pain location must not be blank")

        return errors
