"""
RecordChecks Use Case.

Stores mobility self-check answers and standalone pain reports, and reports
how many consecutive confirmations a mobility criterion has collected.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from application.exceptions import StoreValidationError
from application.ports import TrainingStore
from domain.models import MobilityCheck, PainReport

logger = logging.getLogger(__name__)


@dataclass
class RecordCheckResult:
    """Result of recording a mobility check or pain report."""

    success: bool
    check: Optional[MobilityCheck] = None
    report: Optional[PainReport] = None
    consecutive_confirmations: int = 0
    error: Optional[str] = None


class RecordChecksUseCase:
    """
    Use case for the post-exercise self-check prompts.

    Usage:
        >>> use_case = RecordChecksUseCase(store=store)
        >>> result = use_case.record_mobility("bench_overhead_mobility", "yes")
        >>> result.consecutive_confirmations
        1
    """

    def __init__(self, store: TrainingStore) -> None:
        self._store = store

    def record_mobility(self, criteria_key: str, response: str) -> RecordCheckResult:
        """
        Append a mobility check answer.

        Args:
            criteria_key: Mobility criteria identifier (e.g. "squat_heel_flat")
            response: "yes", "no" or "not_sure"

        Returns:
            RecordCheckResult with the trailing run of "yes" answers
        """
        try:
            check = self._store.save_mobility_check(criteria_key, response)
        except StoreValidationError as e:
            logger.warning(f"Mobility check rejected: {e}")
            return RecordCheckResult(success=False, error=str(e))

        streak = 0
        for previous in reversed(self._store.get_mobility_checks(criteria_key)):
            if not previous.confirmed:
                break
            streak += 1

        logger.info(f"Mobility check {criteria_key}={response} ({streak} consecutive yes)")
        return RecordCheckResult(success=True, check=check, consecutive_confirmations=streak)

    def record_pain(
        self,
        exercise_key: str,
        had_pain: bool,
        location: Optional[str] = None,
        severity: Optional[str] = None,
    ) -> RecordCheckResult:
        """Append a pain report for an exercise."""
        try:
            report = self._store.save_pain_report(exercise_key, had_pain, location, severity)
        except StoreValidationError as e:
            logger.warning(f"Pain report rejected: {e}")
            return RecordCheckResult(success=False, error=str(e))

        return RecordCheckResult(success=True, report=report)
