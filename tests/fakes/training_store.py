"""
Fake Training Store for Testing.

In-memory implementation of TrainingStore for fast, isolated testing.
Holds typed records directly (no JSON round trip) and can simulate read
failures to exercise the fail-open paths of the evaluators.
"""
from typing import Any, Dict, List, Mapping, Optional, Sequence
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
import copy

from application.exceptions import StoreValidationError
from domain.models import (
    DeloadState,
    MobilityCheck,
    MobilityResponse,
    PainReport,
    PainSeverity,
    SessionEntry,
    TrainingPhase,
    UnlockRecord,
    WorkoutSet,
)


class FakeTrainingStore:
    """
    In-memory fake implementation of TrainingStore.

    Set `fail_reads = True` to make every read raise RuntimeError.
    """

    def __init__(self, *, history_limit: int = 8, check_history_limit: int = 10):
        """Initialize with empty storage."""
        self.history_limit = history_limit
        self.check_history_limit = check_history_limit
        self.fail_reads = False
        self.reset()

    def reset(self) -> None:
        """Clear all stored data."""
        self._history: Dict[str, List[SessionEntry]] = {}
        self._deload_state = DeloadState()
        self._mobility: Dict[str, List[MobilityCheck]] = {}
        self._pain: Dict[str, List[PainReport]] = {}
        self._phase: Optional[str] = None
        self._unlocks: Dict[str, UnlockRecord] = {}
        self.fail_reads = False

    # =========================================================================
    # Seeding
    # =========================================================================

    def seed_history(self, exercise_key: str, entries: Sequence[SessionEntry]) -> None:
        """Seed history without applying the cap."""
        self._history[exercise_key] = list(entries)

    def seed_deload_state(self, state: DeloadState) -> None:
        self._deload_state = state

    def seed_mobility_checks(self, criteria_key: str, responses: Sequence[str]) -> None:
        """Seed checks from a list of responses, oldest first."""
        self._mobility[criteria_key] = [
            MobilityCheck(response=MobilityResponse(r)) for r in responses
        ]

    def seed_pain_reports(self, exercise_key: str, reports: Sequence[PainReport]) -> None:
        self._pain[exercise_key] = list(reports)

    def seed_phase(self, phase: Optional[str]) -> None:
        """Seed a raw phase value (may be invalid on purpose)."""
        self._phase = phase

    def seed_unlock(self, exercise_name: str) -> None:
        self._unlocks[exercise_name] = UnlockRecord(exercise_name=exercise_name)

    def _check_reads(self) -> None:
        if self.fail_reads:
            raise RuntimeError("Simulated store read failure")

    # =========================================================================
    # TrainingStore
    # =========================================================================

    def get_exercise_history(self, exercise_key: str) -> List[SessionEntry]:
        self._check_reads()
        return list(self._history.get(exercise_key, []))

    def save_exercise_history(self, exercise_key: str, entries: Sequence[SessionEntry]) -> None:
        if not exercise_key or not isinstance(exercise_key, str):
            raise StoreValidationError("Invalid exercise key: must be a non-empty string")
        if not all(isinstance(e, SessionEntry) for e in entries):
            raise StoreValidationError("History must be a list of sessions")
        self._history[exercise_key] = list(entries)[-self.history_limit:]

    def get_all_exercise_keys(self) -> List[str]:
        self._check_reads()
        return sorted(self._history)

    def get_deload_state(self) -> DeloadState:
        self._check_reads()
        return self._deload_state

    def save_deload_state(self, state: DeloadState) -> None:
        if not isinstance(state, DeloadState):
            raise StoreValidationError("Deload state must be a DeloadState")
        self._deload_state = state

    def get_mobility_checks(self, criteria_key: str) -> List[MobilityCheck]:
        self._check_reads()
        return list(self._mobility.get(criteria_key, []))

    def save_mobility_check(self, criteria_key: str, response: str) -> MobilityCheck:
        if not criteria_key or not isinstance(criteria_key, str):
            raise StoreValidationError("Invalid criteria key: must be a non-empty string")
        try:
            check = MobilityCheck(response=MobilityResponse(response))
        except ValueError as e:
            raise StoreValidationError("Invalid response: must be yes, no, or not_sure") from e
        checks = self._mobility.setdefault(criteria_key, [])
        checks.append(check)
        self._mobility[criteria_key] = checks[-self.check_history_limit:]
        return check

    def get_pain_history(self, exercise_key: str) -> List[PainReport]:
        self._check_reads()
        return list(self._pain.get(exercise_key, []))

    def save_pain_report(
        self,
        exercise_key: str,
        had_pain: bool,
        location: Optional[str] = None,
        severity: Optional[str] = None,
    ) -> PainReport:
        if not exercise_key or not isinstance(exercise_key, str):
            raise StoreValidationError("Invalid exercise key: must be a non-empty string")
        if not isinstance(had_pain, bool):
            raise StoreValidationError("hadPain must be boolean")
        try:
            parsed = PainSeverity(severity) if severity is not None else None
        except ValueError as e:
            raise StoreValidationError("Invalid severity") from e
        report = PainReport(had_pain=had_pain, location=location, severity=parsed)
        reports = self._pain.setdefault(exercise_key, [])
        reports.append(report)
        self._pain[exercise_key] = reports[-self.check_history_limit:]
        return report

    def get_training_phase(self) -> Optional[str]:
        self._check_reads()
        return self._phase

    def save_training_phase(self, phase: str) -> None:
        try:
            self._phase = TrainingPhase(phase).value
        except ValueError as e:
            raise StoreValidationError(f"Invalid phase: {phase}") from e

    def is_exercise_unlocked(self, exercise_name: str) -> bool:
        self._check_reads()
        return exercise_name in self._unlocks

    def get_unlocks(self) -> Dict[str, UnlockRecord]:
        self._check_reads()
        return dict(self._unlocks)

    def save_unlock(self, exercise_name: str, criteria: Mapping[str, Any]) -> UnlockRecord:
        if not exercise_name or not isinstance(exercise_name, str):
            raise StoreValidationError("Invalid exercise name: must be a non-empty string")
        if exercise_name not in self._unlocks:
            self._unlocks[exercise_name] = UnlockRecord(
                exercise_name=exercise_name, criteria=dict(criteria)
            )
        return self._unlocks[exercise_name]

    @contextmanager
    def transaction(self):
        """Snapshot state; restore it if the block raises."""
        snapshot = copy.deepcopy(
            (self._history, self._deload_state, self._mobility, self._pain, self._phase, self._unlocks)
        )
        try:
            yield
        except BaseException:
            (
                self._history,
                self._deload_state,
                self._mobility,
                self._pain,
                self._phase,
                self._unlocks,
            ) = snapshot
            raise


# =============================================================================
# Factory Functions
# =============================================================================


def create_test_session(
    date: datetime,
    weight: Optional[float] = 20,
    reps: Optional[int] = 12,
    rir: Optional[float] = 2,
    *,
    num_sets: int = 3,
    pain_level: Optional[int] = None,
) -> SessionEntry:
    """Create a session of identical sets."""
    return SessionEntry(
        date=date,
        sets=[WorkoutSet(weight=weight, reps=reps, rir=rir) for _ in range(num_sets)],
        pain_level=pain_level,
    )


def create_test_history(
    *,
    weights: Sequence[float],
    reps: int = 12,
    rir: float = 2,
    start: Optional[datetime] = None,
    days_between: int = 7,
) -> List[SessionEntry]:
    """
    Create a weekly history, oldest first, one session per weight.

    Args:
        weights: First-set weight for each session
        reps: Reps for every set
        rir: RIR for every set
        start: Date of the first session (default: 2026-01-05 UTC)
        days_between: Days between consecutive sessions
    """
    start = start or datetime(2026, 1, 5, 10, 0, tzinfo=timezone.utc)
    return [
        create_test_session(start + timedelta(days=i * days_between), weight=w, reps=reps, rir=rir)
        for i, w in enumerate(weights)
    ]
