"""
Training Store Interface (Port).

This module defines the single repository interface injected into every
decision component (phase policy, progression, performance analysis,
deload, unlock and readiness). Evaluators depend only on this Protocol,
so tests can substitute an in-memory fake.

Read methods degrade to typed defaults on missing or malformed data.
Write methods validate their arguments and raise StoreValidationError.
"""

from typing import Any, ContextManager, Dict, List, Mapping, Optional, Protocol, Sequence

from domain.models import (
    DeloadState,
    MobilityCheck,
    PainReport,
    SessionEntry,
    UnlockRecord,
)


class TrainingStore(Protocol):
    """
    Abstract interface for the local, single-writer training record store.

    All methods are synchronous. Dates are ISO-8601 on the wire.
    """

    # -------------------------------------------------------------------------
    # Exercise history
    # -------------------------------------------------------------------------

    def get_exercise_history(self, exercise_key: str) -> List[SessionEntry]:
        """
        Get the session history for an exercise.

        Args:
            exercise_key: Composite key "<workout> - <exercise name>"

        Returns:
            Sessions oldest first (at most 8), empty list if absent or corrupt
        """
        ...

    def save_exercise_history(
        self,
        exercise_key: str,
        entries: Sequence[SessionEntry],
    ) -> None:
        """
        Replace the session history for an exercise.

        Only the most recent 8 entries are kept; older ones are discarded.

        Args:
            exercise_key: Composite key "<workout> - <exercise name>"
            entries: Sessions oldest first

        Raises:
            StoreValidationError: If the key or entries are malformed
        """
        ...

    def get_all_exercise_keys(self) -> List[str]:
        """
        List every exercise key that has stored history.

        Returns:
            Exercise keys (without storage prefix)
        """
        ...

    # -------------------------------------------------------------------------
    # Deload state
    # -------------------------------------------------------------------------

    def get_deload_state(self) -> DeloadState:
        """
        Get the deload lifecycle state.

        Returns:
            Stored state, or an inactive default if absent or corrupt
        """
        ...

    def save_deload_state(self, state: DeloadState) -> None:
        """
        Persist the deload lifecycle state.

        Raises:
            StoreValidationError: If state is not a DeloadState
        """
        ...

    # -------------------------------------------------------------------------
    # Mobility checks
    # -------------------------------------------------------------------------

    def get_mobility_checks(self, criteria_key: str) -> List[MobilityCheck]:
        """
        Get mobility check responses for a criteria key, oldest first.

        Returns:
            Up to 10 most recent checks, empty list if none
        """
        ...

    def save_mobility_check(self, criteria_key: str, response: str) -> MobilityCheck:
        """
        Append a mobility check response (capped to the last 10).

        Args:
            criteria_key: Mobility criteria identifier
            response: "yes", "no" or "not_sure"

        Returns:
            The stored check

        Raises:
            StoreValidationError: If the key or response is invalid
        """
        ...

    # -------------------------------------------------------------------------
    # Pain reports
    # -------------------------------------------------------------------------

    def get_pain_history(self, exercise_key: str) -> List[PainReport]:
        """
        Get pain reports for an exercise key, oldest first.

        Returns:
            Up to 10 most recent reports, empty list if none
        """
        ...

    def save_pain_report(
        self,
        exercise_key: str,
        had_pain: bool,
        location: Optional[str] = None,
        severity: Optional[str] = None,
    ) -> PainReport:
        """
        Append a pain report (capped to the last 10).

        Args:
            exercise_key: Composite exercise key
            had_pain: Whether pain occurred
            location: Body location (e.g. "shoulder", "knee")
            severity: "minor", "significant" or None

        Returns:
            The stored report

        Raises:
            StoreValidationError: If arguments are invalid
        """
        ...

    # -------------------------------------------------------------------------
    # Training phase
    # -------------------------------------------------------------------------

    def get_training_phase(self) -> Optional[str]:
        """
        Get the raw stored training phase.

        Returns:
            Stored phase string, or None if absent or corrupt. Callers
            coerce unknown values (see PhaseService).
        """
        ...

    def save_training_phase(self, phase: str) -> None:
        """
        Persist the training phase.

        Raises:
            StoreValidationError: If phase is not a known phase
        """
        ...

    # -------------------------------------------------------------------------
    # Unlocks
    # -------------------------------------------------------------------------

    def is_exercise_unlocked(self, exercise_name: str) -> bool:
        """Check whether an unlock has been recorded for an exercise."""
        ...

    def get_unlocks(self) -> Dict[str, UnlockRecord]:
        """
        Get all recorded unlocks.

        Returns:
            Mapping of exercise name to its unlock record
        """
        ...

    def save_unlock(
        self,
        exercise_name: str,
        criteria: Mapping[str, Any],
    ) -> UnlockRecord:
        """
        Record a permanent unlock. Re-saving an existing unlock keeps the
        original record.

        Args:
            exercise_name: Unlocked exercise
            criteria: Snapshot of the criteria that were met

        Returns:
            The stored record

        Raises:
            StoreValidationError: If arguments are invalid
        """
        ...

    # -------------------------------------------------------------------------
    # Batching
    # -------------------------------------------------------------------------

    def transaction(self) -> ContextManager[None]:
        """
        Group several writes into one all-or-nothing commit.

        Writes inside the block are visible to reads inside the block and
        committed together on exit. An exception discards them.

        Usage:
            with store.transaction():
                store.save_exercise_history(key, entries)
                store.save_pain_report(key, had_pain=False)
        """
        ...
