"""
Key-Value Training Store Implementation.

This module implements the TrainingStore protocol on top of any
KeyValueStore. Records are kept as JSON text under the same keys the
browser build of the tracker uses, so an exported localStorage dump can be
loaded as-is:

    build_exercise_<exercise key>  list of sessions (last 8)
    build_deload_state             deload lifecycle record
    barbell_mobility_checks        {criteria key: [checks]} (last 10 each)
    exercise_pain_history          {exercise key: [reports]} (last 10 each)
    build_training_phase           "building" | "maintenance" | "recovery"
    build_unlocks                  {exercise name: unlock record}

Reads never raise for bad data; they log and return typed defaults.
Writes validate their arguments and raise StoreValidationError.
"""
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence
from contextlib import contextmanager
import json
import logging

from pydantic import ValidationError

from application.exceptions import StoreValidationError
from application.ports import KeyValueStore
from domain.models import (
    DeloadState,
    MobilityCheck,
    MobilityResponse,
    PainReport,
    PainSeverity,
    SessionEntry,
    TrainingPhase,
    UnlockRecord,
)

logger = logging.getLogger(__name__)

EXERCISE_HISTORY_PREFIX = "build_exercise_"
DELOAD_STATE_KEY = "build_deload_state"
MOBILITY_CHECKS_KEY = "barbell_mobility_checks"
PAIN_HISTORY_KEY = "exercise_pain_history"
TRAINING_PHASE_KEY = "build_training_phase"
UNLOCKS_KEY = "build_unlocks"

DEFAULT_HISTORY_LIMIT = 8
DEFAULT_CHECK_HISTORY_LIMIT = 10


class KeyValueTrainingStore:
    """
    TrainingStore backed by a KeyValueStore of JSON text blobs.

    Writes made inside ``transaction()`` are buffered in an overlay that
    reads consult first, then handed to the backend in a single
    ``set_many`` call when the block exits cleanly.
    """

    def __init__(
        self,
        backend: KeyValueStore,
        *,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        check_history_limit: int = DEFAULT_CHECK_HISTORY_LIMIT,
    ):
        """
        Initialize with a blob backend.

        Args:
            backend: Raw key-value store (injected)
            history_limit: Sessions kept per exercise key
            check_history_limit: Mobility checks / pain reports kept per key
        """
        self._backend = backend
        self._history_limit = history_limit
        self._check_history_limit = check_history_limit
        self._pending: Optional[Dict[str, str]] = None

    # =========================================================================
    # Raw access
    # =========================================================================

    def _get_raw(self, key: str) -> Optional[str]:
        if self._pending is not None and key in self._pending:
            return self._pending[key]
        return self._backend.get(key)

    def _set_raw(self, key: str, value: Any) -> None:
        text = json.dumps(value)
        if self._pending is not None:
            self._pending[key] = text
        else:
            self._backend.set(key, text)

    def _load_json(self, key: str, default: Any) -> Any:
        """Parse the JSON stored under key, falling back to default."""
        raw = self._get_raw(key)
        if raw is None or raw == "":
            return default
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning(f"Corrupt JSON under '{key}', using default: {e}")
            return default

    def _load_dict(self, key: str) -> Dict[str, Any]:
        data = self._load_json(key, {})
        if not isinstance(data, dict):
            logger.warning(f"Expected object under '{key}', got {type(data).__name__}")
            return {}
        return data

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Buffer writes and commit them together; nested blocks join the outer one."""
        if self._pending is not None:
            yield
            return

        self._pending = {}
        try:
            yield
            pending = self._pending
        finally:
            # Cleared before commit so a failed set_many is not retried by reads
            self._pending = None

        if pending:
            self._backend.set_many(pending)
            logger.debug(f"Committed {len(pending)} key(s) in transaction")

    # =========================================================================
    # Exercise history
    # =========================================================================

    def get_exercise_history(self, exercise_key: str) -> List[SessionEntry]:
        data = self._load_json(EXERCISE_HISTORY_PREFIX + exercise_key, [])
        if not isinstance(data, list):
            logger.warning(f"History for '{exercise_key}' is not a list, ignoring")
            return []

        entries = []
        for item in data:
            try:
                entries.append(SessionEntry.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping invalid session in '{exercise_key}': {e}")
        return entries

    def save_exercise_history(
        self,
        exercise_key: str,
        entries: Sequence[SessionEntry],
    ) -> None:
        _require_key(exercise_key, "exercise key")
        if isinstance(entries, (str, bytes)) or not isinstance(entries, Sequence):
            raise StoreValidationError("History must be a list of sessions")

        validated = []
        for entry in entries:
            if isinstance(entry, SessionEntry):
                validated.append(entry)
                continue
            try:
                validated.append(SessionEntry.model_validate(entry))
            except ValidationError as e:
                raise StoreValidationError(f"Invalid session entry: {e}") from e

        trimmed = validated[-self._history_limit:]
        self._set_raw(
            EXERCISE_HISTORY_PREFIX + exercise_key,
            [e.model_dump(mode="json", by_alias=True, exclude_none=True) for e in trimmed],
        )

    def get_all_exercise_keys(self) -> List[str]:
        keys = set(self._backend.keys())
        if self._pending is not None:
            keys.update(self._pending)
        return sorted(
            k[len(EXERCISE_HISTORY_PREFIX):]
            for k in keys
            if k.startswith(EXERCISE_HISTORY_PREFIX)
        )

    # =========================================================================
    # Deload state
    # =========================================================================

    def get_deload_state(self) -> DeloadState:
        data = self._load_json(DELOAD_STATE_KEY, None)
        if data is None:
            return DeloadState()
        if not isinstance(data, dict):
            logger.warning("Deload state is not an object, using default")
            return DeloadState()
        try:
            return DeloadState.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Invalid deload state, keeping valid fields: {e}")
            return _salvage_deload_state(data, e)

    def save_deload_state(self, state: DeloadState) -> None:
        if not isinstance(state, DeloadState):
            raise StoreValidationError("Deload state must be a DeloadState")
        self._set_raw(DELOAD_STATE_KEY, state.model_dump(mode="json", by_alias=True))

    # =========================================================================
    # Mobility checks
    # =========================================================================

    def get_mobility_checks(self, criteria_key: str) -> List[MobilityCheck]:
        raw_checks = self._load_dict(MOBILITY_CHECKS_KEY).get(criteria_key) or []
        return _parse_list(raw_checks, MobilityCheck, criteria_key)

    def save_mobility_check(self, criteria_key: str, response: str) -> MobilityCheck:
        _require_key(criteria_key, "criteria key")
        try:
            check = MobilityCheck(response=MobilityResponse(response))
        except ValueError as e:
            raise StoreValidationError(
                "Invalid response: must be yes, no, or not_sure"
            ) from e

        all_checks = self._load_dict(MOBILITY_CHECKS_KEY)
        checks = _as_list(all_checks.get(criteria_key))
        checks.append(check.model_dump(mode="json"))
        all_checks[criteria_key] = checks[-self._check_history_limit:]
        self._set_raw(MOBILITY_CHECKS_KEY, all_checks)
        return check

    # =========================================================================
    # Pain reports
    # =========================================================================

    def get_pain_history(self, exercise_key: str) -> List[PainReport]:
        raw_reports = self._load_dict(PAIN_HISTORY_KEY).get(exercise_key) or []
        return _parse_list(raw_reports, PainReport, exercise_key)

    def save_pain_report(
        self,
        exercise_key: str,
        had_pain: bool,
        location: Optional[str] = None,
        severity: Optional[str] = None,
    ) -> PainReport:
        _require_key(exercise_key, "exercise key")
        if not isinstance(had_pain, bool):
            raise StoreValidationError("hadPain must be boolean")
        if location is not None and not isinstance(location, str):
            raise StoreValidationError("Pain location must be a string or None")
        try:
            parsed_severity = PainSeverity(severity) if severity is not None else None
        except ValueError as e:
            raise StoreValidationError(
                "Invalid severity: must be minor, significant, or None"
            ) from e

        report = PainReport(had_pain=had_pain, location=location, severity=parsed_severity)

        all_pain = self._load_dict(PAIN_HISTORY_KEY)
        reports = _as_list(all_pain.get(exercise_key))
        reports.append(report.model_dump(mode="json", by_alias=True))
        all_pain[exercise_key] = reports[-self._check_history_limit:]
        self._set_raw(PAIN_HISTORY_KEY, all_pain)
        return report

    # =========================================================================
    # Training phase
    # =========================================================================

    def get_training_phase(self) -> Optional[str]:
        value = self._load_json(TRAINING_PHASE_KEY, None)
        return value if isinstance(value, str) else None

    def save_training_phase(self, phase: str) -> None:
        try:
            parsed = TrainingPhase(phase)
        except ValueError as e:
            raise StoreValidationError(
                "Invalid phase: must be building, maintenance, or recovery"
            ) from e
        self._set_raw(TRAINING_PHASE_KEY, parsed.value)

    # =========================================================================
    # Unlocks
    # =========================================================================

    def get_unlocks(self) -> Dict[str, UnlockRecord]:
        unlocks = {}
        for name, data in self._load_dict(UNLOCKS_KEY).items():
            try:
                unlocks[name] = UnlockRecord.model_validate(data)
            except ValidationError as e:
                logger.warning(f"Skipping invalid unlock record '{name}': {e}")
        return unlocks

    def is_exercise_unlocked(self, exercise_name: str) -> bool:
        return exercise_name in self._load_dict(UNLOCKS_KEY)

    def save_unlock(
        self,
        exercise_name: str,
        criteria: Mapping[str, Any],
    ) -> UnlockRecord:
        _require_key(exercise_name, "exercise name")
        if not isinstance(criteria, Mapping):
            raise StoreValidationError("Unlock criteria must be a mapping")

        existing = self.get_unlocks().get(exercise_name)
        if existing is not None:
            return existing

        record = UnlockRecord(exercise_name=exercise_name, criteria=dict(criteria))
        all_unlocks = self._load_dict(UNLOCKS_KEY)
        all_unlocks[exercise_name] = record.model_dump(mode="json", by_alias=True)
        self._set_raw(UNLOCKS_KEY, all_unlocks)
        logger.info(f"Recorded unlock for {exercise_name}")
        return record


# =============================================================================
# Helpers
# =============================================================================


def _require_key(value: Any, label: str) -> None:
    if not value or not isinstance(value, str):
        raise StoreValidationError(f"Invalid {label}: must be a non-empty string")


def _as_list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, list) else []


def _parse_list(items: Any, model: Any, key: str) -> List[Any]:
    if not isinstance(items, list):
        logger.warning(f"Expected list for '{key}', got {type(items).__name__}")
        return []
    parsed = []
    for item in items:
        try:
            parsed.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping invalid {model.__name__} for '{key}': {e}")
    return parsed


def _salvage_deload_state(data: Mapping[str, Any], error: ValidationError) -> DeloadState:
    """
    Rebuild a deload state from the fields that did validate.

    Invalid fields fall back to their defaults. A record that claims to be
    active without usable dates is read as inactive, keeping lastDeloadDate
    and dismissedCount so the next write does not erase them.
    """
    bad_keys = set()
    model_level = False
    for detail in error.errors():
        if not detail["loc"]:
            model_level = True
            continue
        bad_keys.add(detail["loc"][0])

    for name, info in DeloadState.model_fields.items():
        if name in bad_keys or info.alias in bad_keys:
            bad_keys.update({name, info.alias})

    cleaned = {k: v for k, v in data.items() if k not in bad_keys}
    if model_level:
        cleaned["active"] = False

    try:
        return DeloadState.model_validate(cleaned)
    except ValidationError:
        cleaned["active"] = False
        try:
            return DeloadState.model_validate(cleaned)
        except ValidationError as e:
            logger.warning(f"Deload state could not be salvaged, using default: {e}")
            return DeloadState()
