"""
Progression Service (double progression).

The load on an exercise goes up only when every set of the last session
reached the top of the rep range with at least the minimum reps in
reserve. Timed holds progress on duration alone.

This module provides:
- Rep range / RIR target parsing
- Pure progression rules (should_increase_weight, get_progression_status,
  get_next_weight)
- Load-change detectors (detect_weight_gap_failure,
  detect_successful_progression)
- ProgressionService, which binds the rules to stored history and the
  current phase
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple
import logging
import re

from application.exceptions import InvalidExerciseDefinitionError
from application.ports import TrainingStore
from domain.models import ExerciseDefinition, SessionEntry, WorkoutSet
from engine.core.phase_service import BUILDING_BEHAVIOR, PhaseService, ProgressionBehavior
from engine.core.tempo_guidance import TempoGuidance, get_tempo_guidance
from engine.core.thresholds import PROGRESSION, ProgressionThresholds

logger = logging.getLogger(__name__)

TIME_BASED_PATTERN = re.compile(r"\d+s\b")


class ProgressionStatus(str, Enum):
    """Progression state of an exercise after its most recent session."""

    READY = "ready"  # Increase load next session
    PLATEAU = "plateau"  # Same first-set weight for the whole window
    NORMAL = "normal"


# =============================================================================
# Parsing
# =============================================================================


def _parse_range(value: str, original: str, label: str) -> Tuple[float, float]:
    parts = value.split("-")
    if len(parts) > 2:
        raise InvalidExerciseDefinitionError(f"Invalid {label} format: {original}")
    try:
        numbers = [float(p.strip()) for p in parts]
    except ValueError:
        raise InvalidExerciseDefinitionError(f"Invalid {label} format: {original}")
    return (numbers[0], numbers[-1])


def parse_rep_range(rep_range: str) -> Tuple[float, float]:
    """
    Parse a rep range into (min, max).

    Handles "8-12", "30-60s", "10-12/side" and "30s/side". A single value
    gives min == max.

    Raises:
        InvalidExerciseDefinitionError: If the range is empty or malformed
    """
    if not rep_range or not isinstance(rep_range, str):
        raise InvalidExerciseDefinitionError("Invalid rep range: must be a non-empty string")
    cleaned = rep_range.replace("/side", "").replace("s", "")
    return _parse_range(cleaned, rep_range, "rep range")


def parse_rir_target(rir_target: str) -> Tuple[float, float]:
    """
    Parse an RIR target ("2-3" or "3") into (min, max).

    Raises:
        InvalidExerciseDefinitionError: If the target is empty or malformed
    """
    if not rir_target or not isinstance(rir_target, str):
        raise InvalidExerciseDefinitionError("Invalid RIR target: must be a non-empty string")
    return _parse_range(rir_target, rir_target, "RIR target")


def is_time_based(exercise: ExerciseDefinition) -> bool:
    """Timed holds have no RIR target or a seconds-suffixed rep range."""
    return not exercise.rir_target or bool(TIME_BASED_PATTERN.search(exercise.rep_range))


# =============================================================================
# Rules
# =============================================================================


def _at_least(value: Optional[float], minimum: float) -> bool:
    return value is not None and value >= minimum


def should_increase_weight(
    sets: Sequence[WorkoutSet],
    exercise: ExerciseDefinition,
    behavior: Optional[ProgressionBehavior] = None,
) -> bool:
    """
    Decide whether the next session should use a heavier load.

    Args:
        sets: Sets of the session being judged
        exercise: Static prescription (rep range, RIR target)
        behavior: Phase behaviour; None behaves as building

    Returns:
        True iff the phase allows increases and every set met the targets

    Raises:
        InvalidExerciseDefinitionError: If the prescription is malformed
    """
    if not sets:
        return False

    behavior = behavior or BUILDING_BEHAVIOR
    if not behavior.allow_weight_increase:
        return False

    _, rep_max = parse_rep_range(exercise.rep_range)

    if is_time_based(exercise):
        return all(_at_least(s.reps, rep_max) for s in sets)

    rir_min, _ = parse_rir_target(exercise.rir_target)
    all_max_reps = all(_at_least(s.reps, rep_max) for s in sets)
    all_good_rir = all(_at_least(s.rir, rir_min) for s in sets)
    return all_max_reps and all_good_rir


def get_progression_status(
    history: Sequence[SessionEntry],
    exercise: ExerciseDefinition,
    behavior: Optional[ProgressionBehavior] = None,
    thresholds: ProgressionThresholds = PROGRESSION,
) -> ProgressionStatus:
    """
    Classify an exercise from its history (oldest first).

    READY when the last session qualifies for an increase, otherwise
    PLATEAU when the last `plateau_window` sessions all share the same
    first-set weight, otherwise NORMAL. Sessions without sets or without a
    first-set weight are left out of the plateau window.
    """
    if not history:
        return ProgressionStatus.NORMAL

    if should_increase_weight(history[-1].sets, exercise, behavior):
        return ProgressionStatus.READY

    window = thresholds.plateau_window
    if len(history) >= window:
        weights = [
            entry.first_set_weight
            for entry in history[-window:]
            if entry.first_set_weight is not None
        ]
        if len(weights) == window and all(w == weights[0] for w in weights):
            return ProgressionStatus.PLATEAU

    return ProgressionStatus.NORMAL


def get_next_weight(current_weight: float, increment: float, should_progress: bool) -> float:
    return current_weight + increment if should_progress else current_weight


# =============================================================================
# Load changes
# =============================================================================


def get_best_set(sets: Sequence[WorkoutSet]) -> Optional[WorkoutSet]:
    """Heaviest set, ties broken by reps. Sets without weight or reps are skipped."""
    best = None
    for s in sets:
        if s.weight is None or s.reps is None:
            continue
        if best is None or (s.weight, s.reps) > (best.weight, best.reps):
            best = s
    return best


def detect_weight_gap_failure(
    history: Sequence[SessionEntry],
    exercise: ExerciseDefinition,
    thresholds: ProgressionThresholds = PROGRESSION,
) -> bool:
    """
    Detect a failed jump to a heavier load.

    Compares the best sets of the two newest sessions (history is oldest
    first). The jump failed when the newest best set is heavier, lands
    below the bottom of the rep range and was taken to failure.

    Examples:
        >>> bench = ExerciseDefinition(name="DB Flat Bench Press", rep_range="8-12", rir_target="2-3")
        >>> detect_weight_gap_failure([], bench)
        False

    Raises:
        InvalidExerciseDefinitionError: If the rep range is malformed
    """
    if len(history) < 2:
        return False

    current = get_best_set(history[-1].sets)
    previous = get_best_set(history[-2].sets)
    if current is None or previous is None or current.rir is None:
        return False

    rep_min, _ = parse_rep_range(exercise.rep_range)
    failed = (
        current.weight > previous.weight
        and current.reps < rep_min
        and current.rir <= thresholds.gap_failure_rir
    )
    if failed:
        logger.info(
            f"{exercise.name}: failed jump {previous.weight:g}kg -> {current.weight:g}kg "
            f"({current.reps} reps @ RIR {current.rir:g})"
        )
    return failed


def detect_successful_progression(
    history: Sequence[SessionEntry],
    exercise: ExerciseDefinition,
    thresholds: ProgressionThresholds = PROGRESSION,
) -> bool:
    """
    True when the newest best set reached the top of the rep range with
    RIR inside the success band (2-3 by default).
    """
    if not history:
        return False

    latest = get_best_set(history[-1].sets)
    if latest is None or latest.rir is None:
        return False

    _, rep_max = parse_rep_range(exercise.rep_range)
    return (
        latest.reps >= rep_max
        and thresholds.success_rir_min <= latest.rir <= thresholds.success_rir_max
    )


# =============================================================================
# Service
# =============================================================================


@dataclass
class ProgressionRecommendation:
    """Load recommendation for the next session of an exercise."""

    exercise_key: str
    status: ProgressionStatus
    current_weight: Optional[float]
    next_weight: Optional[float]
    tempo_focus: bool = False
    message: str = ""
    weight_gap_failure: bool = False
    progression_confirmed: bool = False
    tempo: Optional[TempoGuidance] = None


class ProgressionService:
    """
    Applies the progression rules to stored history under the current phase.
    """

    def __init__(
        self,
        store: TrainingStore,
        phase_service: PhaseService,
        thresholds: ProgressionThresholds = PROGRESSION,
    ):
        self._store = store
        self._phase_service = phase_service
        self._thresholds = thresholds

    def get_status(self, exercise_key: str, exercise: ExerciseDefinition) -> ProgressionStatus:
        history = self._store.get_exercise_history(exercise_key)
        behavior = self._phase_service.get_progression_behavior()
        return get_progression_status(history, exercise, behavior, self._thresholds)

    def recommend_next_weight(
        self,
        exercise_key: str,
        exercise: ExerciseDefinition,
    ) -> ProgressionRecommendation:
        """
        Recommend the load for the next session.

        A failed jump to a heavier load steps back to the previous session's
        best-set weight. Failed jumps and the maintenance phase both attach
        the exercise's tempo cue when one is catalogued.

        Args:
            exercise_key: Composite key "<workout> - <exercise name>"
            exercise: Static prescription

        Returns:
            ProgressionRecommendation; next_weight is None without history
        """
        history = self._store.get_exercise_history(exercise_key)
        behavior = self._phase_service.get_progression_behavior()
        status = get_progression_status(history, exercise, behavior, self._thresholds)

        current = history[-1].first_set_weight if history else None
        if current is None:
            return ProgressionRecommendation(
                exercise_key=exercise_key,
                status=status,
                current_weight=None,
                next_weight=None,
                tempo_focus=behavior.tempo_focus,
                message="No logged weight yet",
            )

        gap_failure = detect_weight_gap_failure(history, exercise, self._thresholds)
        confirmed = detect_successful_progression(history, exercise, self._thresholds)
        tempo = None
        if gap_failure or behavior.tempo_focus:
            tempo = get_tempo_guidance(exercise.name) or get_tempo_guidance(exercise_key)

        progress = status == ProgressionStatus.READY
        next_weight = get_next_weight(current, exercise.increment, progress)

        if progress:
            message = f"Increase to {next_weight:g}kg"
        elif gap_failure:
            next_weight = get_best_set(history[-2].sets).weight
            message = f"Missed the jump to {current:g}kg, return to {next_weight:g}kg and slow the tempo"
        elif behavior.tempo_focus:
            message = f"Hold {current:g}kg, slow the tempo"
        elif status == ProgressionStatus.PLATEAU:
            message = f"Plateau at {current:g}kg"
        else:
            message = f"Stay at {current:g}kg"

        if tempo is not None:
            message = f"{message}: {tempo.instruction}"

        logger.debug(f"{exercise_key}: {status.value}, next weight {next_weight:g}kg")
        return ProgressionRecommendation(
            exercise_key=exercise_key,
            status=status,
            current_weight=current,
            next_weight=next_weight,
            tempo_focus=behavior.tempo_focus,
            message=message,
            weight_gap_failure=gap_failure,
            progression_confirmed=confirmed,
            tempo=tempo,
        )
