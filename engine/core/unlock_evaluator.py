"""
Unlock Evaluator.

Decides whether a harder exercise variant can be unlocked from the lifter's
record on its prerequisite exercise. Requirements depend on the target's
complexity tier:

    simple    always unlocked
    moderate  strength milestone + 4 weeks training
    complex   strength milestone + mobility + 5 pain-free workouts + 8 weeks

Unlocks are permanent once recorded. Evaluation is read-only and never
raises; failures report `missing=["evaluation error"]`.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional
import logging

from application.ports import TrainingStore
from domain.models import UnlockPriority, UnlockRecord
from domain.models.timestamps import utc_now, whole_weeks_between
from engine.core.complexity_tiers import (
    ComplexityTier,
    get_complexity_tier,
    get_unlock_requirements,
)
from engine.core.phase_service import PhaseService
from engine.core.progression_pathways import get_progression_path
from engine.core.thresholds import UNLOCK, UnlockThresholds

logger = logging.getLogger(__name__)

EVALUATION_ERROR = "evaluation error"
NOT_RECOMMENDED_PRIORITY = 999


# =============================================================================
# Static rules
# =============================================================================


@dataclass(frozen=True)
class StrengthMilestone:
    weight: float
    reps: int
    sets: int


# (prerequisite exercise name, target exercise name) -> milestone
STRENGTH_MILESTONES: Dict[tuple, StrengthMilestone] = {
    ("DB Flat Bench Press", "Barbell Bench Press"): StrengthMilestone(15, 12, 3),
    ("DB Flat Bench Press", "Sadharan Dand"): StrengthMilestone(15, 12, 3),
    ("Hack Squat", "Barbell Back Squat"): StrengthMilestone(60, 10, 3),  # Total machine load
    ("Lat Pulldown", "Pull-ups"): StrengthMilestone(50, 10, 3),
}

_DAND_FAMILY = [
    "Sadharan Dand",
    "Rammurti Dand",
    "Hanuman Dand",
    "Vrushchik Dand",
    "Vrushchik Dand 2",
    "Parshava Dand",
    "Chakra Dand",
    "Advance Hanuman Dand",
    "Vaksh vikasak Dand",
    "Palat Dand",
    "Sher Dand",
    "Sarp Dand",
    "Mishr Dand",
]

_SQUAT_FAMILY = [
    "Barbell Back Squat",
    "Sadharan Baithak",
    "Pehalwani Baithak",
    "Pehalwani Baithak 2",
    "Rammurti Baithak",
    "Hanuman Baithak",
]

# Target exercise -> mobility criteria key. Unmapped targets need no check.
MOBILITY_CRITERIA: Dict[str, str] = {
    "Barbell Bench Press": "scapular_retraction",
    "Barbell Overhead Press": "shoulder_overhead_mobility",
    "Barbell Deadlift": "hip_hinge_mobility",
    **{name: "thoracic_mobility" for name in _DAND_FAMILY},
    **{name: "hip_ankle_squat_mobility" for name in _SQUAT_FAMILY},
}


class ExerciseType(str, Enum):
    BARBELL = "barbell"
    BODYWEIGHT = "bodyweight"
    TRADITIONAL = "traditional"
    EQUIPMENT = "equipment"


def get_exercise_type(exercise_name: str) -> ExerciseType:
    """Classify an exercise by name for phase-aware ranking."""
    if "Barbell" in exercise_name:
        return ExerciseType.BARBELL
    if "Sadharan" in exercise_name or "Baithak" in exercise_name:
        return ExerciseType.BODYWEIGHT
    if "Mudgal" in exercise_name:
        return ExerciseType.TRADITIONAL
    if "Pull-up" in exercise_name:
        return ExerciseType.BODYWEIGHT
    return ExerciseType.EQUIPMENT


def exercise_name_from_key(exercise_key: str) -> str:
    """Strip the workout prefix from an exercise key; bare names pass through."""
    return exercise_key.rsplit(" - ", 1)[-1]


# =============================================================================
# Results
# =============================================================================


@dataclass
class UnlockCriteria:
    strength: bool = False
    mobility: bool = False
    pain_free: bool = False
    weeks: int = 0


@dataclass
class UnlockEvaluation:
    """Result of an unlock check. Priority fields are set by the phase-aware variant."""

    unlocked: bool
    criteria: UnlockCriteria = field(default_factory=UnlockCriteria)
    missing: List[str] = field(default_factory=list)
    exercise_type: Optional[ExerciseType] = None
    priority: Optional[int] = None
    phase_recommended: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if self.exercise_type is not None:
            data["exercise_type"] = self.exercise_type.value
        return data


@dataclass
class UnlockSuggestion:
    """First unlockable harder variant found for a workout slot."""

    slot_key: str
    exercise_name: str
    evaluation: UnlockEvaluation


# =============================================================================
# Evaluator
# =============================================================================


class UnlockEvaluator:
    """
    Evaluates unlock criteria against stored history, checks and unlocks.
    """

    def __init__(
        self,
        store: TrainingStore,
        phase_service: PhaseService,
        *,
        clock: Callable[[], datetime] = utc_now,
        thresholds: UnlockThresholds = UNLOCK,
    ):
        self._store = store
        self._phase_service = phase_service
        self._clock = clock
        self._thresholds = thresholds

    def evaluate_unlock(self, target_exercise: str, prerequisite_exercise: str) -> UnlockEvaluation:
        """
        Check whether target_exercise can be unlocked.

        Args:
            target_exercise: Exercise to unlock (catalog name)
            prerequisite_exercise: Exercise key whose history is judged

        Returns:
            UnlockEvaluation with per-criterion results and missing labels
        """
        try:
            if get_complexity_tier(target_exercise) == ComplexityTier.SIMPLE:
                return UnlockEvaluation(
                    unlocked=True,
                    criteria=UnlockCriteria(strength=True, mobility=True, pain_free=True, weeks=0),
                )

            if self._store.is_exercise_unlocked(target_exercise):
                return UnlockEvaluation(
                    unlocked=True,
                    criteria=UnlockCriteria(strength=True, mobility=True, pain_free=True, weeks=999),
                )

            requirements = get_unlock_requirements(target_exercise)
            criteria = UnlockCriteria()
            missing = []

            if requirements.strength_milestone:
                criteria.strength = self._check_strength_milestone(
                    prerequisite_exercise, target_exercise
                )
                if not criteria.strength:
                    missing.append("strength milestone")
            else:
                criteria.strength = True

            if requirements.mobility_check:
                criteria.mobility = self._check_mobility(target_exercise)
                if not criteria.mobility:
                    missing.append("mobility check")
            else:
                criteria.mobility = True

            if requirements.pain_free_workouts > 0:
                criteria.pain_free = self._check_pain_free(
                    prerequisite_exercise, requirements.pain_free_workouts
                )
                if not criteria.pain_free:
                    missing.append(f"{requirements.pain_free_workouts}+ pain-free workouts")
            else:
                criteria.pain_free = True

            criteria.weeks = self._training_weeks(prerequisite_exercise)
            if criteria.weeks < requirements.training_weeks:
                missing.append(f"{requirements.training_weeks}+ weeks training")

            return UnlockEvaluation(unlocked=not missing, criteria=criteria, missing=missing)

        except Exception:
            logger.exception(f"Unlock evaluation failed for {target_exercise}")
            return UnlockEvaluation(unlocked=False, missing=[EVALUATION_ERROR])

    def evaluate_unlock_with_phase_priority(
        self,
        target_exercise: str,
        prerequisite_exercise: str,
    ) -> UnlockEvaluation:
        """
        Evaluate an unlock and rank it for the current training phase.

        Lower priority numbers are offered first. Locked targets always get
        priority 999 and are never phase-recommended.
        """
        evaluation = self.evaluate_unlock(target_exercise, prerequisite_exercise)
        exercise_type = get_exercise_type(target_exercise)
        evaluation.exercise_type = exercise_type

        if not evaluation.unlocked:
            evaluation.priority = NOT_RECOMMENDED_PRIORITY
            evaluation.phase_recommended = False
            return evaluation

        unlock_priority = self._phase_service.get_unlock_priority()
        evaluation.priority = _calculate_priority(exercise_type, unlock_priority)
        evaluation.phase_recommended = _is_phase_recommended(exercise_type, unlock_priority)
        return evaluation

    def record_unlock(self, exercise_name: str, evaluation: UnlockEvaluation) -> UnlockRecord:
        """
        Persist an unlock with a snapshot of the criteria that were met.

        Raises:
            StoreValidationError: If the exercise name is invalid
        """
        return self._store.save_unlock(exercise_name, asdict(evaluation.criteria))

    def find_next_unlock(self, slot_key: str, current_exercise: str) -> Optional[UnlockSuggestion]:
        """
        Find the first harder variant in a slot that can now be unlocked.

        Args:
            slot_key: Workout slot (e.g. "UPPER_A_SLOT_1")
            current_exercise: Exercise key currently trained in the slot

        Returns:
            UnlockSuggestion, or None when nothing new is unlockable
        """
        path = get_progression_path(slot_key)
        if path is None:
            return None

        for target in path.harder:
            if self._store.is_exercise_unlocked(target):
                continue
            evaluation = self.evaluate_unlock(target, current_exercise)
            if evaluation.unlocked:
                logger.info(f"{target} is unlockable from {current_exercise}")
                return UnlockSuggestion(slot_key=slot_key, exercise_name=target, evaluation=evaluation)
        return None

    # =========================================================================
    # Criteria
    # =========================================================================

    def _check_strength_milestone(self, prerequisite: str, target: str) -> bool:
        milestone = STRENGTH_MILESTONES.get((exercise_name_from_key(prerequisite), target))
        if milestone is None:
            return False

        recent = self._store.get_exercise_history(prerequisite)[
            -self._thresholds.milestone_lookback_sessions:
        ]
        for session in recent:
            qualifying = [
                s
                for s in session.sets
                if (s.weight or 0) >= milestone.weight and (s.reps or 0) >= milestone.reps
            ]
            if len(qualifying) >= milestone.sets:
                return True
        return False

    def _check_mobility(self, target: str) -> bool:
        criteria_key = MOBILITY_CRITERIA.get(target)
        if criteria_key is None:
            return True

        needed = self._thresholds.mobility_confirmations
        checks = self._store.get_mobility_checks(criteria_key)
        if len(checks) < needed:
            return False
        return all(check.confirmed for check in checks[-needed:])

    def _check_pain_free(self, prerequisite: str, required_workouts: int) -> bool:
        history = self._store.get_exercise_history(prerequisite)
        if len(history) < required_workouts:
            return False
        return not any(entry.had_pain for entry in history[-required_workouts:])

    def _training_weeks(self, prerequisite: str) -> int:
        history = self._store.get_exercise_history(prerequisite)
        if not history:
            return 0
        return whole_weeks_between(history[0].date, self._clock())


def _calculate_priority(exercise_type: ExerciseType, unlock_priority: UnlockPriority) -> int:
    if unlock_priority == UnlockPriority.BODYWEIGHT_PRIORITY:
        return 1 if exercise_type in (ExerciseType.BODYWEIGHT, ExerciseType.TRADITIONAL) else 2
    if unlock_priority == UnlockPriority.SAFETY_FIRST:
        return 1 if exercise_type == ExerciseType.BODYWEIGHT else NOT_RECOMMENDED_PRIORITY
    return 1


def _is_phase_recommended(exercise_type: ExerciseType, unlock_priority: UnlockPriority) -> bool:
    if unlock_priority == UnlockPriority.BODYWEIGHT_PRIORITY:
        return exercise_type in (ExerciseType.BODYWEIGHT, ExerciseType.TRADITIONAL)
    if unlock_priority == UnlockPriority.SAFETY_FIRST:
        return exercise_type == ExerciseType.BODYWEIGHT
    return True
