"""
Readiness Service for equipment-tier transitions.

Scores how close the lifter is to moving from a dumbbell or machine
exercise to its barbell or traditional counterpart. Four criteria are
combined into one percentage:

    strength  40%  load and rep/RIR quality on the source exercise
    weeks     20%  time trained on the source exercise
    mobility  30%  trailing "yes" mobility self-checks
    pain-free 10%  no recurring pain in the relevant joints

Each unmet criterion also produces a human-readable blocker line.
"""

from dataclasses import asdict, dataclass, field
from typing import Dict, List, Sequence, Tuple
import logging
import math

from application.exceptions import UnknownTransitionTargetError
from application.ports import TrainingStore
from domain.models import SessionEntry
from domain.models.timestamps import whole_weeks_between
from engine.core.thresholds import READINESS, ReadinessWeights

logger = logging.getLogger(__name__)

EVALUATION_ERROR = "evaluation error"


@dataclass(frozen=True)
class TransitionTarget:
    """
    One equipment transition and the bar the lifter has to clear.

    Examples:
        >>> TRANSITION_TARGETS["bench"].exercise_key
        'UPPER_A - DB Flat Bench Press'
    """

    key: str
    name: str
    exercise_key: str
    strength_label: str
    target_weight: float
    target_reps: int
    target_sets: int
    min_rir: int
    target_weeks: int
    mobility_key: str
    mobility_label: str
    pain_locations: Tuple[str, ...]
    pain_label: str
    required_confirmations: int = 5
    required_pain_sessions: int = 5


TRANSITION_TARGETS: Dict[str, TransitionTarget] = {
    t.key: t
    for t in [
        TransitionTarget(
            key="bench",
            name="Barbell Bench Press",
            exercise_key="UPPER_A - DB Flat Bench Press",
            strength_label="DB Flat Bench",
            target_weight=20,
            target_reps=12,
            target_sets=3,
            min_rir=2,
            target_weeks=12,
            mobility_key="bench_overhead_mobility",
            mobility_label="Overhead",
            pain_locations=("shoulder", "elbow"),
            pain_label="DB Flat Bench",
        ),
        TransitionTarget(
            key="squat",
            name="Barbell Back Squat",
            exercise_key="LOWER_B - DB Goblet Squat",
            strength_label="DB Goblet Squat",
            target_weight=20,
            target_reps=12,
            target_sets=3,
            min_rir=2,
            target_weeks=16,
            mobility_key="squat_heel_flat",
            mobility_label="Heels flat",
            pain_locations=("knee", "lower_back"),
            pain_label="Goblet Squat",
        ),
        TransitionTarget(
            key="deadlift",
            name="Barbell Deadlift",
            exercise_key="LOWER_B - DB Romanian Deadlift",
            strength_label="DB Romanian Deadlift",
            target_weight=25,
            target_reps=12,
            target_sets=3,
            min_rir=2,
            target_weeks=20,
            mobility_key="deadlift_toe_touch",
            mobility_label="Toe touch",
            pain_locations=("lower_back",),
            pain_label="Romanian Deadlift",
        ),
        TransitionTarget(
            key="sadharan_dand",
            name="Sadharan Dand",
            exercise_key="UPPER_A - DB Flat Bench Press",
            strength_label="DB Flat Bench",
            target_weight=15,
            target_reps=12,
            target_sets=3,
            min_rir=2,
            target_weeks=8,
            mobility_key="dand_plank_hold",
            mobility_label="Plank hold",
            pain_locations=("shoulder", "elbow", "wrist"),
            pain_label="DB Flat Bench",
        ),
        TransitionTarget(
            key="sadharan_baithak",
            name="Sadharan Baithak",
            exercise_key="LOWER_B - DB Goblet Squat",
            strength_label="DB Goblet Squat",
            target_weight=15,
            target_reps=12,
            target_sets=3,
            min_rir=2,
            target_weeks=8,
            mobility_key="baithak_full_depth",
            mobility_label="Full depth squat",
            pain_locations=("knee", "ankle"),
            pain_label="Goblet Squat",
        ),
        TransitionTarget(
            key="mudgal",
            name="Mudgal",
            exercise_key="UPPER_A - DB Shoulder Press",
            strength_label="DB Shoulder Press",
            target_weight=15,
            target_reps=10,
            target_sets=3,
            min_rir=2,
            target_weeks=10,
            mobility_key="mudgal_overhead_rotation",
            mobility_label="Overhead rotation",
            pain_locations=("shoulder", "elbow", "wrist"),
            pain_label="DB Shoulder Press",
        ),
        TransitionTarget(
            key="pullup",
            name="Pull-ups",
            exercise_key="UPPER_B - Lat Pulldown",
            strength_label="Lat Pulldown",
            target_weight=40,
            target_reps=10,
            target_sets=3,
            min_rir=2,
            target_weeks=12,
            mobility_key="pullup_overhead_mobility",
            mobility_label="Overhead",
            pain_locations=("shoulder", "elbow"),
            pain_label="Lat Pulldown",
        ),
    ]
}


@dataclass
class ReadinessReport:
    """Readiness for one transition. Progress values are 0-100."""

    target_key: str
    name: str
    percentage: int
    strength_met: bool = False
    weeks_met: bool = False
    mobility_met: bool = False
    pain_free: bool = False
    blockers: List[str] = field(default_factory=list)
    strength_progress: float = 0.0
    weeks_progress: float = 0.0
    mobility_progress: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


class ReadinessService:
    """
    Computes readiness reports from stored history, checks and pain reports.
    """

    def __init__(
        self,
        store: TrainingStore,
        targets: Dict[str, TransitionTarget] = TRANSITION_TARGETS,
        weights: ReadinessWeights = READINESS,
    ):
        self._store = store
        self._targets = targets
        self._weights = weights

    @property
    def target_keys(self) -> List[str]:
        return list(self._targets)

    def get_readiness(self, target_key: str) -> ReadinessReport:
        """
        Readiness report for one transition target.

        Raises:
            UnknownTransitionTargetError: If target_key is not configured
        """
        target = self._targets.get(target_key)
        if target is None:
            raise UnknownTransitionTargetError(f"Unknown transition target: {target_key}")

        try:
            return self._evaluate(target)
        except Exception:
            logger.exception(f"Readiness evaluation failed for {target_key}")
            return ReadinessReport(
                target_key=target.key,
                name=target.name,
                percentage=0,
                blockers=[EVALUATION_ERROR],
            )

    def get_all_readiness(self) -> Dict[str, ReadinessReport]:
        return {key: self.get_readiness(key) for key in self._targets}

    # =========================================================================
    # Scoring
    # =========================================================================

    def _evaluate(self, target: TransitionTarget) -> ReadinessReport:
        history = self._store.get_exercise_history(target.exercise_key)

        strength_progress = self.calculate_strength_progress(history, target)
        weeks_progress = calculate_weeks_progress(history, target.target_weeks)
        mobility_progress = self.calculate_mobility_progress(
            target.mobility_key, target.required_confirmations
        )
        pain_free = self.is_pain_free(
            [target.exercise_key], target.pain_locations, target.required_pain_sessions
        )

        strength_met = strength_progress >= 100
        weeks_met = weeks_progress >= 100
        mobility_met = mobility_progress >= 100

        w = self._weights
        total = (
            w.strength * (100 if strength_met else strength_progress)
            + w.weeks * (100 if weeks_met else weeks_progress)
            + w.mobility * (100 if mobility_met else mobility_progress)
            + w.pain_free * (100 if pain_free else 0)
        )
        percentage = max(0, min(100, math.floor(total + 1e-9)))

        blockers = []
        if not strength_met:
            blockers.append(
                f"{target.strength_label}: Need {target.target_weight:g}kg × "
                f"{target.target_sets}×{target.target_reps} @ RIR {target.min_rir}-{target.min_rir + 1}"
            )
        if not weeks_met:
            current_weeks = math.floor(weeks_progress * target.target_weeks / 100)
            blockers.append(
                f"Need {target.target_weeks - current_weeks} more weeks of training"
            )
        if not mobility_met:
            confirmations = math.floor(mobility_progress * target.required_confirmations / 100)
            blockers.append(
                f"{target.mobility_label} mobility: "
                f"{confirmations}/{target.required_confirmations} confirmations"
            )
        if not pain_free:
            locations = "/".join(loc.replace("_", " ") for loc in target.pain_locations)
            blockers.append(f"Resolve recurring {locations} pain in {target.pain_label}")

        return ReadinessReport(
            target_key=target.key,
            name=target.name,
            percentage=percentage,
            strength_met=strength_met,
            weeks_met=weeks_met,
            mobility_met=mobility_met,
            pain_free=pain_free,
            blockers=blockers,
            strength_progress=strength_progress,
            weeks_progress=weeks_progress,
            mobility_progress=mobility_progress,
        )

    def calculate_strength_progress(
        self, history: Sequence[SessionEntry], target: TransitionTarget
    ) -> float:
        """Load share (up to 80) plus a 20-point bonus when reps and RIR are on target."""
        if not history:
            return 0.0

        sets = history[-1].sets
        if not sets:
            return 0.0

        current_weight = sets[0].weight or 0
        progress = min(current_weight / target.target_weight, 1.0) * self._weights.weight_contribution

        all_reps = all((s.reps or 0) >= target.target_reps for s in sets)
        rirs = [s.rir for s in sets]
        if all_reps and None not in rirs and sum(rirs) / len(rirs) >= target.min_rir:
            progress += self._weights.rep_rir_contribution

        return min(progress, 100.0)

    def calculate_mobility_progress(self, criteria_key: str, required: int) -> float:
        """Share of required confirmations covered by the trailing run of "yes" answers."""
        checks = self._store.get_mobility_checks(criteria_key)
        trailing_yes = 0
        for check in reversed(checks):
            if not check.confirmed:
                break
            trailing_yes += 1
        return min(trailing_yes / required * 100, 100.0)

    def is_pain_free(
        self,
        exercise_keys: Sequence[str],
        relevant_locations: Sequence[str],
        required_sessions: int,
    ) -> bool:
        """
        False when any exercise shows recurring pain in a relevant location.

        Exercises with fewer than required_sessions reports do not block.
        """
        for exercise_key in exercise_keys:
            recent = self._store.get_pain_history(exercise_key)[-required_sessions:]
            if len(recent) < required_sessions:
                continue

            painful = sum(
                1
                for report in recent
                if report.had_pain and report.location in relevant_locations
            )
            if painful > self._weights.max_painful_sessions:
                return False
        return True


def calculate_weeks_progress(history: Sequence[SessionEntry], target_weeks: int) -> float:
    """Whole weeks from first to latest session, as a share of target_weeks."""
    if len(history) < 2:
        return 0.0
    weeks = max(0, whole_weeks_between(history[0].date, history[-1].date))
    return min(weeks / target_weeks * 100, 100.0)
