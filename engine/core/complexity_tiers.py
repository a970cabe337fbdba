"""
Exercise complexity tiers and the unlock requirements attached to them.

Tiers classify exercises by biomechanical demand:
- simple: single joint, stable base, single plane (always available)
- moderate: multi-joint OR unstable base OR multi-plane
- complex: multi-joint AND unstable base AND multi-plane, plus the
  barbell compounds and the traditional Dand / Baithak variations
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict
import logging

logger = logging.getLogger(__name__)


class ComplexityTier(str, Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


@dataclass(frozen=True)
class UnlockRequirements:
    """What a lifter must show before a tier's exercises unlock."""

    strength_milestone: bool
    mobility_check: bool
    pain_free_workouts: int
    training_weeks: int


UNLOCK_REQUIREMENTS: Dict[ComplexityTier, UnlockRequirements] = {
    ComplexityTier.SIMPLE: UnlockRequirements(
        strength_milestone=False, mobility_check=False, pain_free_workouts=0, training_weeks=0
    ),
    ComplexityTier.MODERATE: UnlockRequirements(
        strength_milestone=True, mobility_check=False, pain_free_workouts=0, training_weeks=4
    ),
    ComplexityTier.COMPLEX: UnlockRequirements(
        strength_milestone=True, mobility_check=True, pain_free_workouts=5, training_weeks=8
    ),
}


_SIMPLE = [
    "Cable Chest Fly",
    "DB Lateral Raises",
    "Face Pulls",
    "Leg Curl",
    "Leg Extension",
    "Standing Calf Raise",
    "Reverse Fly",
    "Leg Abduction",
    "Seated Calf Raise",
    "Plank",
    "Dead Bug",
    "Side Plank",
    "DB Chest Fly",
    "Cable Lateral Raises",
    "Lean-Away Cable Laterals",
    "Machine Lateral Raises",
    "Heavy Face Pulls with pause",
    "Lat Pulldown (neutral grip)",
    "Lat Pulldown (close grip)",
    "Cable Pullover",
    "Straight-Arm Lat Pulldown",
    "Dumbbell Pullover",
    "Reverse Pec Deck",
    "Rear Delt Cable Fly",
    "Cable Upright Row",
    "Smith Machine Upright Row",
    "Preacher Curl",
    "Cable Curl",
    "Concentration Curl",
    "Overhead Cable Triceps Extension",
    "Cable Triceps Pushdown",
]

_MODERATE = [
    "DB Flat Bench Press",
    "Seated Cable Row",
    "T-Bar Row",
    "Lat Pulldown",
    "DB Shoulder Press",
    "Chest-Supported Row",
    "Incline DB Press",
    "Hack Squat",
    "45° Hyperextension",
    "DB Goblet Squat",
    "DB Romanian Deadlift",
    "Hip Thrust",
    "Barbell Bent-Over Row",
    "Pendlay Row",
    "DB Incline Bench Press",
    "Close-Grip Bench Press",
    "DB Flat Bench (neutral grip)",
    "DB Incline Bench (neutral grip)",
    "Machine Chest Press",
    "Smith Machine Bench Press",
    "Low-to-High Cable Fly",
    "High-to-Low Cable Fly",
    "Chest Dip",
    "Incline Push-Up",
    "Floor Press",
    "Paused Bench Press",
    "Spoto Press",
    "Cable Row (wide grip)",
    "Cable Row (close grip)",
    "Single-Arm Cable Row",
    "Inverted Row",
    "Assisted Pull-Up",
    "Pull-ups",  # Milestone-gated from Lat Pulldown
    "Lat Pulldown (underhand)",
    "DB Row (elbow out)",
    "DB Row (elbow in)",
    "Chest-Supported DB Row",
    "Meadows Row",
    "Single-Arm Landmine Row",
    "Paused Barbell Row",
    "Seated DB Shoulder Press",
    "Arnold Press",
    "Machine Shoulder Press",
    "DB Reverse Fly (standing)",
    "DB Reverse Fly (incline bench)",
    "DB Upright Row",
    "Barbell Upright Row",
    "DB Shrug",
    "Barbell Shrug",
    "Machine Shrug",
    "Leg Press",
    "Bulgarian Split Squat",
    "Walking Lunges",
    "Smith Machine Squat",
    "Front-Loaded Goblet Squat",
    "Sumo Squat",
    "Box Squat",
    "Pause Squat",
    "Single-Leg Romanian Deadlift",
    "Good Morning",
    "Nordic Curl",
    "Glute-Ham Raise",
    "Reverse Hyper",
    "Cable Pull-Through",
    "Ardha Baithak",  # Half squat, partial range of motion
]

_COMPLEX = [
    # Barbell compounds
    "Barbell Bench Press",
    "Barbell Back Squat",
    "Barbell Deadlift",
    "Barbell Overhead Press",
    # Dand (traditional push-up) variations
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
    # Baithak (traditional squat) variations
    "Sadharan Baithak",
    "Pehalwani Baithak",
    "Pehalwani Baithak 2",
    "Rammurti Baithak",
    "Hanuman Baithak",
]

EXERCISE_COMPLEXITY: Dict[str, ComplexityTier] = {
    **{name: ComplexityTier.SIMPLE for name in _SIMPLE},
    **{name: ComplexityTier.MODERATE for name in _MODERATE},
    **{name: ComplexityTier.COMPLEX for name in _COMPLEX},
}


def get_complexity_tier(exercise_name: str) -> ComplexityTier:
    """Tier of an exercise; unknown names are treated as SIMPLE."""
    tier = EXERCISE_COMPLEXITY.get(exercise_name) if isinstance(exercise_name, str) else None
    if tier is None:
        logger.warning(f"Unknown exercise for complexity tier: {exercise_name!r}")
        return ComplexityTier.SIMPLE
    return tier


def get_unlock_requirements(exercise_name: str) -> UnlockRequirements:
    return UNLOCK_REQUIREMENTS[get_complexity_tier(exercise_name)]


def is_unlocked_by_default(exercise_name: str) -> bool:
    return get_complexity_tier(exercise_name) == ComplexityTier.SIMPLE
