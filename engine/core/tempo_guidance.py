"""
Per-exercise tempo cues.

When a load cannot go up (maintenance phase, or a failed jump to the next
weight), time under tension is the lever left. Each exercise lists which
phase of the rep to slow down and a short execution cue.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class TempoPhase(str, Enum):
    ECCENTRIC = "eccentric"
    CONCENTRIC = "concentric"
    BOTH = "both"
    ISOMETRIC = "isometric"


@dataclass(frozen=True)
class TempoGuidance:
    phase: TempoPhase
    instruction: str
    cue: str


_SLOW_LOWER_DB = TempoGuidance(
    TempoPhase.ECCENTRIC,
    "Lower dumbbells slowly over 3 seconds",
    "Normal speed up | Slow controlled down (3 sec)",
)
_SLOW_LOWER_CABLE = TempoGuidance(
    TempoPhase.ECCENTRIC,
    "Lower cable slowly over 3 seconds",
    "Normal speed up | Slow controlled down (3 sec)",
)
_SLOW_LOWER_BARBELL = TempoGuidance(
    TempoPhase.ECCENTRIC,
    "Lower barbell slowly over 3 seconds",
    "Normal speed up | Slow controlled down (3 sec)",
)
_CONTROLLED_DESCENT = TempoGuidance(
    TempoPhase.ECCENTRIC,
    "Lower slowly over 3 seconds, knees tracking",
    "Controlled descent (3 sec) | Explosive drive up",
)
_PAUSED_ROW = TempoGuidance(
    TempoPhase.CONCENTRIC,
    "Pull slowly to chest, pause 2 seconds at the squeeze",
    "Slow pull (2 sec) | Hold squeeze (2 sec) | Control release",
)
_PAUSED_SQUEEZE = TempoGuidance(
    TempoPhase.CONCENTRIC,
    "Move slowly, pause 2 seconds at peak contraction",
    "Slow (2 sec) | Hold squeeze (2 sec) | Control back",
)
_SLOW_BOTH_WAYS = TempoGuidance(
    TempoPhase.BOTH,
    "Raise slowly (2s), lower slowly (3s)",
    "Slow up (2 sec) | Slow down (3 sec)",
)

TEMPO_GUIDANCE: Dict[str, TempoGuidance] = {
    # UPPER_A
    "DB Flat Bench Press": _SLOW_LOWER_DB,
    "DB Single Arm Row": _PAUSED_ROW,
    "DB Lateral Raises": _SLOW_LOWER_DB,
    "DB Hammer Curls": _SLOW_LOWER_DB,
    "Cable Overhead Extensions": _SLOW_LOWER_CABLE,
    "Cable Rope Crunches": _PAUSED_SQUEEZE,
    # LOWER_A
    "Hack Squat": _CONTROLLED_DESCENT,
    "Leg Curl": TempoGuidance(
        TempoPhase.BOTH,
        "Curl slowly up (2s), lower slowly down (3s)",
        "Slow curl up (2 sec) | Slow lower down (3 sec)",
    ),
    "Leg Extension": _PAUSED_SQUEEZE,
    "Standing Calf Raise": _SLOW_BOTH_WAYS,
    "Plank": TempoGuidance(
        TempoPhase.ISOMETRIC,
        "Maximum tension throughout, squeeze everything",
        "Squeeze glutes + abs + quads | Hold max tension",
    ),
    # UPPER_B
    "Seated Cable Row": _PAUSED_ROW,
    "DB Incline Press": _SLOW_LOWER_DB,
    "Cable Lateral Raises": _SLOW_LOWER_CABLE,
    "Reverse Pec Deck Fly": _PAUSED_SQUEEZE,
    "DB Incline Curls": _SLOW_LOWER_DB,
    "DB Overhead Extensions": _SLOW_LOWER_DB,
    "Cable Wood Chops": TempoGuidance(
        TempoPhase.BOTH,
        "Rotate slowly (2s each direction)",
        "Slow rotate (2 sec) | Slow return (2 sec)",
    ),
    # LOWER_B
    "Romanian Deadlift": TempoGuidance(
        TempoPhase.ECCENTRIC,
        "Lower slowly over 3 seconds into the hamstring stretch",
        "Controlled descent (3 sec) | Explosive drive up",
    ),
    "DB Goblet Squat": _CONTROLLED_DESCENT,
    "Bulgarian Split Squat": _CONTROLLED_DESCENT,
    "Walking Lunges": _CONTROLLED_DESCENT,
    "Seated Calf Raise": _SLOW_BOTH_WAYS,
    "Reverse Crunches": _PAUSED_SQUEEZE,
    # Barbell progressions
    "Barbell Bench Press": _SLOW_LOWER_BARBELL,
    "Barbell Back Squat": _CONTROLLED_DESCENT,
    "Barbell Deadlift": _SLOW_LOWER_BARBELL,
    "Barbell Overhead Press": _SLOW_LOWER_BARBELL,
}


def _normalise(name: str) -> str:
    # "Planks" and "Plank" name the same exercise
    name = name.strip().lower()
    return name[:-1] if name.endswith("s") else name


_BY_NORMALISED_NAME = {_normalise(name): guidance for name, guidance in TEMPO_GUIDANCE.items()}


def get_tempo_guidance(exercise_name: str) -> Optional[TempoGuidance]:
    """
    Tempo cue for an exercise name or "<workout> - <name>" key.

    Returns None for exercises without a catalogued cue.
    """
    if not exercise_name:
        return None
    name = exercise_name.rsplit(" - ", 1)[-1]
    guidance = _BY_NORMALISED_NAME.get(_normalise(name))
    if guidance is None:
        logger.debug(f"No tempo guidance for '{exercise_name}'")
    return guidance


def get_exercises_by_phase(phase: TempoPhase) -> List[str]:
    return [name for name, guidance in TEMPO_GUIDANCE.items() if guidance.phase == phase]
