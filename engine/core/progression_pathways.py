"""
Progression pathways per workout slot.

Each slot has a default exercise plus easier, harder and same-tier
alternate options. Harder options are listed in the order they should be
offered for unlocking.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressionPath:
    slot_name: str
    current: str
    easier: Tuple[str, ...] = ()
    harder: Tuple[str, ...] = ()
    alternate: Tuple[str, ...] = ()
    notes: Optional[str] = field(default=None, compare=False)

    def all_options(self) -> List[str]:
        """Every exercise in the slot: easier, current, harder, alternate."""
        return [*self.easier, self.current, *self.harder, *self.alternate]


PROGRESSION_PATHS: Dict[str, ProgressionPath] = {
    # -------------------------------------------------------------------------
    # UPPER A - horizontal
    # -------------------------------------------------------------------------
    "UPPER_A_SLOT_1": ProgressionPath(
        slot_name="Compound Horizontal Push",
        easier=("Machine Chest Press", "Incline Push-Up"),
        current="DB Flat Bench Press",
        harder=(
            "Barbell Bench Press",  # Load progression
            "Sadharan Dand",  # Movement progression
            "Vrushchik Dand",  # Requires Sadharan Dand mastery
        ),
        alternate=("Cable Chest Press",),
    ),
    "UPPER_A_SLOT_2": ProgressionPath(
        slot_name="Mid-back Horizontal Pull",
        easier=("Machine Row",),
        current="Seated Cable Row",
        harder=("Barbell Bent-Over Row", "Inverted Row"),
        alternate=("Chest-Supported Row",),
    ),
    "UPPER_A_SLOT_3": ProgressionPath(
        slot_name="Isolation Horizontal Push",
        easier=("Machine Chest Fly",),
        current="Cable Chest Fly",
        harder=("DB Chest Fly",),
        alternate=("Incline Push-Up",),
    ),
    "UPPER_A_SLOT_4": ProgressionPath(
        slot_name="Lat-emphasis Horizontal Pull",
        easier=("Single-Arm Cable Row",),
        current="T-Bar Row",
        harder=("Pendlay Row",),
    ),
    "UPPER_A_SLOT_5": ProgressionPath(
        slot_name="Lateral Deltoids",
        easier=("Cable Lateral Raises", "Seated DB Lateral Raises"),
        current="DB Lateral Raises",
        harder=("Lean-Away Cable Laterals",),
        alternate=("Cable Upright Row",),
    ),
    "UPPER_A_SLOT_6": ProgressionPath(
        slot_name="Rear Delts/Rotator Cuff",
        easier=("Band Face Pulls",),
        current="Face Pulls",
        harder=("Heavy Face Pulls with pause",),
        alternate=("Reverse Fly",),
    ),
    "UPPER_A_SLOT_7": ProgressionPath(
        slot_name="Scapular Retraction/Rear Delts",
        easier=("Cable Reverse Fly", "Machine Reverse Fly"),
        current="Reverse Fly",
        harder=("Y-Raises", "Prone Y-Raises"),
        alternate=("Rear Delt Cable Fly",),
        notes="Duplicated with UPPER_B_SLOT_5 for twice-weekly shoulder stability work",
    ),
    # -------------------------------------------------------------------------
    # LOWER A / UPPER B / LOWER B - milestone-backed slots
    # -------------------------------------------------------------------------
    "LOWER_A_SLOT_1": ProgressionPath(
        slot_name="Compound Squat",
        easier=("Leg Press",),
        current="Hack Squat",
        harder=("Barbell Back Squat", "Sadharan Baithak"),
        alternate=("Smith Machine Squat",),
    ),
    "UPPER_B_SLOT_1": ProgressionPath(
        slot_name="Vertical Pull",
        easier=("Lat Pulldown (neutral grip)",),
        current="Lat Pulldown",
        harder=("Pull-ups",),
        alternate=("Lat Pulldown (underhand)",),
    ),
    "LOWER_B_SLOT_1": ProgressionPath(
        slot_name="Squat Pattern",
        easier=("Leg Press",),
        current="DB Goblet Squat",
        harder=("Barbell Back Squat", "Sadharan Baithak"),
        alternate=("Front-Loaded Goblet Squat",),
    ),
    "LOWER_B_SLOT_2": ProgressionPath(
        slot_name="Hip Hinge",
        easier=("45° Hyperextension",),
        current="DB Romanian Deadlift",
        harder=("Barbell Deadlift",),
        alternate=("Single-Leg Romanian Deadlift",),
    ),
}


def get_progression_path(slot_key: str) -> Optional[ProgressionPath]:
    """Pathway for a slot, or None (logged) if the slot is unknown."""
    path = PROGRESSION_PATHS.get(slot_key) if isinstance(slot_key, str) else None
    if path is None:
        logger.warning(f"No progression path for slot: {slot_key!r}")
    return path


def get_all_progressions(slot_key: str) -> List[str]:
    path = get_progression_path(slot_key)
    return path.all_options() if path else []
