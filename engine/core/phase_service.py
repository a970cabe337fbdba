"""
Phase Policy Service.

Maps the user's training phase to the policies the other evaluators
consume:
- progression behaviour (may the load go up, down, or neither)
- deload sensitivity (how many weeks between time-based deloads)
- unlock priority (how harder variants are ranked)

Reads are fail-safe: a missing, unknown or unreadable phase behaves as
BUILDING.
"""

from dataclasses import dataclass
from typing import Dict
import logging

from application.ports import TrainingStore
from domain.models import DeloadSensitivity, TrainingPhase, UnlockPriority
from engine.core.thresholds import DELOAD, DeloadThresholds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressionBehavior:
    """Which load changes the current phase allows."""

    allow_weight_increase: bool
    allow_weight_decrease: bool
    tempo_focus: bool


BUILDING_BEHAVIOR = ProgressionBehavior(
    allow_weight_increase=True, allow_weight_decrease=False, tempo_focus=False
)


class PhaseService:
    """
    Read-mostly policy provider keyed on the stored training phase.
    """

    PROGRESSION_BEHAVIOR: Dict[TrainingPhase, ProgressionBehavior] = {
        TrainingPhase.BUILDING: BUILDING_BEHAVIOR,
        TrainingPhase.MAINTENANCE: ProgressionBehavior(
            allow_weight_increase=False, allow_weight_decrease=False, tempo_focus=True
        ),
        TrainingPhase.RECOVERY: ProgressionBehavior(
            allow_weight_increase=False, allow_weight_decrease=True, tempo_focus=False
        ),
    }

    DELOAD_SENSITIVITY = {
        TrainingPhase.BUILDING: DeloadSensitivity.NORMAL,
        TrainingPhase.MAINTENANCE: DeloadSensitivity.HIGH,
        TrainingPhase.RECOVERY: DeloadSensitivity.VERY_HIGH,
    }

    UNLOCK_PRIORITY = {
        TrainingPhase.BUILDING: UnlockPriority.ALL,
        TrainingPhase.MAINTENANCE: UnlockPriority.BODYWEIGHT_PRIORITY,
        TrainingPhase.RECOVERY: UnlockPriority.SAFETY_FIRST,
    }

    def __init__(self, store: TrainingStore, thresholds: DeloadThresholds = DELOAD):
        self._store = store
        self._thresholds = thresholds

    def get_phase(self) -> TrainingPhase:
        """Current phase; BUILDING when absent, invalid or unreadable."""
        try:
            raw = self._store.get_training_phase()
        except Exception:
            logger.exception("Failed to read training phase, defaulting to building")
            return TrainingPhase.BUILDING

        phase = TrainingPhase.parse(raw)
        if raw is not None and phase.value != raw:
            logger.warning(f"Unknown training phase {raw!r}, using {phase.value}")
        return phase

    def set_phase(self, phase: str) -> TrainingPhase:
        """
        Persist a new phase.

        Raises:
            StoreValidationError: If phase is not a known phase
        """
        value = phase.value if isinstance(phase, TrainingPhase) else phase
        self._store.save_training_phase(value)
        logger.info(f"Training phase set to {value}")
        return TrainingPhase(value)

    def get_progression_behavior(self) -> ProgressionBehavior:
        return self.PROGRESSION_BEHAVIOR.get(self.get_phase(), BUILDING_BEHAVIOR)

    def get_deload_sensitivity(self) -> DeloadSensitivity:
        return self.DELOAD_SENSITIVITY.get(self.get_phase(), DeloadSensitivity.NORMAL)

    def get_deload_threshold_weeks(self) -> int:
        """Weeks since the last deload after which a time-based deload fires."""
        sensitivity = self.get_deload_sensitivity()
        return self._thresholds.weeks_by_sensitivity.get(
            sensitivity, self._thresholds.weeks_by_sensitivity[DeloadSensitivity.NORMAL]
        )

    def get_unlock_priority(self) -> UnlockPriority:
        return self.UNLOCK_PRIORITY.get(self.get_phase(), UnlockPriority.ALL)
