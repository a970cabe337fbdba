"""
Core evaluators of the decision engine.

Usage:
    from engine.core import PhaseService, ProgressionService

    phase_service = PhaseService(store)
    progression = ProgressionService(store, phase_service)
    progression.get_status("UPPER_A - DB Flat Bench Press", exercise)
"""

from engine.core.deload_service import DeloadReason, DeloadService, DeloadTrigger
from engine.core.performance_analyzer import (
    PerformanceAnalyzer,
    PerformancePattern,
    PerformanceResult,
    PerformanceStatus,
)
from engine.core.phase_service import PhaseService, ProgressionBehavior
from engine.core.progression_service import (
    ProgressionRecommendation,
    ProgressionService,
    ProgressionStatus,
    detect_successful_progression,
    detect_weight_gap_failure,
    get_best_set,
    get_next_weight,
    get_progression_status,
    parse_rep_range,
    parse_rir_target,
    should_increase_weight,
)
from engine.core.readiness_service import (
    TRANSITION_TARGETS,
    ReadinessReport,
    ReadinessService,
    TransitionTarget,
)
from engine.core.tempo_guidance import TempoGuidance, TempoPhase, get_tempo_guidance
from engine.core.unlock_evaluator import (
    ExerciseType,
    UnlockCriteria,
    UnlockEvaluation,
    UnlockEvaluator,
    UnlockSuggestion,
)

__all__ = [
    # Phase policy
    "PhaseService",
    "ProgressionBehavior",
    # Progression
    "ProgressionService",
    "ProgressionStatus",
    "ProgressionRecommendation",
    "parse_rep_range",
    "parse_rir_target",
    "should_increase_weight",
    "get_progression_status",
    "get_next_weight",
    "get_best_set",
    "detect_weight_gap_failure",
    "detect_successful_progression",
    # Tempo cues
    "TempoGuidance",
    "TempoPhase",
    "get_tempo_guidance",
    # Performance
    "PerformanceAnalyzer",
    "PerformanceResult",
    "PerformanceStatus",
    "PerformancePattern",
    # Deload
    "DeloadService",
    "DeloadTrigger",
    "DeloadReason",
    # Unlocks
    "UnlockEvaluator",
    "UnlockEvaluation",
    "UnlockCriteria",
    "UnlockSuggestion",
    "ExerciseType",
    # Readiness
    "ReadinessService",
    "ReadinessReport",
    "TransitionTarget",
    "TRANSITION_TARGETS",
]
