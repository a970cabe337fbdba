"""
Unit tests for complexity tiers, progression pathways and unlock evaluation.
"""

import pytest

from engine.core.complexity_tiers import (
    ComplexityTier,
    get_complexity_tier,
    get_unlock_requirements,
    is_unlocked_by_default,
)
from engine.core.phase_service import PhaseService
from engine.core.progression_pathways import get_all_progressions, get_progression_path
from engine.core.unlock_evaluator import (
    ExerciseType,
    UnlockEvaluator,
    exercise_name_from_key,
    get_exercise_type,
)
from tests.fakes import create_test_history, create_test_session

BENCH_KEY = "UPPER_A - DB Flat Bench Press"
PULLDOWN_KEY = "UPPER_B - Lat Pulldown"


def _evaluator(store, clock) -> UnlockEvaluator:
    return UnlockEvaluator(store, PhaseService(store), clock=clock)


def _seed_bench_ready(store, mobility_key="scapular_retraction"):
    """Eight weeks of 15kg x 12 x 3, pain-free, with three mobility confirmations."""
    store.seed_history(BENCH_KEY, create_test_history(weights=[15] * 5, reps=12))
    store.seed_mobility_checks(mobility_key, ["no", "yes", "yes", "yes"])


# =============================================================================
# Static tables
# =============================================================================


@pytest.mark.unit
class TestComplexityTiers:
    def test_known_tiers(self):
        assert get_complexity_tier("Plank") == ComplexityTier.SIMPLE
        assert get_complexity_tier("Hack Squat") == ComplexityTier.MODERATE
        assert get_complexity_tier("Barbell Deadlift") == ComplexityTier.COMPLEX
        assert get_complexity_tier("Hanuman Baithak") == ComplexityTier.COMPLEX

    def test_unknown_exercise_is_simple(self):
        assert get_complexity_tier("Underwater Basket Weaving") == ComplexityTier.SIMPLE
        assert is_unlocked_by_default("Underwater Basket Weaving") is True

    def test_requirements_per_tier(self):
        moderate = get_unlock_requirements("Pull-ups")
        assert moderate.strength_milestone is True
        assert moderate.mobility_check is False
        assert moderate.training_weeks == 4

        complex_ = get_unlock_requirements("Barbell Bench Press")
        assert complex_.mobility_check is True
        assert complex_.pain_free_workouts == 5
        assert complex_.training_weeks == 8


@pytest.mark.unit
class TestProgressionPathways:
    def test_bench_slot(self):
        path = get_progression_path("UPPER_A_SLOT_1")
        assert path.current == "DB Flat Bench Press"
        assert path.harder[0] == "Barbell Bench Press"

    def test_all_progressions_order(self):
        options = get_all_progressions("UPPER_A_SLOT_4")
        assert options == ["Single-Arm Cable Row", "T-Bar Row", "Pendlay Row"]

    def test_unknown_slot(self):
        assert get_progression_path("CARDIO_SLOT_9") is None
        assert get_all_progressions("CARDIO_SLOT_9") == []


@pytest.mark.unit
class TestExerciseNames:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Barbell Bench Press", ExerciseType.BARBELL),
            ("Sadharan Dand", ExerciseType.BODYWEIGHT),
            ("Pehalwani Baithak", ExerciseType.BODYWEIGHT),
            ("Pull-ups", ExerciseType.BODYWEIGHT),
            ("Mudgal", ExerciseType.TRADITIONAL),
            ("Hack Squat", ExerciseType.EQUIPMENT),
        ],
    )
    def test_exercise_type(self, name, expected):
        assert get_exercise_type(name) == expected

    def test_name_from_key(self):
        assert exercise_name_from_key(BENCH_KEY) == "DB Flat Bench Press"
        assert exercise_name_from_key("Hack Squat") == "Hack Squat"


# =============================================================================
# Evaluation
# =============================================================================


@pytest.mark.unit
class TestEvaluateUnlock:
    def test_simple_target_is_always_unlocked(self, store, clock):
        evaluation = _evaluator(store, clock).evaluate_unlock("Face Pulls", "anything")
        assert evaluation.unlocked is True
        assert evaluation.missing == []
        assert evaluation.criteria.weeks == 0

    def test_recorded_unlock_is_permanent(self, store, clock):
        store.seed_unlock("Barbell Bench Press")
        evaluation = _evaluator(store, clock).evaluate_unlock("Barbell Bench Press", BENCH_KEY)
        assert evaluation.unlocked is True
        assert evaluation.criteria.weeks == 999

    def test_complex_unlock_when_all_criteria_met(self, store, clock):
        _seed_bench_ready(store)
        evaluation = _evaluator(store, clock).evaluate_unlock("Barbell Bench Press", BENCH_KEY)
        assert evaluation.unlocked is True
        assert evaluation.criteria.strength is True
        assert evaluation.criteria.mobility is True
        assert evaluation.criteria.pain_free is True
        assert evaluation.criteria.weeks == 8

    def test_complex_missing_everything(self, store, clock):
        evaluation = _evaluator(store, clock).evaluate_unlock("Barbell Bench Press", BENCH_KEY)
        assert evaluation.unlocked is False
        assert evaluation.missing == [
            "strength milestone",
            "mobility check",
            "5+ pain-free workouts",
            "8+ weeks training",
        ]

    def test_strength_milestone_needs_enough_qualifying_sets(self, store, clock):
        _seed_bench_ready(store)
        history = store.get_exercise_history(BENCH_KEY)
        # Last three sessions only two sets at 15kg
        for i in range(2, 5):
            history[i] = create_test_session(history[i].date, weight=15, reps=12, num_sets=2)
        store.seed_history(BENCH_KEY, history)
        evaluation = _evaluator(store, clock).evaluate_unlock("Barbell Bench Press", BENCH_KEY)
        assert evaluation.criteria.strength is False
        assert "strength milestone" in evaluation.missing

    def test_mobility_needs_trailing_confirmations(self, store, clock):
        _seed_bench_ready(store)
        store.seed_mobility_checks("scapular_retraction", ["yes", "yes", "not_sure", "yes"])
        evaluation = _evaluator(store, clock).evaluate_unlock("Barbell Bench Press", BENCH_KEY)
        assert evaluation.missing == ["mobility check"]

    def test_pain_in_recent_sessions_blocks(self, store, clock):
        _seed_bench_ready(store)
        history = store.get_exercise_history(BENCH_KEY)
        history[-1] = create_test_session(history[-1].date, weight=15, reps=12, pain_level=1)
        store.seed_history(BENCH_KEY, history)
        evaluation = _evaluator(store, clock).evaluate_unlock("Barbell Bench Press", BENCH_KEY)
        assert evaluation.criteria.pain_free is False
        assert evaluation.missing == ["5+ pain-free workouts"]

    def test_moderate_target(self, store, clock):
        store.seed_history(PULLDOWN_KEY, create_test_history(weights=[50, 50, 50], reps=10))
        evaluation = _evaluator(store, clock).evaluate_unlock("Pull-ups", PULLDOWN_KEY)
        assert evaluation.unlocked is True
        assert evaluation.criteria.mobility is True
        assert evaluation.criteria.pain_free is True

    def test_moderate_target_without_milestone_stays_locked(self, store, clock):
        store.seed_history(BENCH_KEY, create_test_history(weights=[30] * 5, reps=12))
        evaluation = _evaluator(store, clock).evaluate_unlock("Pendlay Row", BENCH_KEY)
        assert evaluation.unlocked is False
        assert evaluation.missing == ["strength milestone"]

    def test_store_failure_reports_evaluation_error(self, store, clock):
        store.fail_reads = True
        evaluation = _evaluator(store, clock).evaluate_unlock("Barbell Bench Press", BENCH_KEY)
        assert evaluation.unlocked is False
        assert evaluation.missing == ["evaluation error"]


@pytest.mark.unit
class TestPhasePriority:
    def test_locked_target_is_never_recommended(self, store, clock):
        evaluation = _evaluator(store, clock).evaluate_unlock_with_phase_priority(
            "Barbell Bench Press", BENCH_KEY
        )
        assert evaluation.priority == 999
        assert evaluation.phase_recommended is False
        assert evaluation.exercise_type == ExerciseType.BARBELL

    def test_building_recommends_everything(self, store, clock):
        _seed_bench_ready(store)
        evaluation = _evaluator(store, clock).evaluate_unlock_with_phase_priority(
            "Barbell Bench Press", BENCH_KEY
        )
        assert evaluation.priority == 1
        assert evaluation.phase_recommended is True

    def test_maintenance_prefers_bodyweight(self, store, clock):
        store.seed_phase("maintenance")
        _seed_bench_ready(store, mobility_key="thoracic_mobility")
        store.seed_mobility_checks("scapular_retraction", ["yes", "yes", "yes"])
        evaluator = _evaluator(store, clock)

        dand = evaluator.evaluate_unlock_with_phase_priority("Sadharan Dand", BENCH_KEY)
        barbell = evaluator.evaluate_unlock_with_phase_priority("Barbell Bench Press", BENCH_KEY)

        assert (dand.priority, dand.phase_recommended) == (1, True)
        assert (barbell.priority, barbell.phase_recommended) == (2, False)

    def test_recovery_is_safety_first(self, store, clock):
        store.seed_phase("recovery")
        _seed_bench_ready(store)
        evaluation = _evaluator(store, clock).evaluate_unlock_with_phase_priority(
            "Barbell Bench Press", BENCH_KEY
        )
        assert evaluation.unlocked is True
        assert evaluation.priority == 999
        assert evaluation.phase_recommended is False

    def test_to_dict_serializes_type(self, store, clock):
        evaluation = _evaluator(store, clock).evaluate_unlock_with_phase_priority("Plank", "x")
        data = evaluation.to_dict()
        assert data["exercise_type"] == "equipment"
        assert data["criteria"]["strength"] is True


@pytest.mark.unit
class TestFindAndRecordUnlock:
    def test_finds_first_unlockable_harder_option(self, store, clock):
        _seed_bench_ready(store)
        suggestion = _evaluator(store, clock).find_next_unlock("UPPER_A_SLOT_1", BENCH_KEY)
        assert suggestion.exercise_name == "Barbell Bench Press"
        assert suggestion.slot_key == "UPPER_A_SLOT_1"

    def test_skips_already_unlocked_options(self, store, clock):
        _seed_bench_ready(store, mobility_key="thoracic_mobility")
        store.seed_unlock("Barbell Bench Press")
        suggestion = _evaluator(store, clock).find_next_unlock("UPPER_A_SLOT_1", BENCH_KEY)
        assert suggestion.exercise_name == "Sadharan Dand"

    def test_nothing_unlockable(self, store, clock):
        assert _evaluator(store, clock).find_next_unlock("UPPER_A_SLOT_1", BENCH_KEY) is None

    def test_unknown_slot(self, store, clock):
        assert _evaluator(store, clock).find_next_unlock("NOPE", BENCH_KEY) is None

    def test_record_unlock_snapshots_criteria(self, store, clock):
        _seed_bench_ready(store)
        evaluator = _evaluator(store, clock)
        evaluation = evaluator.evaluate_unlock("Barbell Bench Press", BENCH_KEY)

        record = evaluator.record_unlock("Barbell Bench Press", evaluation)

        assert record.exercise_name == "Barbell Bench Press"
        assert record.criteria == {"strength": True, "mobility": True, "pain_free": True, "weeks": 8}
        assert store.is_exercise_unlocked("Barbell Bench Press") is True
