"""
Unit tests for domain models.

These tests verify:
- Model validation
- Tolerant parsing of legacy persisted records
- Computed properties
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from domain.models import (
    DeloadState,
    ExerciseDefinition,
    MobilityCheck,
    PainReport,
    SessionEntry,
    TrainingPhase,
    UnlockRecord,
    WorkoutSet,
)
from domain.models.timestamps import parse_timestamp, whole_weeks_between


@pytest.mark.unit
class TestWorkoutSet:
    def test_complete_set(self):
        assert WorkoutSet(weight=20, reps=12, rir=0).is_complete is True

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"weight": 0, "reps": 12, "rir": 2},
            {"weight": 20, "reps": 0, "rir": 2},
            {"weight": 20, "reps": 12},
        ],
    )
    def test_incomplete_sets(self, kwargs):
        assert WorkoutSet(**kwargs).is_complete is False

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            WorkoutSet(weight=-5, reps=10)

    def test_str(self):
        assert str(WorkoutSet(weight=22.5, reps=10, rir=2)) == "22.5kg x 10 @ RIR 2"
        assert str(WorkoutSet(reps=45)) == "0kg x 45 @ RIR ?"


@pytest.mark.unit
class TestSessionEntry:
    def test_accepts_camel_case_record(self):
        entry = SessionEntry.model_validate(
            {
                "date": "2026-01-05T10:00:00.000Z",
                "sets": [{"weight": 20, "reps": 12, "rir": 2}],
                "startTime": 1736071200000,
                "painLevel": 1,
            }
        )
        assert entry.date == datetime(2026, 1, 5, 10, 0, tzinfo=timezone.utc)
        assert entry.first_set_weight == 20
        assert entry.had_pain is True

    def test_empty_session(self):
        entry = SessionEntry(date="2026-01-05")
        assert entry.has_sets is False
        assert entry.first_set_weight is None
        assert entry.had_pain is False

    def test_invalid_date_rejected(self):
        with pytest.raises(ValidationError):
            SessionEntry(date="last tuesday")


@pytest.mark.unit
class TestDeloadState:
    def test_active_requires_dates(self):
        with pytest.raises(ValidationError):
            DeloadState(active=True)

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (None, False),
            ("false", False),
            ("False", False),
            ("0", False),
            ("", False),
            (0, False),
            ("true", True),
            (1, True),
            (True, True),
        ],
    )
    def test_legacy_active_values(self, raw, expected):
        start = datetime(2026, 2, 1, tzinfo=timezone.utc)
        state = DeloadState.model_validate(
            {"active": raw, "startDate": start, "endDate": start + timedelta(days=7)}
        )
        assert state.active is expected

    def test_serializes_with_aliases(self):
        start = datetime(2026, 2, 1, tzinfo=timezone.utc)
        state = DeloadState(active=True, start_date=start, end_date=start + timedelta(days=7))
        data = state.model_dump(mode="json", by_alias=True)
        assert data["startDate"] == "2026-02-01T00:00:00+00:00"
        assert data["lastDeloadDate"] is None


@pytest.mark.unit
class TestChecksAndUnlocks:
    def test_mobility_confirmed(self):
        assert MobilityCheck(response="yes").confirmed is True
        assert MobilityCheck(response="not_sure").confirmed is False

    def test_mobility_invalid_response(self):
        with pytest.raises(ValidationError):
            MobilityCheck(response="maybe")

    def test_pain_report_alias(self):
        report = PainReport.model_validate({"hadPain": True, "location": "knee", "date": "2026-01-05"})
        assert report.had_pain is True
        assert report.severity is None

    def test_unlock_record_requires_name(self):
        with pytest.raises(ValidationError):
            UnlockRecord(exercise_name="")


@pytest.mark.unit
class TestTrainingPhase:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("maintenance", TrainingPhase.MAINTENANCE),
            (" Recovery ", TrainingPhase.RECOVERY),
            ("cutting", TrainingPhase.BUILDING),
            (None, TrainingPhase.BUILDING),
            (3, TrainingPhase.BUILDING),
        ],
    )
    def test_parse(self, raw, expected):
        assert TrainingPhase.parse(raw) == expected


@pytest.mark.unit
class TestExerciseDefinition:
    def test_aliases_and_defaults(self):
        exercise = ExerciseDefinition.model_validate({"name": "Plank", "repRange": "30-60s"})
        assert exercise.rir_target is None
        assert exercise.increment == 2.5


@pytest.mark.unit
class TestTimestamps:
    def test_naive_is_treated_as_utc(self):
        assert parse_timestamp("2026-01-05T10:00:00").tzinfo == timezone.utc

    def test_offset_is_converted(self):
        parsed = parse_timestamp("2026-01-05T12:00:00+02:00")
        assert parsed == datetime(2026, 1, 5, 10, 0, tzinfo=timezone.utc)

    def test_whole_weeks_floor(self):
        start = datetime(2026, 1, 1, tzinfo=timezone.utc)
        assert whole_weeks_between(start, start + timedelta(days=13, hours=23)) == 1
        assert whole_weeks_between(start, start + timedelta(days=14)) == 2
