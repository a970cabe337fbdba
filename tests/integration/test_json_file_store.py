"""
Integration tests for the JSON file backend.

Tests cover:
- Missing, corrupt and non-object store files
- Atomic multi-key writes
- TrainingStore persistence across process restarts (new instances)
"""
import json
from pathlib import Path

import pytest

from application.exceptions import StorageError
from domain.models import ExerciseDefinition
from engine.core.phase_service import PhaseService
from engine.core.progression_service import ProgressionService, ProgressionStatus
from infrastructure.store import JsonFileKeyValueStore, KeyValueTrainingStore
from tests.fakes import create_test_history

pytestmark = pytest.mark.integration

KEY = "LOWER_B - DB Goblet Squat"


# =============================================================================
# Test Fixtures
# =============================================================================


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "nested" / "store.json"


# =============================================================================
# Blob backend
# =============================================================================


class TestJsonFileKeyValueStore:
    def test_missing_file_reads_empty(self, store_path):
        backend = JsonFileKeyValueStore(store_path)
        assert backend.get("anything") is None
        assert backend.keys() == []
        assert not store_path.exists()

    def test_first_write_creates_file(self, store_path):
        backend = JsonFileKeyValueStore(store_path)
        backend.set("a", '"1"')
        assert json.loads(store_path.read_text(encoding="utf-8")) == {"a": '"1"'}

    def test_set_many_writes_all_keys(self, store_path):
        backend = JsonFileKeyValueStore(store_path)
        backend.set("a", "1")
        backend.set_many({"b": "2", "c": "3"})
        assert sorted(backend.keys()) == ["a", "b", "c"]
        assert JsonFileKeyValueStore(store_path).get("c") == "3"

    def test_no_temp_files_left_behind(self, store_path):
        backend = JsonFileKeyValueStore(store_path)
        backend.set("a", "1")
        backend.set("b", "2")
        assert [p.name for p in store_path.parent.iterdir()] == ["store.json"]

    def test_no_temp_files_left_behind_when_replace_fails(self, store_path, monkeypatch):
        backend = JsonFileKeyValueStore(store_path)
        backend.set("a", "1")

        def fail_replace(self, target):
            raise OSError("disk full")

        monkeypatch.setattr(Path, "replace", fail_replace)
        with pytest.raises(StorageError):
            backend.set("b", "2")

        assert [p.name for p in store_path.parent.iterdir()] == ["store.json"]
        assert JsonFileKeyValueStore(store_path).get("b") is None

    def test_non_utf8_file_reads_empty_but_refuses_writes(self, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_bytes(b'{"build_training_phase": "\xff\xfe"}')
        backend = JsonFileKeyValueStore(store_path)

        assert backend.get("build_training_phase") is None
        assert backend.keys() == []
        with pytest.raises(StorageError):
            backend.set("a", "1")
        assert store_path.read_bytes() == b'{"build_training_phase": "\xff\xfe"}'

    def test_corrupt_file_reads_empty_but_refuses_writes(self, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text("{broken", encoding="utf-8")
        backend = JsonFileKeyValueStore(store_path)

        assert backend.get("a") is None
        with pytest.raises(StorageError):
            backend.set("a", "1")
        assert store_path.read_text(encoding="utf-8") == "{broken"

    def test_non_object_file(self, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text("[1, 2]", encoding="utf-8")
        backend = JsonFileKeyValueStore(store_path)

        assert backend.keys() == []
        with pytest.raises(StorageError):
            backend.set("a", "1")

    def test_empty_file_is_empty_store(self, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text("", encoding="utf-8")
        backend = JsonFileKeyValueStore(store_path)
        backend.set("a", "1")
        assert backend.get("a") == "1"

    def test_non_string_values_ignored(self, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text(json.dumps({"a": "1", "b": 2}), encoding="utf-8")
        assert JsonFileKeyValueStore(store_path).keys() == ["a"]


# =============================================================================
# Training store on disk
# =============================================================================


class TestTrainingStoreOnDisk:
    def test_history_survives_reopen(self, store_path):
        KeyValueTrainingStore(JsonFileKeyValueStore(store_path)).save_exercise_history(
            KEY, create_test_history(weights=[12.5, 15])
        )

        reopened = KeyValueTrainingStore(JsonFileKeyValueStore(store_path))
        assert [e.first_set_weight for e in reopened.get_exercise_history(KEY)] == [12.5, 15]

    def test_transaction_is_one_file_write(self, store_path):
        store = KeyValueTrainingStore(JsonFileKeyValueStore(store_path))
        with store.transaction():
            store.save_training_phase("recovery")
            store.save_mobility_check("squat_heel_flat", "yes")
            assert not store_path.exists()

        data = json.loads(store_path.read_text(encoding="utf-8"))
        assert set(data) == {"build_training_phase", "barbell_mobility_checks"}

    def test_failed_transaction_leaves_file_untouched(self, store_path):
        store = KeyValueTrainingStore(JsonFileKeyValueStore(store_path))
        store.save_training_phase("building")
        before = store_path.read_text(encoding="utf-8")

        with pytest.raises(ValueError):
            with store.transaction():
                store.save_training_phase("recovery")
                raise ValueError("abort")

        assert store_path.read_text(encoding="utf-8") == before

    def test_non_utf8_file_degrades_engine_reads(self, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_bytes(b"\xff\xfe\x00garbage")
        store = KeyValueTrainingStore(JsonFileKeyValueStore(store_path))
        squat = ExerciseDefinition(name="DB Goblet Squat", rep_range="8-12", rir_target="2-3")

        assert store.get_exercise_history(KEY) == []
        assert store.get_deload_state().active is False
        status = ProgressionService(store, PhaseService(store)).get_status(KEY, squat)
        assert status == ProgressionStatus.NORMAL
