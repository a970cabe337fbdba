"""
Infrastructure Store Layer.

This package provides local, single-writer implementations of the store
interfaces defined in application.ports.

Usage:
    from pathlib import Path
    from infrastructure.store import JsonFileKeyValueStore, KeyValueTrainingStore

    backend = JsonFileKeyValueStore(Path("~/.build-tracker/store.json"))
    store = KeyValueTrainingStore(backend)

    history = store.get_exercise_history("UPPER_A - DB Flat Bench Press")
"""

from infrastructure.store.key_value import InMemoryKeyValueStore, JsonFileKeyValueStore
from infrastructure.store.training_store import KeyValueTrainingStore

__all__ = [
    # Blob backends
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",

    # Training records
    "KeyValueTrainingStore",
]
