"""
Infrastructure Layer for the BUILD tracker engine.

This package contains concrete implementations of repository interfaces:
- store/: JSON file and in-memory key-value backends, and the training
  store built on top of them
"""

# Re-export store adapters for convenient access
from infrastructure.store import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueTrainingStore,
)

__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueTrainingStore",
]
