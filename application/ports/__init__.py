"""
Repository Interfaces (Ports) for the BUILD tracker engine.

This package defines abstract interfaces that decouple the decision engine
from persistence. Implementations are provided in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the engine needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import TrainingStore

    class DeloadService:
        def __init__(self, store: TrainingStore):
            self._store = store

        def postpone_deload(self):
            state = self._store.get_deload_state()
            ...
"""

# Raw blob persistence
from application.ports.key_value_store import KeyValueStore

# Training records
from application.ports.training_store import TrainingStore

__all__ = [
    "KeyValueStore",
    "TrainingStore",
]
