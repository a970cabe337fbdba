"""
Application-layer exceptions.

These exceptions are used across the engine, store adapters and CLI.

Two policies apply:
- Write/validation layer fails fast with one of these errors.
- Read/analysis layer never raises them for data problems; it logs and
  falls back to the most conservative outcome. The one exception is
  InvalidExerciseDefinitionError, which signals broken static content.
"""


class TrackerError(Exception):
    """Base class for all BUILD tracker errors."""

    pass


class StoreValidationError(TrackerError):
    """Structurally invalid argument passed to a store write.

    Raised for wrong types or missing required fields, e.g. a non-list
    history or an unknown mobility response.
    """

    pass


class StorageError(TrackerError):
    """The storage backend failed to persist data (I/O or capacity)."""

    pass


class InvalidExerciseDefinitionError(TrackerError, ValueError):
    """Malformed rep range or RIR target in an exercise definition.

    Exercise definitions come from static content, so this is treated as
    a programming error rather than a user-data problem.
    """

    pass


class DeloadStateError(TrackerError):
    """Illegal deload lifecycle transition (e.g. starting a second deload)."""

    pass


class UnknownTransitionTargetError(TrackerError, KeyError):
    """Readiness requested for an equipment transition that is not configured."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
