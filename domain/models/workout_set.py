"""
WorkoutSet value object for a single logged set.
"""

from typing import Optional

from pydantic import BaseModel, Field


class WorkoutSet(BaseModel):
    """
    Value object representing one logged set.

    Fields are optional because in-progress sessions and legacy records may
    carry partial sets. A set only counts as complete when weight, reps and
    RIR are all present and meaningful.

    Examples:
        >>> s = WorkoutSet(weight=20, reps=12, rir=2)
        >>> s.is_complete
        True

        >>> WorkoutSet(weight=20, reps=0, rir=2).is_complete
        False
    """

    weight: Optional[float] = Field(
        default=None, ge=0, description="Load in kg (per hand for dumbbells)"
    )
    reps: Optional[int] = Field(
        default=None, ge=0, description="Reps completed (seconds for timed holds)"
    )
    rir: Optional[float] = Field(
        default=None, description="Reps in reserve (0 = failure)"
    )

    @property
    def is_complete(self) -> bool:
        """True iff weight > 0, reps > 0 and rir >= 0."""
        return (
            self.weight is not None
            and self.weight > 0
            and self.reps is not None
            and self.reps > 0
            and self.rir is not None
            and self.rir >= 0
        )

    def __str__(self) -> str:
        """Human-readable string representation."""
        rir = "?" if self.rir is None else f"{self.rir:g}"
        return f"{self.weight or 0:g}kg x {self.reps or 0} @ RIR {rir}"

    model_config = {
        "frozen": True,
        "extra": "ignore",
        "json_schema_extra": {
            "examples": [
                {"weight": 20, "reps": 12, "rir": 2},
                {"weight": 0, "reps": 45, "rir": None},
            ]
        },
    }
