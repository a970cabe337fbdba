"""
ExerciseDefinition: static prescription consumed by the progression rules.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ExerciseDefinition(BaseModel):
    """
    Static exercise prescription.

    `rep_range` is "min-max" or a single value, optionally with an "s"
    suffix for timed holds and "/side" for unilateral work
    (e.g. "8-12", "30-60s", "10-12/side", "30s/side"). `rir_target` is
    "min-max" or a single value; timed exercises usually omit it.

    Range strings are parsed lazily by the progression rules so that a
    malformed definition surfaces as InvalidExerciseDefinitionError at
    evaluation time.

    Examples:
        >>> ex = ExerciseDefinition(name="DB Flat Bench Press", repRange="8-12", rirTarget="2-3")
        >>> ex.increment
        2.5
    """

    name: str = Field(..., min_length=1)
    rep_range: str = Field(..., alias="repRange")
    rir_target: Optional[str] = Field(default=None, alias="rirTarget")
    increment: float = Field(default=2.5, ge=0, description="Load step in kg")

    model_config = {"frozen": True, "extra": "ignore", "populate_by_name": True}
