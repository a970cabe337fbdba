"""
SessionEntry record: one performance of one exercise on one date.
"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_serializer, field_validator

from domain.models.timestamps import parse_timestamp
from domain.models.workout_set import WorkoutSet


class SessionEntry(BaseModel):
    """
    One completed (or partially completed) performance of an exercise.

    Entries are stored per exercise key ("<workout> - <exercise name>"),
    oldest first. The persisted JSON uses camelCase keys for the
    timing fields (startTime, endTime, painLevel).

    Examples:
        >>> entry = SessionEntry(
        ...     date="2026-01-05T10:00:00Z",
        ...     sets=[WorkoutSet(weight=20, reps=12, rir=2)],
        ... )
        >>> entry.first_set_weight
        20.0
    """

    date: datetime = Field(..., description="When the session happened (UTC)")
    sets: List[WorkoutSet] = Field(default_factory=list)
    start_time: Optional[Union[int, float, str]] = Field(
        default=None, alias="startTime"
    )
    end_time: Optional[Union[int, float, str]] = Field(
        default=None, alias="endTime"
    )
    pain_level: Optional[int] = Field(
        default=None,
        ge=0,
        alias="painLevel",
        description="0/None = no pain, 1 = minor, 2 = significant",
    )

    @field_validator("date", mode="before")
    @classmethod
    def normalise_date(cls, v):
        """Accept ISO strings with or without timezone."""
        return parse_timestamp(v)

    @field_serializer("date")
    def serialize_date(self, v: datetime) -> str:
        return v.isoformat()

    @property
    def has_sets(self) -> bool:
        return len(self.sets) > 0

    @property
    def first_set_weight(self) -> Optional[float]:
        """Weight of the first set, or None if no sets / no weight logged."""
        if not self.sets:
            return None
        return self.sets[0].weight

    @property
    def had_pain(self) -> bool:
        return bool(self.pain_level)

    model_config = {
        "frozen": True,
        "extra": "ignore",
        "populate_by_name": True,
    }
