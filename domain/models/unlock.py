"""
UnlockRecord: permanent record that a harder exercise variant was unlocked.
"""

from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, Field, field_serializer, field_validator

from domain.models.timestamps import parse_timestamp, utc_now


class UnlockRecord(BaseModel):
    """
    Snapshot written when an exercise is unlocked.

    Once written the unlock is permanent; there is no re-locking.
    """

    exercise_name: str = Field(..., min_length=1, alias="exerciseName")
    unlocked_date: datetime = Field(default_factory=utc_now, alias="unlockedDate")
    criteria: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("unlocked_date", mode="before")
    @classmethod
    def normalise_date(cls, v):
        return parse_timestamp(v)

    @field_serializer("unlocked_date")
    def serialize_date(self, v: datetime) -> str:
        return v.isoformat()

    model_config = {"frozen": True, "extra": "ignore", "populate_by_name": True}
