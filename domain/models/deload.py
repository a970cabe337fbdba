"""
DeloadState record for the deload lifecycle (inactive -> active -> inactive).
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator

from domain.models.timestamps import parse_timestamp

_TRUE_STRINGS = frozenset({"true", "1"})

class DeloadType(str, Enum):
    """Kinds of deload week."""

    STANDARD = "standard"
    LIGHT = "light"
    ACTIVE_RECOVERY = "active_recovery"


class DeloadState(BaseModel):
    """
    Persisted deload lifecycle state.

    Invariant: an active deload always has both a start and an end date.
    Only one deload can be active at a time, so the whole lifecycle fits
    in a single record.

    Examples:
        >>> DeloadState().active
        False
    """

    active: bool = False
    deload_type: Optional[DeloadType] = Field(default=None, alias="deloadType")
    start_date: Optional[datetime] = Field(default=None, alias="startDate")
    end_date: Optional[datetime] = Field(default=None, alias="endDate")
    last_deload_date: Optional[datetime] = Field(default=None, alias="lastDeloadDate")
    dismissed_count: int = Field(default=0, ge=0, alias="dismissedCount")

    @field_validator("start_date", "end_date", "last_deload_date", mode="before")
    @classmethod
    def normalise_dates(cls, v):
        if v is None or v == "":
            return None
        return parse_timestamp(v)

    @field_validator("active", mode="before")
    @classmethod
    def coerce_active(cls, v):
        # Legacy records stored null/undefined for inactive, some stored strings
        if isinstance(v, str):
            return v.strip().lower() in _TRUE_STRINGS
        return v is True or v == 1

    @field_validator("dismissed_count", mode="before")
    @classmethod
    def coerce_dismissed(cls, v):
        return v or 0

    @model_validator(mode="after")
    def validate_active_dates(self) -> "DeloadState":
        """An active deload must know when it started and ends."""
        if self.active and (self.start_date is None or self.end_date is None):
            raise ValueError("Active deload requires startDate and endDate")
        return self

    @field_serializer("start_date", "end_date", "last_deload_date")
    def serialize_dates(self, v: Optional[datetime]) -> Optional[str]:
        return v.isoformat() if v is not None else None

    model_config = {
        "frozen": True,
        "extra": "ignore",
        "populate_by_name": True,
    }
