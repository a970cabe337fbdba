"""
Mobility check and pain report records.

Both are append-only sliding windows in the store (last 10 entries per
criteria key / exercise key).
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


def _today() -> str:
    return date.today().isoformat()


class MobilityResponse(str, Enum):
    """Self-assessed answer to a mobility check prompt."""

    YES = "yes"
    NO = "no"
    NOT_SURE = "not_sure"


class PainSeverity(str, Enum):
    """Severity of reported pain."""

    MINOR = "minor"
    SIGNIFICANT = "significant"


class MobilityCheck(BaseModel):
    """One mobility self-check response."""

    date: str = Field(default_factory=_today, description="ISO date (YYYY-MM-DD)")
    response: MobilityResponse

    @property
    def confirmed(self) -> bool:
        return self.response == MobilityResponse.YES

    model_config = {"frozen": True, "extra": "ignore"}


class PainReport(BaseModel):
    """
    Post-exercise pain report.

    Examples:
        >>> PainReport(hadPain=True, location="shoulder", severity="minor").had_pain
        True
    """

    date: str = Field(default_factory=_today, description="ISO date (YYYY-MM-DD)")
    had_pain: bool = Field(..., alias="hadPain")
    location: Optional[str] = None
    severity: Optional[PainSeverity] = None

    model_config = {"frozen": True, "extra": "ignore", "populate_by_name": True}
