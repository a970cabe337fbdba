"""
Timestamp helpers shared by the domain models and the decision engine.

All persisted dates are ISO-8601 strings. Legacy records may be date-only
("2026-01-05"), carry a trailing "Z", or omit the timezone entirely; every
value is normalised to an aware UTC datetime so arithmetic never mixes
naive and aware objects.
"""

from datetime import datetime, timezone
from typing import Union

SECONDS_PER_DAY = 24 * 60 * 60
SECONDS_PER_WEEK = 7 * SECONDS_PER_DAY


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """
    Parse an ISO-8601 string (or datetime) into an aware UTC datetime.

    Args:
        value: ISO-8601 string or datetime instance

    Returns:
        Aware datetime in UTC

    Raises:
        ValueError: If the string is not a valid ISO-8601 timestamp
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Unsupported timestamp value: {value!r}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def whole_weeks_between(start: datetime, end: datetime) -> int:
    """Number of complete 7-day periods from start to end (floor)."""
    return int((end - start).total_seconds() // SECONDS_PER_WEEK)
