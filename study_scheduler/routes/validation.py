"""
Request-level checks for stored availability entries.
"""

from typing import Iterable, Optional

from fastapi import HTTPException

from ..scheduling.core.exceptions import InvalidTimeError
from ..scheduling.utils.time_utils import is_aligned, to_minutes


def _checked_minutes(value: str, field: str) -> int:
    try:
        minutes = to_minutes(value)
    except InvalidTimeError:
        raise HTTPException(status_code=400, detail=f"{field} must be in HH:mm format")
    if not is_aligned(minutes):
        raise HTTPException(status_code=400, detail=f"{field} must be in 15-minute increments")
    return minutes


def validate_day_of_week(day_of_week: Optional[int]):
    if day_of_week is not None and not 0 <= day_of_week <= 6:
        raise HTTPException(status_code=400, detail="day_of_week must be 0..6")


def validate_time_range(start_time: Optional[str], end_time: Optional[str]):
    """HH:mm, 15-minute aligned, and start before end when both are given."""
    start = _checked_minutes(start_time, "start_time") if start_time is not None else None
    end = _checked_minutes(end_time, "end_time") if end_time is not None else None
    if start is not None and end is not None and start >= end:
        raise HTTPException(status_code=400, detail="start_time must be before end_time")


def reject_nulls(changes: dict, required_fields: Iterable[str]):
    """Explicit nulls may only clear optional columns."""
    nulled = [field for field in required_fields if field in changes and changes[field] is None]
    if nulled:
        raise HTTPException(status_code=400, detail=f"Fields cannot be null: {', '.join(nulled)}")
