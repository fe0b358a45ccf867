"""
Time helpers for the scheduling engine.

All times of day are handled as minutes since midnight. Dates and datetimes
are naive local values (single-timezone deployment).
"""

import math
import re
from datetime import date, datetime, time
from typing import Iterable, List, Optional, Tuple

from dateutil import parser as date_parser

from ..core.constants import SLOT_INCREMENT_MINUTES, WEEKDAY_NAMES
from ..core.exceptions import InvalidTimeError

_HHMM = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")


def to_minutes(value) -> int:
    """Convert an HH:mm string (or datetime.time) to minutes since midnight."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    if not isinstance(value, str):
        raise InvalidTimeError(f"Expected HH:mm string, got {value!r}")

    match = _HHMM.match(value.strip())
    if not match:
        raise InvalidTimeError(f"Invalid time format: {value!r}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeError(f"Time out of range: {value!r}")
    return hours * 60 + minutes


def format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def is_aligned(minutes: int, increment: int = SLOT_INCREMENT_MINUTES) -> bool:
    return minutes % increment == 0


def weekday_index(day: date) -> int:
    """Weekday with 0=Sunday .. 6=Saturday."""
    return (day.weekday() + 1) % 7


def weekday_name_for(day: date) -> str:
    return WEEKDAY_NAMES[weekday_index(day)]


def to_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def normalize_deadline(value) -> Optional[datetime]:
    """Turn a deadline into a naive datetime; tzinfo is dropped, not converted."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    else:
        parsed = date_parser.isoparse(str(value))
    return parsed.replace(tzinfo=None)


def overlaps(block_start: int, block_end: int, item_start: int, item_end: int) -> bool:
    """Strict half-open intersection; touching endpoints do not overlap."""
    return block_start < item_end and block_end > item_start


def subtract_intervals(
    intervals: Iterable[Tuple[int, int]], holes: Iterable[Tuple[int, int]]
) -> List[Tuple[int, int]]:
    """Remove every hole from every interval, keeping the remaining pieces."""
    pieces = [tuple(interval) for interval in intervals]
    for hole_start, hole_end in holes:
        remaining = []
        for start, end in pieces:
            if not overlaps(start, end, hole_start, hole_end):
                remaining.append((start, end))
                continue
            if start < hole_start:
                remaining.append((start, hole_start))
            if hole_end < end:
                remaining.append((hole_end, end))
        pieces = remaining
    return sorted(pieces)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
