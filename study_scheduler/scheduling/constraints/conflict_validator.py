"""
Conflict checking for caller-proposed schedules.
"""

import logging
from collections import OrderedDict
from typing import Iterable, List

from ..core.constants import DAILY_CAPACITY_MINUTES, SOURCE_CLASS, UNAVAILABLE
from ..core.exceptions import InvalidTimeError
from ..core.resolver import ConstraintResolver
from ..utils.time_utils import is_aligned, overlaps, round_half_up, to_date, to_minutes
from ..utils.fields import get_field

logger = logging.getLogger(__name__)

NOT_ALIGNED = "not aligned to 15-minute increments"
START_AFTER_END = "start must be before end"
INVALID_TIME = "invalid time format"
INVALID_DATE = "invalid date format"
OVERCOMMIT_SUGGESTIONS = (
    "reduce daily load below 8 hours",
    "spread tasks across multiple days",
)


def _item_payload(item) -> dict:
    if isinstance(item, dict):
        return dict(item)
    return item.model_dump(mode="json")


def _check_item(item, resolver: ConstraintResolver, class_ids: set) -> List[str]:
    """Return the conflict reasons for one candidate item."""
    try:
        start = to_minutes(get_field(item, "start"))
        end = to_minutes(get_field(item, "end"))
    except InvalidTimeError:
        return [INVALID_TIME]

    if not is_aligned(start) or not is_aligned(end):
        return [NOT_ALIGNED]
    if start >= end:
        return [START_AFTER_END]

    try:
        day = to_date(get_field(item, "date"))
    except (TypeError, ValueError):
        return [INVALID_DATE]

    reasons = []

    # Weekly unavailable blocks; class mirrors are covered by the class check
    for block in resolver.blocks_for(day):
        if block.block_type != UNAVAILABLE:
            continue
        if getattr(block, "source", None) == SOURCE_CLASS and getattr(block, "class_entry_id", None) in class_ids:
            continue
        if overlaps(to_minutes(block.start_time), to_minutes(block.end_time), start, end):
            reasons.append("Overlaps with unavailable time block")

    # Classes are implicitly unavailable
    for entry in resolver.classes_for(day):
        if overlaps(to_minutes(entry.start_time), to_minutes(entry.end_time), start, end):
            reasons.append(f"Overlaps with class {entry.course_code}")

    for exception in resolver.exceptions_for(day):
        if exception.block_type != UNAVAILABLE:
            continue
        if overlaps(to_minutes(exception.start_time), to_minutes(exception.end_time), start, end):
            reasons.append("Overlaps with unavailable exception")

    return reasons


def _daily_minutes(candidates: list) -> "OrderedDict[str, int]":
    totals = OrderedDict()
    for item in candidates:
        try:
            minutes = to_minutes(get_field(item, "end")) - to_minutes(get_field(item, "start"))
        except InvalidTimeError:
            continue
        raw_date = get_field(item, "date")
        key = raw_date.isoformat() if hasattr(raw_date, "isoformat") else str(raw_date)
        totals[key] = totals.get(key, 0) + max(minutes, 0)
    return totals


def validate_schedule(candidates: Iterable, resolver: ConstraintResolver) -> dict:
    """
    Check a candidate schedule against the stored constraints.

    Malformed items are reported as conflicts, never raised. Each overlapping
    constraint source adds its own conflict entry. Days scheduled above eight
    hours produce warnings plus a fixed list of suggestions.
    Pure: the same inputs always give the same result.
    """
    candidates = list(candidates)
    class_ids = {entry.id for entry in resolver.class_entries}

    conflicts = []
    for item in candidates:
        for reason in _check_item(item, resolver, class_ids):
            conflicts.append({"item": _item_payload(item), "reason": reason})

    warnings = [
        {"date": day, "reason": f"Overcommitted: {round_half_up(minutes / 60)}h scheduled"}
        for day, minutes in _daily_minutes(candidates).items()
        if minutes > DAILY_CAPACITY_MINUTES
    ]

    logger.debug(f"Validated {len(candidates)} candidate item(s): {len(conflicts)} conflict(s), {len(warnings)} warning(s)")
    return {
        "success": True,
        "conflicts": conflicts,
        "warnings": warnings,
        "suggestions": list(OVERCOMMIT_SUGGESTIONS) if warnings else [],
    }
