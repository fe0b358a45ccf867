"""
Constraint resolution: which availability intervals apply on a calendar date.
"""

import logging
from datetime import date, datetime, time
from typing import Iterable, List, Optional

from dateutil import rrule

from .constants import SOURCE_CLASS, SOURCE_EXCEPTION, SOURCE_USER, UNAVAILABLE
from .time_slot import ResolvedInterval
from ..utils.time_utils import subtract_intervals, to_date, to_minutes, weekday_index

logger = logging.getLogger(__name__)

# dateutil weekdays in 0=Sunday order
RRULE_WEEKDAYS = (rrule.SU, rrule.MO, rrule.TU, rrule.WE, rrule.TH, rrule.FR, rrule.SA)


def occurs_on(day_of_week: int, on_date: date, start_date=None, end_date=None, is_recurring: bool = True) -> bool:
    """
    Check whether a weekly entry falls on a date, honoring its recurrence bounds.

    A non-recurring entry with a start_date happens once: on the first matching
    weekday on or after start_date. Without a start_date it repeats weekly.
    """
    if weekday_index(on_date) != day_of_week:
        return False

    start = to_date(start_date) if start_date else None
    end = to_date(end_date) if end_date else None
    if start and on_date < start:
        return False
    if end and on_date > end:
        return False
    if is_recurring or start is None:
        return True

    rule = rrule.rrule(
        rrule.WEEKLY,
        byweekday=RRULE_WEEKDAYS[day_of_week],
        dtstart=datetime.combine(start, time.min),
        count=1,
    )
    return datetime.combine(on_date, time.min) in rule


class ConstraintResolver:
    """
    Merges recurring time blocks, date exceptions and class entries for a date.

    No merging or de-duplication happens in resolve_day: overlapping intervals
    from different sources are each returned so callers can report them one by one.
    """
    def __init__(self, time_blocks: Iterable = (), exceptions: Iterable = (), class_entries: Iterable = ()):
        self.time_blocks = list(time_blocks)
        self.exceptions = list(exceptions)
        self.class_entries = list(class_entries)

        mirrored = {
            getattr(block, "class_entry_id", None)
            for block in self.time_blocks
            if getattr(block, "source", SOURCE_USER) == SOURCE_CLASS
        }
        # Classes whose mirrored block is missing from the snapshot
        self._unmirrored_classes = [entry for entry in self.class_entries if entry.id not in mirrored]

    def blocks_for(self, day: date) -> list:
        return [
            block for block in self.time_blocks
            if occurs_on(
                block.day_of_week, day,
                getattr(block, "start_date", None),
                getattr(block, "end_date", None),
                getattr(block, "is_recurring", True),
            )
        ]

    def exceptions_for(self, day: date) -> list:
        return [exception for exception in self.exceptions if to_date(exception.date) == day]

    def classes_for(self, day: date) -> list:
        return [
            entry for entry in self.class_entries
            if occurs_on(
                entry.day_of_week, day,
                getattr(entry, "recurring_start", None),
                getattr(entry, "recurring_end", None),
            )
        ]

    def resolve_day(self, day: date) -> List[ResolvedInterval]:
        """All intervals for the date: exceptions first, then weekly blocks by start time."""
        day = to_date(day)
        intervals = []

        for exception in self.exceptions_for(day):
            intervals.append(ResolvedInterval(
                to_minutes(exception.start_time),
                to_minutes(exception.end_time),
                exception.block_type,
                SOURCE_EXCEPTION,
                ref_id=exception.id,
                label=getattr(exception, "reason", None),
            ))

        weekly = []
        for block in self.blocks_for(day):
            weekly.append(ResolvedInterval(
                to_minutes(block.start_time),
                to_minutes(block.end_time),
                block.block_type,
                getattr(block, "source", SOURCE_USER),
                ref_id=block.id,
            ))

        unmirrored_ids = {entry.id for entry in self._unmirrored_classes}
        for entry in self.classes_for(day):
            if entry.id not in unmirrored_ids:
                continue
            weekly.append(ResolvedInterval(
                to_minutes(entry.start_time),
                to_minutes(entry.end_time),
                UNAVAILABLE,
                SOURCE_CLASS,
                ref_id=entry.id,
                label=entry.course_code,
            ))

        intervals.extend(sorted(weekly))
        return intervals

    def unavailable_intervals(self, day: date, overrides: Optional[Iterable[ResolvedInterval]] = None) -> List[ResolvedInterval]:
        """
        Effective unavailable time for a date.

        Date exceptions take precedence over weekly blocks: an available or
        preferred exception reopens any recurring unavailable time it covers.
        Caller overrides are always unavailable.
        """
        intervals = self.resolve_day(day)
        openings = [
            (interval.start, interval.end) for interval in intervals
            if interval.source == SOURCE_EXCEPTION and not interval.is_unavailable
        ]

        effective = []
        for interval in intervals:
            if not interval.is_unavailable:
                continue
            if interval.source == SOURCE_EXCEPTION:
                effective.append(interval)
                continue
            for start, end in subtract_intervals([(interval.start, interval.end)], openings):
                effective.append(ResolvedInterval(
                    start, end, interval.block_type, interval.source,
                    ref_id=interval.ref_id, label=interval.label,
                ))

        effective.extend(overrides or [])
        if openings:
            logger.debug(f"{day}: {len(openings)} exception(s) reopened recurring time")
        return sorted(effective)
