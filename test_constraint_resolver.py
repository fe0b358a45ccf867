"""
Tests for constraint resolution and the time helpers it relies on.
"""

from datetime import date

import pytest

from study_scheduler.schemas import AvailabilityExceptionSchema, ClassScheduleSchema, TimeBlockSchema
from study_scheduler.scheduling import ConstraintResolver
from study_scheduler.scheduling.core.exceptions import InvalidTimeError
from study_scheduler.scheduling.core.resolver import occurs_on
from study_scheduler.scheduling.utils.time_utils import (
    format_minutes,
    overlaps,
    round_half_up,
    subtract_intervals,
    to_minutes,
    weekday_index,
)

MONDAY = date(2025, 1, 6)


def block(block_id, day_of_week, start, end, block_type="unavailable", **extra):
    return TimeBlockSchema(id=block_id, day_of_week=day_of_week, start_time=start, end_time=end,
                           block_type=block_type, **extra)


def exception(exception_id, on, start, end, block_type="unavailable", reason=None):
    return AvailabilityExceptionSchema(id=exception_id, date=on, start_time=start, end_time=end,
                                       block_type=block_type, reason=reason)


class TestTimeHelpers:

    def test_to_minutes_and_back(self):
        assert to_minutes("09:30") == 570
        assert to_minutes("00:00") == 0
        assert format_minutes(570) == "09:30"
        assert format_minutes(1439) == "23:59"

    @pytest.mark.parametrize("value", ["9am", "25:00", "10:60", "", None])
    def test_to_minutes_rejects_bad_values(self, value):
        with pytest.raises(InvalidTimeError):
            to_minutes(value)

    def test_weekday_index_starts_on_sunday(self):
        assert weekday_index(date(2025, 1, 5)) == 0
        assert weekday_index(MONDAY) == 1
        assert weekday_index(date(2025, 1, 11)) == 6

    def test_overlap_is_half_open(self):
        assert overlaps(600, 630, 590, 610)
        assert not overlaps(600, 630, 540, 600)
        assert not overlaps(600, 630, 630, 660)

    def test_subtract_intervals_splits_around_holes(self):
        assert subtract_intervals([(540, 1020)], [(780, 900)]) == [(540, 780), (900, 1020)]
        assert subtract_intervals([(540, 600)], [(500, 700)]) == []

    def test_round_half_up(self):
        assert round_half_up(8.5) == 9
        assert round_half_up(2.5) == 3
        assert round_half_up(2.49) == 2


class TestRecurrenceBounds:

    def test_weekday_must_match(self):
        assert occurs_on(1, MONDAY)
        assert not occurs_on(2, MONDAY)

    def test_bounds_are_inclusive(self):
        assert occurs_on(1, MONDAY, start_date=MONDAY, end_date=MONDAY)
        assert not occurs_on(1, MONDAY, start_date=date(2025, 1, 7))
        assert not occurs_on(1, MONDAY, end_date=date(2025, 1, 5))

    def test_one_off_block_occurs_on_first_matching_weekday(self):
        # 2025-01-01 is a Wednesday, so the first Monday is 2025-01-06
        assert occurs_on(1, MONDAY, start_date=date(2025, 1, 1), is_recurring=False)
        assert not occurs_on(1, date(2025, 1, 13), start_date=date(2025, 1, 1), is_recurring=False)

    def test_one_off_block_without_start_date_repeats(self):
        assert occurs_on(1, date(2025, 1, 13), is_recurring=False)


class TestResolveDay:

    def test_collects_exceptions_and_weekly_blocks(self):
        resolver = ConstraintResolver(
            time_blocks=[
                block(1, 1, "13:00", "14:00"),
                block(2, 1, "10:00", "10:30", block_type="preferred"),
                block(3, 2, "10:00", "11:00"),
            ],
            exceptions=[
                exception(7, MONDAY, "16:00", "17:00", reason="dentist"),
                exception(8, date(2025, 1, 7), "09:00", "10:00"),
            ],
        )

        intervals = resolver.resolve_day(MONDAY)

        assert [(i.source, i.ref_id) for i in intervals] == [("exception", 7), ("user", 2), ("user", 1)]
        assert intervals[0].label == "dentist"
        assert intervals[0].to_dict()["start"] == "16:00"

    def test_overlapping_sources_are_not_merged(self):
        resolver = ConstraintResolver(
            time_blocks=[block(1, 1, "10:00", "11:00"), block(2, 1, "10:30", "11:30")],
            exceptions=[exception(3, MONDAY, "10:00", "12:00")],
        )
        assert len(resolver.resolve_day(MONDAY)) == 3

    def test_blocks_outside_their_date_range_are_ignored(self):
        resolver = ConstraintResolver(time_blocks=[
            block(1, 1, "10:00", "11:00", start_date=date(2025, 2, 1)),
            block(2, 1, "12:00", "13:00", end_date=date(2025, 1, 31)),
        ])
        assert [i.ref_id for i in resolver.resolve_day(MONDAY)] == [2]

    def test_class_without_mirrored_block_is_derived(self):
        entry = ClassScheduleSchema(id=5, course_code="CS101", day_of_week=1, start_time="11:00", end_time="12:15")
        resolver = ConstraintResolver(class_entries=[entry])

        intervals = resolver.resolve_day(MONDAY)

        assert len(intervals) == 1
        assert intervals[0].source == "class"
        assert intervals[0].block_type == "unavailable"
        assert intervals[0].label == "CS101"

    def test_mirrored_class_is_not_duplicated(self):
        entry = ClassScheduleSchema(id=5, course_code="CS101", day_of_week=1, start_time="11:00", end_time="12:15")
        mirror = block(9, 1, "11:00", "12:15", source="class", class_entry_id=5)
        resolver = ConstraintResolver(time_blocks=[mirror], class_entries=[entry])

        assert [i.ref_id for i in resolver.resolve_day(MONDAY)] == [9]


class TestEffectiveUnavailability:

    def test_available_exception_reopens_recurring_time(self):
        resolver = ConstraintResolver(
            time_blocks=[block(1, 1, "09:00", "17:00")],
            exceptions=[exception(2, MONDAY, "13:00", "15:00", block_type="available")],
        )

        blocked = resolver.unavailable_intervals(MONDAY)

        assert [(i.start, i.end) for i in blocked] == [(540, 780), (900, 1020)]

    def test_unavailable_exception_and_overrides_are_added(self):
        from study_scheduler.scheduling.core.time_slot import ResolvedInterval

        resolver = ConstraintResolver(exceptions=[exception(1, MONDAY, "09:00", "09:30")])
        override = ResolvedInterval(720, 780, "unavailable", "override")

        blocked = resolver.unavailable_intervals(MONDAY, [override])

        assert [(i.start, i.end, i.source) for i in blocked] == [(540, 570, "exception"), (720, 780, "override")]

    def test_available_blocks_are_not_unavailable(self):
        resolver = ConstraintResolver(time_blocks=[block(1, 1, "09:00", "10:00", block_type="available")])
        assert resolver.unavailable_intervals(MONDAY) == []
