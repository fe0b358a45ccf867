"""
Study/break slot generation over a 7-day window.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional

from ..core.constants import (
    BREAK,
    HIGH_PRIORITY_RECOMMENDATIONS,
    MORNING_CUTOFF_MINUTES,
    PLANNING_HORIZON_DAYS,
    SOURCE_OVERRIDE,
    STUDY,
    UNAVAILABLE,
    UNAVAILABLE_STEP_MINUTES,
)
from ..core.exceptions import SchedulingError
from ..core.resolver import ConstraintResolver
from ..core.time_slot import ResolvedInterval, TimeSlot
from ..scoring.priority_scoring import sort_tasks_by_priority
from ..scoring.study_tips import generate_study_tips
from ..scoring.workload_scoring import calculate_workload_distribution
from ..utils.fields import get_field
from ..utils.time_utils import overlaps, to_minutes, weekday_name_for

logger = logging.getLogger(__name__)


def _first_blocker(blocked: List[ResolvedInterval], start: int, end: int) -> Optional[ResolvedInterval]:
    for interval in blocked:
        if overlaps(interval.start, interval.end, start, end):
            return interval
    return None


def _is_blocked(blocked: List[ResolvedInterval], minute: int) -> bool:
    return any(interval.contains(minute) for interval in blocked)


class SlotGenerator:
    """
    Walks each preferred day from work_hours.start to work_hours.end and lays
    down study blocks (each followed by a break when it fits) around the
    unavailable time reported by the constraint resolver.
    """
    def __init__(self, preferences, resolver: Optional[ConstraintResolver] = None,
                 overrides: Optional[Dict[str, Iterable]] = None):
        work_hours = get_field(preferences, "work_hours")
        if not work_hours:
            raise SchedulingError("Preferences are missing work_hours")

        self.work_start = to_minutes(get_field(work_hours, "start"))
        self.work_end = to_minutes(get_field(work_hours, "end"))
        if self.work_start >= self.work_end:
            raise SchedulingError("work_hours.start must be before work_hours.end")

        study_blocks = get_field(preferences, "study_blocks")
        if not study_blocks:
            raise SchedulingError("Preferences are missing study_blocks")
        self.study_blocks = [int(duration) for duration in study_blocks]
        if any(duration <= 0 for duration in self.study_blocks):
            raise SchedulingError(f"Study block durations must be positive: {self.study_blocks}")

        self.break_duration = int(get_field(preferences, "break_duration") or 0)
        if self.break_duration < 0:
            raise SchedulingError("break_duration cannot be negative")

        preferred_days = get_field(preferences, "preferred_days")
        if preferred_days is None:
            raise SchedulingError("Preferences are missing preferred_days")
        self.preferred_days = {day.lower() for day in preferred_days}

        self.resolver = resolver or ConstraintResolver()
        self.overrides = overrides or {}

    def _override_intervals(self, day: date) -> List[ResolvedInterval]:
        """Caller-supplied unavailable time, keyed by weekday name or ISO date."""
        entries = list(self.overrides.get(weekday_name_for(day), []))
        entries.extend(self.overrides.get(day.isoformat(), []))
        return [
            ResolvedInterval(to_minutes(get_field(entry, "start")), to_minutes(get_field(entry, "end")),
                             UNAVAILABLE, SOURCE_OVERRIDE)
            for entry in entries
        ]

    def generate_day(self, day: date) -> List[TimeSlot]:
        blocked = self.resolver.unavailable_intervals(day, self._override_intervals(day))
        slots = []
        cursor = self.work_start

        while cursor < self.work_end:
            if _is_blocked(blocked, cursor):
                cursor += UNAVAILABLE_STEP_MINUTES
                continue

            day_finished = False
            for duration in self.study_blocks:
                if _is_blocked(blocked, cursor):
                    break

                study_end = cursor + duration
                if study_end > self.work_end:
                    # Nothing later can be tried from a cursor that cannot move
                    day_finished = True
                    break

                blocker = _first_blocker(blocked, cursor, study_end)
                if blocker:
                    logger.debug(f"{day}: study block at {cursor} straddles {blocker}, resuming at {blocker.end}")
                    cursor = blocker.end
                    break

                slots.append(TimeSlot(cursor, study_end, STUDY, True))
                cursor = study_end

                if self.break_duration > 0:
                    break_end = study_end + self.break_duration
                    if break_end < self.work_end and not _first_blocker(blocked, study_end, break_end):
                        slots.append(TimeSlot(study_end, break_end, BREAK, False))
                        cursor = break_end

            if day_finished:
                break

        return slots

    def generate_week(self, start_date: date) -> List[dict]:
        day_plans = []
        for offset in range(PLANNING_HORIZON_DAYS):
            day = start_date + timedelta(days=offset)
            day_name = weekday_name_for(day)
            if day_name not in self.preferred_days:
                logger.debug(f"Skipping {day} ({day_name}): not a preferred study day")
                continue

            day_plans.append({
                "date": day.isoformat(),
                "day": day_name,
                "slots": [slot.to_dict() for slot in self.generate_day(day)],
            })
        return day_plans


def _morning_windows(day_plans: List[dict], limit: int = 5) -> List[str]:
    windows = []
    for day_plan in day_plans:
        for slot in day_plan["slots"]:
            if slot["type"] != STUDY or not slot["available"]:
                continue
            if to_minutes(slot["start_time"]) >= MORNING_CUTOFF_MINUTES:
                continue
            window = f"{slot['start_time']}-{slot['end_time']}"
            if window not in windows:
                windows.append(window)
    return windows[:limit]


def generate_scheduling_recommendations(tasks, day_plans: List[dict], now: Optional[datetime] = None) -> dict:
    sorted_tasks = sort_tasks_by_priority(tasks)
    open_slots = [
        (day_plan["date"], slot)
        for day_plan in day_plans
        for slot in day_plan["slots"]
        if slot["type"] == STUDY and slot["available"]
    ]

    high_priority = []
    for task, (slot_date, slot) in zip(sorted_tasks[:HIGH_PRIORITY_RECOMMENDATIONS], open_slots):
        high_priority.append({
            "task": get_field(task, "title"),
            "date": slot_date,
            "recommendedSlot": slot,
            "reasoning": "High priority task scheduled during optimal study time",
        })

    return {
        "highPriorityTasks": high_priority,
        "optimalStudyTimes": _morning_windows(day_plans),
        "workloadDistribution": calculate_workload_distribution(day_plans),
        "studyTips": generate_study_tips(tasks, day_plans, now),
    }


def fallback_time_slots(today: Optional[date] = None) -> dict:
    """Fixed single-day plan used when slot generation fails."""
    today = today or date.today()
    return {
        "success": False,
        "timeSlots": [
            {
                "date": today.isoformat(),
                "day": "today",
                "slots": [
                    TimeSlot(9 * 60, 10 * 60).to_dict(),
                    TimeSlot(10 * 60 + 15, 11 * 60 + 15).to_dict(),
                    TimeSlot(14 * 60, 15 * 60).to_dict(),
                    TimeSlot(15 * 60 + 15, 16 * 60 + 15).to_dict(),
                ],
            }
        ],
        "recommendations": {
            "highPriorityTasks": [],
            "optimalStudyTimes": ["09:00-10:00", "14:00-15:00"],
            "workloadDistribution": {"today": {"availableSlots": 4, "totalStudyTime": 240, "efficiency": 80}},
            "studyTips": [
                "Use morning hours for difficult subjects",
                "Take regular breaks to maintain focus",
            ],
        },
    }


def generate_time_slots(tasks, preferences, availability_override: Optional[Dict[str, Iterable]] = None,
                        resolver: Optional[ConstraintResolver] = None, start_date: Optional[date] = None,
                        now: Optional[datetime] = None) -> dict:
    """
    Build the 7-day slot plan (today inclusive) plus recommendations.

    Never raises: any failure returns success=False with a fixed fallback plan.
    """
    start_date = start_date or date.today()
    tasks = list(tasks or [])
    try:
        generator = SlotGenerator(preferences, resolver, availability_override)
        day_plans = generator.generate_week(start_date)
        recommendations = generate_scheduling_recommendations(tasks, day_plans, now)
    except Exception as e:
        logger.error(f"❌ Error generating time slots: {e}")
        return {
            "success": False,
            "error": "Failed to generate time slots",
            "fallback": fallback_time_slots(start_date),
        }

    total_slots = sum(len(day_plan["slots"]) for day_plan in day_plans)
    logger.info(f"Generated {total_slots} slots across {len(day_plans)} day(s) starting {start_date}")
    return {
        "success": True,
        "timeSlots": day_plans,
        "recommendations": recommendations,
    }
