"""
Workload and efficiency figures for generated plans.
"""

from typing import Dict, List

from ..core.constants import (
    DAILY_CAPACITY_MINUTES,
    DEFAULT_TASK_DURATION,
    PRIORITY_LEVELS,
    WEEKDAY_NAMES,
    day_base_efficiency,
)
from ..utils.fields import get_field
from ..utils.time_utils import round_half_up


def calculate_day_efficiency(study_minutes: int, weekday: int) -> int:
    """Percentage: weekday base efficiency scaled by how full the day is (8h cap)."""
    time_efficiency = min(study_minutes / DAILY_CAPACITY_MINUTES, 1)
    return round_half_up(day_base_efficiency(weekday) * time_efficiency * 100)


def calculate_workload_distribution(day_plans: List[dict]) -> Dict[str, dict]:
    """Per-day slot count, study minutes and efficiency, keyed by weekday name."""
    distribution = {}
    for day_plan in day_plans:
        study_slots = [slot for slot in day_plan["slots"] if slot["type"] == "study" and slot["available"]]
        total_study_time = sum(slot["duration"] for slot in study_slots)
        distribution[day_plan["day"]] = {
            "availableSlots": len(study_slots),
            "totalStudyTime": total_study_time,
            "efficiency": calculate_day_efficiency(total_study_time, WEEKDAY_NAMES.index(day_plan["day"])),
        }
    return distribution


def generate_weekly_summary(daily: Dict[str, dict]) -> dict:
    summary = {
        "totalTasks": 0,
        "totalStudyTime": 0,
        "tasksByPriority": {level: 0 for level in PRIORITY_LEVELS},
        "tasksByType": {},
        "efficiency": 0,
    }

    for day in daily.values():
        summary["totalTasks"] += len(day["tasks"])
        for assignment in day["tasks"]:
            task = assignment["task"]
            summary["totalStudyTime"] += assignment["estimatedDuration"] or DEFAULT_TASK_DURATION

            priority = get_field(task, "priority") or "medium"
            summary["tasksByPriority"][priority] = summary["tasksByPriority"].get(priority, 0) + 1

            task_type = get_field(task, "task_type") or "other"
            summary["tasksByType"][task_type] = summary["tasksByType"].get(task_type, 0) + 1

    hours = max(summary["totalStudyTime"] / 60, 1)
    summary["efficiency"] = round_half_up(summary["totalTasks"] / hours * 100)
    return summary
