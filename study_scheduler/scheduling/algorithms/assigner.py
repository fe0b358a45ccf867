"""
Greedy assignment of the prioritized task queue onto generated study slots.
"""

import logging
from datetime import date, datetime
from typing import Optional

from ..core.constants import DEFAULT_TASK_DURATION, STUDY
from ..core.exceptions import SchedulingError
from ..core.resolver import ConstraintResolver
from ..scoring.priority_scoring import sort_tasks_by_priority
from ..scoring.workload_scoring import generate_weekly_summary
from ..utils.fields import get_field
from .slot_generator import generate_time_slots

logger = logging.getLogger(__name__)

FALLBACK_TASK_COUNT = 4
FALLBACK_EFFICIENCY = 75


def _estimated_duration(task) -> int:
    return get_field(task, "estimated_duration") or DEFAULT_TASK_DURATION


def assign_tasks(sorted_tasks: list, day_plans: list) -> dict:
    """
    Walk days and slots in order; every open study slot takes the next task.

    Task durations are not compared to slot durations. Tasks left over once
    the slots run out are not scheduled.
    """
    daily = {}
    queue = iter(sorted_tasks)
    next_task = next(queue, None)

    for day_plan in day_plans:
        day_schedule = {"day": day_plan["day"], "tasks": [], "studySessions": []}
        daily[day_plan["date"]] = day_schedule

        for slot in day_plan["slots"]:
            if next_task is None:
                break
            if slot["type"] != STUDY or not slot["available"]:
                continue

            day_schedule["tasks"].append({
                "task": next_task,
                "timeSlot": slot,
                "estimatedDuration": _estimated_duration(next_task),
            })
            day_schedule["studySessions"].append({
                "startTime": slot["start_time"],
                "endTime": slot["end_time"],
                "duration": slot["duration"],
                "taskId": get_field(next_task, "id"),
                "taskTitle": get_field(next_task, "title"),
            })
            next_task = next(queue, None)

    return daily


def fallback_schedule(tasks, today: Optional[date] = None) -> dict:
    """Single-day placeholder plan: the top four tasks on a 09:00-10:00 slot."""
    today = today or date.today()
    top_tasks = sort_tasks_by_priority(tasks)[:FALLBACK_TASK_COUNT]
    return {
        "daily": {
            today.isoformat(): {
                "day": "today",
                "tasks": [
                    {
                        "task": task,
                        "timeSlot": {"start_time": "09:00", "end_time": "10:00", "duration": 60},
                        "estimatedDuration": _estimated_duration(task),
                    }
                    for task in top_tasks
                ],
                "studySessions": [],
            }
        },
        "weekly": {
            "totalTasks": len(top_tasks),
            "totalStudyTime": FALLBACK_TASK_COUNT * 60,
            "efficiency": FALLBACK_EFFICIENCY,
        },
        "recommendations": {
            "highPriorityTasks": [],
            "optimalStudyTimes": ["09:00-10:00"],
            "workloadDistribution": {},
            "studyTips": ["Manual scheduling used: review the plan and adjust it by hand"],
        },
    }


def create_optimal_schedule(tasks, preferences, constraints: Optional[dict] = None,
                            resolver: Optional[ConstraintResolver] = None, start_date: Optional[date] = None,
                            now: Optional[datetime] = None) -> dict:
    """
    Build the weekly study plan for a task list.

    Never raises: when slot generation fails the fixed fallback schedule is
    returned with success=False.
    """
    tasks = list(tasks or [])
    constraints = constraints or {}
    start_date = start_date or date.today()

    try:
        sorted_tasks = sort_tasks_by_priority(tasks)
        result = generate_time_slots(
            tasks, preferences,
            availability_override=constraints.get("unavailableTime"),
            resolver=resolver, start_date=start_date, now=now,
        )
        if not result["success"]:
            raise SchedulingError("Failed to generate time slots")

        daily = assign_tasks(sorted_tasks, result["timeSlots"])
        schedule = {
            "daily": daily,
            "weekly": generate_weekly_summary(daily),
            "recommendations": result["recommendations"],
        }
    except Exception as e:
        logger.error(f"❌ Error creating optimal schedule: {e}")
        return {
            "success": False,
            "error": "Failed to create optimal schedule",
            "schedule": fallback_schedule(tasks, start_date),
        }

    assigned = schedule["weekly"]["totalTasks"]
    if assigned < len(sorted_tasks):
        logger.info(f"{len(sorted_tasks) - assigned} task(s) did not fit into this week's study slots")
    return {"success": True, "schedule": schedule}
