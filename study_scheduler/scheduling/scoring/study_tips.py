"""
Rule-based study tips derived from the task list and generated slots.
"""

import math
from datetime import datetime
from typing import List, Optional

from ..core.constants import MORNING_CUTOFF_MINUTES
from ..utils.fields import get_field
from ..utils.time_utils import normalize_deadline, to_minutes

HEAVY_LOAD_MINUTES = 300
LIGHT_LOAD_MINUTES = 120
DEADLINE_WINDOW_DAYS = 3

TASK_TYPE_TIPS = {
    "exam": [
        "Schedule exam preparation during your most productive hours (usually morning)",
        "Use active recall: test yourself instead of re-reading",
        "Write a summary sheet per subject to review before the exam",
    ],
    "assignment": [
        "Break large assignments into smaller, manageable chunks",
        "Start with the hardest parts while your energy is highest",
        "Set mini-deadlines for each section to stay on track",
    ],
    "project": [
        "Allocate longer study blocks (2-3 hours) for complex projects",
        "Plan regular progress reviews to catch issues early",
        "Keep a project timeline with clear milestones",
    ],
}

GENERAL_TIPS = [
    "Put your phone in another room while studying",
    "Take a 10-minute walk between study sessions",
    "Stay hydrated and keep healthy snacks nearby",
]


def _open_study_slots(day_plans: List[dict]) -> List[dict]:
    return [
        slot
        for day_plan in day_plans
        for slot in day_plan["slots"]
        if slot["type"] == "study" and slot["available"]
    ]


def count_upcoming_deadlines(tasks, now: datetime, window_days: int = DEADLINE_WINDOW_DAYS) -> int:
    count = 0
    for task in tasks:
        deadline = normalize_deadline(get_field(task, "deadline"))
        if deadline is None:
            continue
        days_until = math.ceil((deadline - now).total_seconds() / 86400)
        if 0 <= days_until <= window_days:
            count += 1
    return count


def generate_study_tips(tasks, day_plans: List[dict], now: Optional[datetime] = None) -> List[str]:
    now = now or datetime.now()
    tips = []

    type_counts = {}
    for task in tasks:
        task_type = get_field(task, "task_type")
        type_counts[task_type] = type_counts.get(task_type, 0) + 1

    for task_type in ("exam", "assignment", "project"):
        if type_counts.get(task_type):
            tips.extend(TASK_TYPE_TIPS[task_type])

    pressing = [task for task in tasks if get_field(task, "priority") in ("urgent", "high")]
    if len(pressing) > 2:
        tips.append("You have several urgent tasks: prioritize by deadline and impact")
        tips.append("Consider asking for extensions on lower-priority items")

    upcoming = count_upcoming_deadlines(tasks, now)
    if upcoming:
        tips.append(f"{upcoming} deadline(s) approaching: focus on these first")
        tips.append("Use the Pomodoro technique (25 min work, 5 min break) for intense focus")

    study_slots = _open_study_slots(day_plans)
    if any(to_minutes(slot["start_time"]) < MORNING_CUTOFF_MINUTES for slot in study_slots):
        tips.append("Use morning slots for difficult subjects while your mind is fresh")

    total_minutes = sum(slot["duration"] for slot in study_slots)
    if total_minutes > HEAVY_LOAD_MINUTES:
        tips.append("Consider reducing daily study time to keep focus and avoid burnout")
        tips.append("Take longer breaks (15-30 min) between intensive sessions")
    elif total_minutes < LIGHT_LOAD_MINUTES:
        tips.append("Your study load is light: use it to get ahead on upcoming work")

    tips.extend(GENERAL_TIPS)
    return tips
