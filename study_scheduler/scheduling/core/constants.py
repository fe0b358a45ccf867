"""
Lookup tables shared by the scheduling engine.

Every per-weekday table is indexed 0=Sunday .. 6=Saturday.
"""

WEEKDAY_NAMES = (
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
)

# Study efficiency multiplier per weekday (mid-week peak, weekend low)
DAY_BASE_EFFICIENCY = (0.6, 0.9, 0.95, 0.9, 0.85, 0.8, 0.7)

PRIORITY_RANK = {
    "urgent": 4,
    "high": 3,
    "medium": 2,
    "low": 1,
}
DEFAULT_PRIORITY_RANK = 2
PRIORITY_LEVELS = ("urgent", "high", "medium", "low")

# Block types and sources
PREFERRED = "preferred"
AVAILABLE = "available"
UNAVAILABLE = "unavailable"

SOURCE_USER = "user"
SOURCE_CLASS = "class"
SOURCE_EXCEPTION = "exception"
SOURCE_OVERRIDE = "override"

# Slot types
STUDY = "study"
BREAK = "break"

SLOT_INCREMENT_MINUTES = 15
UNAVAILABLE_STEP_MINUTES = 30
DAILY_CAPACITY_MINUTES = 8 * 60
PLANNING_HORIZON_DAYS = 7
HIGH_PRIORITY_RECOMMENDATIONS = 5
DEFAULT_TASK_DURATION = 60
MORNING_CUTOFF_MINUTES = 12 * 60


def day_base_efficiency(index: int) -> float:
    return DAY_BASE_EFFICIENCY[index]
