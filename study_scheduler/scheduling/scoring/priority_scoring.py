"""
Priority ordering for the task queue.
"""

from datetime import datetime
from typing import List

from ..core.constants import DEFAULT_PRIORITY_RANK, PRIORITY_RANK
from ..utils.fields import get_field
from ..utils.time_utils import normalize_deadline


def priority_rank(task) -> int:
    return PRIORITY_RANK.get(get_field(task, "priority"), DEFAULT_PRIORITY_RANK)


def _sort_key(task):
    deadline = normalize_deadline(get_field(task, "deadline"))
    # Undated tasks go after dated ones of the same priority
    return (-priority_rank(task), deadline is None, deadline or datetime.max)


def sort_tasks_by_priority(tasks) -> List:
    """
    Sort by priority (urgent > high > medium > low), then by earliest deadline.
    The deadline only breaks ties between equal priorities.
    """
    return sorted(tasks, key=_sort_key)
