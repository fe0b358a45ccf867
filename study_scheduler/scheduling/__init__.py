"""
Study Scheduler engine

Availability resolution, schedule validation, slot generation and task
assignment. Pure functions over in-memory snapshots; no I/O.
"""

from .core.resolver import ConstraintResolver
from .core.time_slot import TimeSlot, ResolvedInterval
from .core.exceptions import SchedulingError
from .constraints.conflict_validator import validate_schedule
from .algorithms.slot_generator import SlotGenerator, generate_time_slots
from .algorithms.assigner import create_optimal_schedule

__version__ = "1.0.0"
