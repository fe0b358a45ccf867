"""
Time slot and interval representations for the scheduling engine.
"""

from typing import Optional
from .constants import BREAK, STUDY, UNAVAILABLE
from ..utils.time_utils import format_minutes


class TimeSlot:
    """
    A generated slot on one day. Each slot is exactly one thing:
    - A study slot (type=study, available=True until a task takes it)
    - A break (type=break, never available for tasks)
    """
    def __init__(self, start: int, end: int, slot_type: str = STUDY, available: Optional[bool] = None):
        self.start = start
        self.end = end
        self.slot_type = slot_type
        self.available = (slot_type == STUDY) if available is None else available

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def start_time(self) -> str:
        return format_minutes(self.start)

    @property
    def end_time(self) -> str:
        return format_minutes(self.end)

    def to_dict(self) -> dict:
        return {
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duration": self.duration,
            "type": self.slot_type,
            "available": self.available,
        }

    def __lt__(self, other):
        return self.start < other.start

    def __eq__(self, other):
        if not isinstance(other, TimeSlot):
            return NotImplemented
        return (self.start, self.end, self.slot_type, self.available) == (
            other.start, other.end, other.slot_type, other.available
        )

    def __repr__(self):
        if self.slot_type == BREAK:
            return f"BreakSlot({self.start_time} - {self.end_time})"
        return f"StudySlot({self.start_time} - {self.end_time}, available={self.available})"


class ResolvedInterval:
    """One constraint interval that applies to a specific date."""
    def __init__(self, start: int, end: int, block_type: str, source: str,
                 ref_id: Optional[int] = None, label: Optional[str] = None):
        self.start = start
        self.end = end
        self.block_type = block_type
        self.source = source
        self.ref_id = ref_id
        self.label = label

    @property
    def is_unavailable(self) -> bool:
        return self.block_type == UNAVAILABLE

    def contains(self, minute: int) -> bool:
        return self.start <= minute < self.end

    def to_dict(self) -> dict:
        return {
            "start": format_minutes(self.start),
            "end": format_minutes(self.end),
            "block_type": self.block_type,
            "source": self.source,
            "ref_id": self.ref_id,
            "label": self.label,
        }

    def __lt__(self, other):
        return (self.start, self.end) < (other.start, other.end)

    def __repr__(self):
        return (f"ResolvedInterval({format_minutes(self.start)} - {format_minutes(self.end)}, "
                f"{self.block_type}, source={self.source})")
