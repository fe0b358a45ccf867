"""
Class schedule -> unavailable time block derivation.

This module is the only writer of time blocks with source="class". Every
create/update/delete of a class entry goes through sync_class_blocks or
remove_class_blocks so the mirrored blocks always match their entry.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from ..models import ClassScheduleEntry, TimeBlock

logger = logging.getLogger(__name__)


def derive_blocks_from_classes(entry: ClassScheduleEntry) -> List[dict]:
    """Field values of the unavailable block(s) a class entry implies."""
    return [{
        "user_id": entry.user_id,
        "day_of_week": entry.day_of_week,
        "start_time": entry.start_time,
        "end_time": entry.end_time,
        "block_type": "unavailable",
        "is_recurring": True,
        "source": "class",
        "start_date": entry.recurring_start,
        "end_date": entry.recurring_end,
        "class_entry_id": entry.id,
    }]


def sync_class_blocks(db: Session, entry: ClassScheduleEntry) -> List[TimeBlock]:
    """Rewrite the mirrored blocks of a class entry. The caller commits."""
    remove_class_blocks(db, entry.id)
    blocks = [TimeBlock(**fields) for fields in derive_blocks_from_classes(entry)]
    db.add_all(blocks)
    logger.info(f"Mirrored class {entry.course_code} (entry {entry.id}) into {len(blocks)} unavailable block(s)")
    return blocks


def remove_class_blocks(db: Session, entry_id: int) -> int:
    removed = db.query(TimeBlock).filter(
        TimeBlock.class_entry_id == entry_id,
        TimeBlock.source == "class",
    ).delete(synchronize_session="fetch")
    if removed:
        logger.debug(f"Removed {removed} mirrored block(s) for class entry {entry_id}")
    return removed
