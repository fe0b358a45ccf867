"""Class schedule API. Every write re-derives the class's unavailable time blocks."""

from typing import List

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_current_user_id
from ..models import ClassScheduleEntry
from ..schemas import ClassScheduleCreate, ClassScheduleSchema, ClassScheduleUpdate
from ..services.class_sync import remove_class_blocks, sync_class_blocks
from ..services.scheduling_service import scheduling_service
from .validation import reject_nulls, validate_day_of_week, validate_time_range

router = APIRouter(tags=["class-schedule"])

REQUIRED_CLASS_FIELDS = ("course_code", "day_of_week", "start_time", "end_time")


def _get_user_entry(db: Session, entry_id: int, user_id: int) -> ClassScheduleEntry:
    entry = db.query(ClassScheduleEntry).filter(
        ClassScheduleEntry.id == entry_id,
        ClassScheduleEntry.user_id == user_id,
    ).first()
    if not entry:
        raise HTTPException(status_code=404, detail="Class schedule not found")
    return entry


@router.get("/", response_model=List[ClassScheduleSchema])
def list_class_schedule(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return db.query(ClassScheduleEntry).filter(ClassScheduleEntry.user_id == user_id).order_by(
        ClassScheduleEntry.day_of_week, ClassScheduleEntry.start_time
    ).all()


@router.post("/", response_model=ClassScheduleSchema, status_code=201)
def create_class_entry(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    entry_in: ClassScheduleCreate = Body(...),
):
    if not entry_in.course_code:
        raise HTTPException(status_code=400, detail="course_code is required")
    validate_day_of_week(entry_in.day_of_week)
    validate_time_range(entry_in.start_time, entry_in.end_time)

    entry = ClassScheduleEntry(user_id=user_id, **entry_in.model_dump())
    db.add(entry)
    db.flush()  # assigns entry.id for the mirrored block
    sync_class_blocks(db, entry)
    db.commit()
    db.refresh(entry)
    scheduling_service.invalidate(user_id)
    return entry


@router.put("/{entry_id}", response_model=ClassScheduleSchema)
def update_class_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    updates: ClassScheduleUpdate = Body(...),
):
    entry = _get_user_entry(db, entry_id, user_id)
    changes = updates.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")
    reject_nulls(changes, REQUIRED_CLASS_FIELDS)

    validate_day_of_week(changes.get("day_of_week"))
    validate_time_range(changes.get("start_time", entry.start_time), changes.get("end_time", entry.end_time))

    for field, value in changes.items():
        setattr(entry, field, value)
    sync_class_blocks(db, entry)
    db.commit()
    db.refresh(entry)
    scheduling_service.invalidate(user_id)
    return entry


@router.delete("/{entry_id}")
def delete_class_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    entry = _get_user_entry(db, entry_id, user_id)
    remove_class_blocks(db, entry.id)
    db.delete(entry)
    db.commit()
    scheduling_service.invalidate(user_id)
    return {"message": "Class schedule deleted"}
