"""Availability API: weekly time blocks and date-specific exceptions."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_current_user_id
from ..models import AvailabilityException, TimeBlock
from ..schemas import (
    AvailabilityExceptionCreate,
    AvailabilityExceptionSchema,
    TimeBlockCreate,
    TimeBlockSchema,
    TimeBlockUpdate,
)
from ..services.scheduling_service import scheduling_service
from .validation import reject_nulls, validate_day_of_week, validate_time_range

router = APIRouter(tags=["availability"])

REQUIRED_BLOCK_FIELDS = ("day_of_week", "start_time", "end_time", "block_type", "is_recurring")


def _get_user_block(db: Session, block_id: int, user_id: int) -> TimeBlock:
    block = db.query(TimeBlock).filter(TimeBlock.id == block_id, TimeBlock.user_id == user_id).first()
    if not block:
        raise HTTPException(status_code=404, detail="Time block not found")
    if block.source == "class":
        raise HTTPException(status_code=400, detail="Class blocks are managed through /class-schedule")
    return block

# ----------------- Time Blocks ---------------------


@router.get("/blocks", response_model=List[TimeBlockSchema])
def list_time_blocks(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return db.query(TimeBlock).filter(TimeBlock.user_id == user_id).order_by(
        TimeBlock.day_of_week, TimeBlock.start_time
    ).all()


@router.post("/blocks", response_model=TimeBlockSchema, status_code=201)
def create_time_block(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    block_in: TimeBlockCreate = Body(...),
):
    validate_day_of_week(block_in.day_of_week)
    validate_time_range(block_in.start_time, block_in.end_time)

    block = TimeBlock(user_id=user_id, source="user", **block_in.model_dump())
    db.add(block)
    db.commit()
    db.refresh(block)
    scheduling_service.invalidate(user_id)
    return block


@router.put("/blocks/{block_id}", response_model=TimeBlockSchema)
def update_time_block(
    block_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    updates: TimeBlockUpdate = Body(...),
):
    block = _get_user_block(db, block_id, user_id)
    changes = updates.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")
    reject_nulls(changes, REQUIRED_BLOCK_FIELDS)

    validate_day_of_week(changes.get("day_of_week"))
    validate_time_range(changes.get("start_time", block.start_time), changes.get("end_time", block.end_time))

    for field, value in changes.items():
        setattr(block, field, value)
    db.commit()
    db.refresh(block)
    scheduling_service.invalidate(user_id)
    return block


@router.delete("/blocks/{block_id}")
def delete_time_block(
    block_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    block = _get_user_block(db, block_id, user_id)
    db.delete(block)
    db.commit()
    scheduling_service.invalidate(user_id)
    return {"message": "Time block deleted"}

# ----------------- Exceptions ---------------------


@router.get("/exceptions", response_model=List[AvailabilityExceptionSchema])
def list_exceptions(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    start: Optional[date] = Query(None, description="First date to include"),
    end: Optional[date] = Query(None, description="Last date to include"),
):
    query = db.query(AvailabilityException).filter(AvailabilityException.user_id == user_id)
    if start:
        query = query.filter(AvailabilityException.date >= start)
    if end:
        query = query.filter(AvailabilityException.date <= end)
    return query.order_by(AvailabilityException.date, AvailabilityException.start_time).all()


@router.post("/exceptions", response_model=AvailabilityExceptionSchema, status_code=201)
def create_exception(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    exception_in: AvailabilityExceptionCreate = Body(...),
):
    validate_time_range(exception_in.start_time, exception_in.end_time)

    exception = AvailabilityException(user_id=user_id, **exception_in.model_dump())
    db.add(exception)
    db.commit()
    db.refresh(exception)
    scheduling_service.invalidate(user_id)
    return exception


@router.delete("/exceptions/{exception_id}")
def delete_exception(
    exception_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    exception = db.query(AvailabilityException).filter(
        AvailabilityException.id == exception_id,
        AvailabilityException.user_id == user_id,
    ).first()
    if not exception:
        raise HTTPException(status_code=404, detail="Exception not found")
    db.delete(exception)
    db.commit()
    scheduling_service.invalidate(user_id)
    return {"message": "Exception deleted"}
