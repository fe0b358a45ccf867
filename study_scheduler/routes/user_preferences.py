from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_current_user_id
from ..models import UserPreference
from ..schemas import UserPreferencesSchema
from ..scheduling.core.constants import WEEKDAY_NAMES
from .validation import validate_time_range

router = APIRouter(tags=["user-preferences"])


@router.get("/", response_model=UserPreferencesSchema)
def get_user_preferences(db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    pref = db.query(UserPreference).filter(UserPreference.user_id == user_id).first()
    if not pref:
        # First read creates the defaults
        pref = UserPreference(user_id=user_id)
        db.add(pref)
        db.commit()
        db.refresh(pref)
    return pref


@router.put("/", response_model=UserPreferencesSchema)
def update_user_preferences(
    data: UserPreferencesSchema = Body(...),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    if data.work_hours is not None:
        validate_time_range(data.work_hours.start, data.work_hours.end)
    if data.study_blocks is not None and (not data.study_blocks or any(d <= 0 for d in data.study_blocks)):
        raise HTTPException(status_code=400, detail="study_blocks must be a non-empty list of positive minutes")
    if data.break_duration is not None and data.break_duration < 0:
        raise HTTPException(status_code=400, detail="break_duration cannot be negative")
    if data.preferred_days is not None:
        unknown = [day for day in data.preferred_days if day.lower() not in WEEKDAY_NAMES]
        if unknown:
            raise HTTPException(status_code=400, detail=f"Unknown weekday(s): {unknown}. Must be one of: {list(WEEKDAY_NAMES)}")

    pref = db.query(UserPreference).filter(UserPreference.user_id == user_id).first()
    if not pref:
        pref = UserPreference(user_id=user_id)
        db.add(pref)

    if data.work_hours is not None:
        pref.work_hours = data.work_hours.model_dump()
    if data.study_blocks is not None:
        pref.study_blocks = data.study_blocks
    if data.break_duration is not None:
        pref.break_duration = data.break_duration
    if data.preferred_days is not None:
        pref.preferred_days = [day.lower() for day in data.preferred_days]
    if data.pomodoro_duration is not None:
        pref.pomodoro_duration = data.pomodoro_duration
    db.commit()
    db.refresh(pref)
    return pref
