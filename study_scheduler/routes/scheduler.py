"""
Scheduler API: schedule validation, slot generation and weekly planning.
"""

from datetime import date

from fastapi import APIRouter, Body, Depends

from ..dependencies import get_current_user_id, get_store
from ..schemas import OptimalScheduleRequest, TimeSlotsRequest, ValidateScheduleRequest
from ..services.scheduling_service import scheduling_service
from ..services.store import ConstraintStore

router = APIRouter()


@router.post("/validate")
async def validate_candidate_schedule(
    store: ConstraintStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
    request: ValidateScheduleRequest = Body(...),
):
    """Check a proposed schedule for conflicts and overcommitted days."""
    return await scheduling_service.validate(store, user_id, request.candidate_schedule)


@router.post("/time-slots")
async def get_time_slots(
    store: ConstraintStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
    request: TimeSlotsRequest = Body(...),
):
    """
    Generate the 7-day study/break slot plan.
    Tasks and preferences default to the stored ones when not sent.
    """
    return await scheduling_service.time_slots(
        store, user_id,
        tasks=request.tasks,
        preferences=request.user_preferences,
        availability_override=request.available_time,
        start_date=request.start_date,
    )


@router.post("/optimal-schedule")
async def get_optimal_schedule(
    store: ConstraintStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
    request: OptimalScheduleRequest = Body(...),
):
    constraints = {}
    if request.constraints and request.constraints.unavailable_time:
        constraints["unavailableTime"] = request.constraints.unavailable_time

    return await scheduling_service.optimal_schedule(
        store, user_id,
        tasks=request.tasks,
        preferences=request.user_preferences,
        constraints=constraints,
        start_date=request.start_date,
    )


@router.get("/resolve/{day}")
async def resolve_day(
    day: date,
    store: ConstraintStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    """All availability intervals that apply on a date, unmerged."""
    intervals = await scheduling_service.resolve_day(store, user_id, day)
    return {"date": day.isoformat(), "intervals": [interval.to_dict() for interval in intervals]}
