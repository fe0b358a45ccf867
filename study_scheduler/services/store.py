"""
Read collaborators for the scheduling engine, backed by SQLAlchemy.

Each loader is awaited once per engine call. The queries are blocking, so
they run in FastAPI's threadpool and the event loop stays free. Database
errors propagate unchanged; nothing here retries.
"""

from datetime import date
from typing import List, Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from ..models import AvailabilityException, ClassScheduleEntry, Task, TimeBlock, UserPreference
from ..schemas import (
    AvailabilityExceptionSchema,
    ClassScheduleSchema,
    TaskSchema,
    TimeBlockSchema,
    UserPreferencesSchema,
)


class ConstraintStore:
    def __init__(self, db: Session):
        self.db = db

    async def load_time_blocks(self, user_id: int) -> List[TimeBlockSchema]:
        return await run_in_threadpool(self._time_blocks, user_id)

    async def load_exceptions(self, user_id: int, start: Optional[date] = None,
                              end: Optional[date] = None) -> List[AvailabilityExceptionSchema]:
        return await run_in_threadpool(self._exceptions, user_id, start, end)

    async def load_class_schedule(self, user_id: int) -> List[ClassScheduleSchema]:
        return await run_in_threadpool(self._class_schedule, user_id)

    async def load_tasks(self, user_id: int) -> List[TaskSchema]:
        """Open tasks only; completed ones are never scheduled."""
        return await run_in_threadpool(self._tasks, user_id)

    async def load_preferences(self, user_id: int) -> Optional[UserPreferencesSchema]:
        return await run_in_threadpool(self._preferences, user_id)

    def _time_blocks(self, user_id: int) -> List[TimeBlockSchema]:
        rows = self.db.query(TimeBlock).filter(TimeBlock.user_id == user_id).order_by(
            TimeBlock.day_of_week, TimeBlock.start_time
        ).all()
        return [TimeBlockSchema.model_validate(row) for row in rows]

    def _exceptions(self, user_id: int, start: Optional[date], end: Optional[date]) -> List[AvailabilityExceptionSchema]:
        query = self.db.query(AvailabilityException).filter(AvailabilityException.user_id == user_id)
        if start:
            query = query.filter(AvailabilityException.date >= start)
        if end:
            query = query.filter(AvailabilityException.date <= end)
        rows = query.order_by(AvailabilityException.date, AvailabilityException.start_time).all()
        return [AvailabilityExceptionSchema.model_validate(row) for row in rows]

    def _class_schedule(self, user_id: int) -> List[ClassScheduleSchema]:
        rows = self.db.query(ClassScheduleEntry).filter(ClassScheduleEntry.user_id == user_id).order_by(
            ClassScheduleEntry.day_of_week, ClassScheduleEntry.start_time
        ).all()
        return [ClassScheduleSchema.model_validate(row) for row in rows]

    def _tasks(self, user_id: int) -> List[TaskSchema]:
        rows = self.db.query(Task).filter(Task.user_id == user_id, Task.status != "completed").all()
        return [TaskSchema.model_validate(row) for row in rows]

    def _preferences(self, user_id: int) -> Optional[UserPreferencesSchema]:
        pref = self.db.query(UserPreference).filter(UserPreference.user_id == user_id).first()
        if not pref:
            return None
        return UserPreferencesSchema.model_validate(pref)
