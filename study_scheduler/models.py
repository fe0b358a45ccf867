from sqlalchemy import String, Integer, Boolean, ForeignKey, DateTime, Date, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.ext.mutable import MutableList, MutableDict
from datetime import datetime, date
from typing import Optional
from .database import Base

DEFAULT_WORK_HOURS = {"start": "09:00", "end": "17:00"}
DEFAULT_STUDY_BLOCKS = [25, 50, 90]
DEFAULT_PREFERRED_DAYS = ["monday", "tuesday", "wednesday", "thursday", "friday"]


class ClassScheduleEntry(Base):
    __tablename__ = "class_schedule"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(Integer, index=True, default=1)
    course_code: Mapped[str] = mapped_column(String(20), index=True)
    day_of_week: Mapped[int] = mapped_column(Integer)  # 0=Sunday .. 6=Saturday
    start_time: Mapped[str] = mapped_column(String(5))  # HH:mm
    end_time: Mapped[str] = mapped_column(String(5))
    location: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    recurring_start: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    recurring_end: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class TimeBlock(Base):
    __tablename__ = "time_blocks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(Integer, index=True, default=1)
    day_of_week: Mapped[int] = mapped_column(Integer)  # 0=Sunday .. 6=Saturday
    start_time: Mapped[str] = mapped_column(String(5))
    end_time: Mapped[str] = mapped_column(String(5))
    block_type: Mapped[str] = mapped_column(String(20), default="available")  # preferred / available / unavailable
    is_recurring: Mapped[bool] = mapped_column(Boolean, default=True)
    source: Mapped[str] = mapped_column(String(20), default="user")  # user / class / exception
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    class_entry_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("class_schedule.id", ondelete="CASCADE"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class AvailabilityException(Base):
    __tablename__ = "availability_exceptions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(Integer, index=True, default=1)
    date: Mapped[date] = mapped_column(Date, index=True)
    start_time: Mapped[str] = mapped_column(String(5))
    end_time: Mapped[str] = mapped_column(String(5))
    block_type: Mapped[str] = mapped_column(String(20), default="unavailable")
    reason: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class Task(Base):
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(Integer, index=True, default=1)
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    task_type: Mapped[str] = mapped_column(String(20), default="other")  # assignment / exam / class / study / project / other
    course_code: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    deadline: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True, index=True)
    estimated_duration: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=60)  # minutes
    priority: Mapped[str] = mapped_column(String(10), default="medium")
    status: Mapped[str] = mapped_column(String(20), default="pending")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class UserPreference(Base):
    __tablename__ = "user_preferences"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(Integer, unique=True, default=1)
    work_hours: Mapped[dict] = mapped_column(MutableDict.as_mutable(JSON), default=lambda: dict(DEFAULT_WORK_HOURS))
    study_blocks: Mapped[list] = mapped_column(MutableList.as_mutable(JSON), default=lambda: list(DEFAULT_STUDY_BLOCKS))
    break_duration: Mapped[int] = mapped_column(Integer, default=15)
    pomodoro_duration: Mapped[int] = mapped_column(Integer, default=25)
    preferred_days: Mapped[list] = mapped_column(MutableList.as_mutable(JSON), default=lambda: list(DEFAULT_PREFERRED_DAYS))
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
