from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, date
from typing import Optional, List, Dict, Literal

BlockType = Literal["preferred", "available", "unavailable"]
BlockSource = Literal["user", "class", "exception"]
Priority = Literal["urgent", "high", "medium", "low"]
TaskStatus = Literal["pending", "in-progress", "completed", "overdue"]

# ----------------- Availability Schemas ---------------------


class TimeBlockBase(BaseModel):
    day_of_week: int
    start_time: str
    end_time: str
    block_type: BlockType = "available"
    is_recurring: bool = True
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class TimeBlockCreate(TimeBlockBase):
    pass


class TimeBlockUpdate(BaseModel):
    day_of_week: Optional[int] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    block_type: Optional[BlockType] = None
    is_recurring: Optional[bool] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class TimeBlockSchema(TimeBlockBase):
    id: int
    source: BlockSource = "user"
    class_entry_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class AvailabilityExceptionBase(BaseModel):
    date: date
    start_time: str
    end_time: str
    block_type: BlockType = "unavailable"
    reason: Optional[str] = None


class AvailabilityExceptionCreate(AvailabilityExceptionBase):
    pass


class AvailabilityExceptionSchema(AvailabilityExceptionBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class ClassScheduleBase(BaseModel):
    course_code: str
    day_of_week: int
    start_time: str
    end_time: str
    location: Optional[str] = None
    recurring_start: Optional[date] = None
    recurring_end: Optional[date] = None


class ClassScheduleCreate(ClassScheduleBase):
    pass


class ClassScheduleUpdate(BaseModel):
    course_code: Optional[str] = None
    day_of_week: Optional[int] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    recurring_start: Optional[date] = None
    recurring_end: Optional[date] = None


class ClassScheduleSchema(ClassScheduleBase):
    id: int

    model_config = ConfigDict(from_attributes=True)

# ----------------- Task Schemas ---------------------


class TaskBase(BaseModel):
    title: str
    description: Optional[str] = None
    task_type: str = "other"
    course_code: Optional[str] = None
    deadline: Optional[datetime] = None
    estimated_duration: Optional[int] = 60
    priority: Priority = "medium"
    status: TaskStatus = "pending"


class TaskCreate(TaskBase):
    pass


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    task_type: Optional[str] = None
    course_code: Optional[str] = None
    deadline: Optional[datetime] = None
    estimated_duration: Optional[int] = None
    priority: Optional[Priority] = None
    status: Optional[TaskStatus] = None


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


class TaskSchema(TaskBase):
    id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)

# ----------------- Preference Schemas ---------------------


class WorkHours(BaseModel):
    start: str
    end: str


class UserPreferencesSchema(BaseModel):
    # Optional so incomplete preferences reach the engine, which falls back
    work_hours: Optional[WorkHours] = None
    study_blocks: Optional[List[int]] = None
    break_duration: Optional[int] = None
    preferred_days: Optional[List[str]] = None
    pomodoro_duration: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)

# ----------------- Scheduler Schemas ---------------------


class TimeRange(BaseModel):
    start: str
    end: str


class CandidateScheduleItem(BaseModel):
    date: date
    start: str
    end: str
    label: Optional[str] = None


class ValidateScheduleRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    candidate_schedule: List[CandidateScheduleItem] = Field(default_factory=list, alias="candidateSchedule")


class TimeSlotsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tasks: Optional[List[TaskSchema]] = None
    user_preferences: Optional[UserPreferencesSchema] = Field(default=None, alias="userPreferences")
    available_time: Optional[Dict[str, List[TimeRange]]] = Field(default=None, alias="availableTime")
    start_date: Optional[date] = Field(default=None, alias="startDate")


class ScheduleConstraints(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    unavailable_time: Optional[Dict[str, List[TimeRange]]] = Field(default=None, alias="unavailableTime")


class OptimalScheduleRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tasks: Optional[List[TaskSchema]] = None
    user_preferences: Optional[UserPreferencesSchema] = Field(default=None, alias="userPreferences")
    constraints: Optional[ScheduleConstraints] = None
    start_date: Optional[date] = Field(default=None, alias="startDate")
