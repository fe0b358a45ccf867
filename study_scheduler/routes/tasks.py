"""Task list API. The engine only reads tasks; these endpoints feed it."""

from typing import List

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_current_user_id
from ..models import Task
from ..schemas import TaskCreate, TaskSchema, TaskStatusUpdate, TaskUpdate
from .validation import reject_nulls

router = APIRouter(tags=["tasks"])

REQUIRED_TASK_FIELDS = ("title", "task_type", "priority", "status")


def _get_user_task(db: Session, task_id: int, user_id: int) -> Task:
    task = db.query(Task).filter(Task.id == task_id, Task.user_id == user_id).first()
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.get("/", response_model=List[TaskSchema])
def list_tasks(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return db.query(Task).filter(Task.user_id == user_id).order_by(Task.deadline.asc()).all()


@router.post("/", response_model=TaskSchema, status_code=201)
def create_task(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    task_in: TaskCreate = Body(...),
):
    task = Task(user_id=user_id, **task_in.model_dump())
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


@router.put("/{task_id}", response_model=TaskSchema)
def update_task(
    task_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    task_update: TaskUpdate = Body(...),
):
    task = _get_user_task(db, task_id, user_id)
    changes = task_update.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")
    reject_nulls(changes, REQUIRED_TASK_FIELDS)

    for field, value in changes.items():
        setattr(task, field, value)
    db.commit()
    db.refresh(task)
    return task


@router.patch("/{task_id}/status", response_model=TaskSchema)
def update_task_status(
    task_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    status_update: TaskStatusUpdate = Body(...),
):
    """Completed tasks drop out of the scheduling queue."""
    task = _get_user_task(db, task_id, user_id)
    task.status = status_update.status
    db.commit()
    db.refresh(task)
    return task


@router.delete("/{task_id}")
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    task = _get_user_task(db, task_id, user_id)
    db.delete(task)
    db.commit()
    return {"message": "Task deleted successfully"}
