from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.dependencies.auth import get_current_user
from app.models.task import Task
from app.models.user import User
from app.schemas.task import TaskCreate, TaskUpdate, TaskResponse
from app.services.tasks import get_owned_task
from app.utils.dates import utcnow

router = APIRouter()


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    task = Task(user_id=user.id, **task_data.model_dump())
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


@router.get("", response_model=List[TaskResponse])
def list_tasks(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    return db.query(Task).filter(Task.user_id == user.id).order_by(Task.created_at.desc()).all()


@router.patch("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    updates: TaskUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    task = get_owned_task(db, user.id, task_id)

    fields = updates.model_dump(exclude_unset=True)
    if "is_completed" in fields:
        if fields["is_completed"] and not task.is_completed:
            task.completed_at = utcnow()
        elif not fields["is_completed"]:
            task.completed_at = None

    for field, value in fields.items():
        if value is not None or field == "description":
            setattr(task, field, value)

    db.commit()
    db.refresh(task)
    return task


@router.delete("/{task_id}")
def delete_task(
    task_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    task = get_owned_task(db, user.id, task_id)
    db.delete(task)
    db.commit()
    return {"success": True}
