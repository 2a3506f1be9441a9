from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.task import Task


def get_owned_task(db: Session, user_id: str, task_id: str) -> Task:
    """Load a task belonging to `user_id`, or raise 404."""
    task = db.query(Task).filter(Task.id == task_id, Task.user_id == user_id).first()
    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )
    return task


def add_focus_session(db: Session, task_id: str, completed_seconds: int) -> None:
    """Credit one completed focus session to a task's totals."""
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        return
    task.total_focus_time = (task.total_focus_time or 0) + completed_seconds
    task.session_count = (task.session_count or 0) + 1
    db.commit()
