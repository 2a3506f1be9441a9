from typing import List, Literal, Optional
from datetime import datetime
from pydantic import Field
from app.schemas.base import CamelModel

Priority = Literal["low", "medium", "high"]


class TaskCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    priority: Priority = "medium"
    category: str = "general"
    tags: List[str] = Field(default_factory=list)


class TaskUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    priority: Optional[Priority] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    is_completed: Optional[bool] = None


class TaskResponse(CamelModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    priority: str
    category: str
    tags: List[str]
    is_completed: bool
    total_focus_time: int
    session_count: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
