from typing import Literal, Optional
from datetime import datetime
from pydantic import Field
from app.schemas.base import CamelModel

SessionType = Literal["focus", "break", "long_break"]


class TimerSessionCreate(CamelModel):
    type: SessionType
    duration: int = Field(gt=0)  # seconds
    task_id: Optional[str] = None
    ambient_sound: Optional[str] = None


class TimerSessionUpdate(CamelModel):
    completed_duration: Optional[int] = Field(default=None, ge=0)
    is_completed: Optional[bool] = None
    pause_count: Optional[int] = Field(default=None, ge=0)
    distraction_count: Optional[int] = Field(default=None, ge=0)
    completed_at: Optional[datetime] = None
    ambient_sound: Optional[str] = None
    task_id: Optional[str] = None


class TimerSessionResponse(CamelModel):
    id: str
    user_id: str
    task_id: Optional[str] = None
    type: str
    duration: int
    completed_duration: int
    is_completed: bool
    pause_count: int
    distraction_count: int
    xp_earned: int
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    ambient_sound: Optional[str] = None
    created_at: Optional[datetime] = None
