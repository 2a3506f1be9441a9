from typing import Optional
from datetime import datetime
from pydantic import Field
from app.schemas.base import CamelModel


class DailyStreakCreate(CamelModel):
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    sessions_completed: int = Field(default=0, ge=0)
    focus_time_minutes: int = Field(default=0, ge=0)
    # Accepted for compatibility with older clients; the server derives it
    goal_met: Optional[bool] = None


class DailyStreakResponse(CamelModel):
    id: str
    user_id: str
    date: str
    sessions_completed: int
    focus_time_minutes: int
    goal_met: bool
    timezone: str
    created_at: Optional[datetime] = None


class CurrentStreakResponse(CamelModel):
    current_streak: int
