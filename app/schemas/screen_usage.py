from typing import List, Optional
from datetime import datetime
from pydantic import Field
from app.schemas.base import CamelModel


class ScreenUsageCreate(CamelModel):
    session_id: Optional[str] = None
    distraction_count: int = Field(default=0, ge=0)
    focus_time: int = Field(default=0, ge=0)
    away_time: int = Field(default=0, ge=0)


class ScreenUsageLogResponse(CamelModel):
    id: str
    user_id: str
    session_id: Optional[str] = None
    distraction_count: int
    focus_time: int
    away_time: int
    created_at: Optional[datetime] = None


class ScreenUsageStatsResponse(CamelModel):
    logs: List[ScreenUsageLogResponse]
    total_distractions: int
    total_focus_time: int
    total_away_time: int
    focus_ratio: float
