from typing import Optional
from datetime import datetime
from app.schemas.base import CamelModel


class AnalyticsSummaryResponse(CamelModel):
    total_focus_time: int
    total_break_time: int
    completed_sessions: int
    completed_breaks: int


class QuoteResponse(CamelModel):
    id: str
    text: str
    author: str
    category: str
    created_at: Optional[datetime] = None
