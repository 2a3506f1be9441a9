from typing import Optional
from datetime import datetime
from app.schemas.base import CamelModel


class ChallengeResponse(CamelModel):
    id: str
    title: str
    description: str
    target_sessions: int
    start_date: datetime
    end_date: datetime
    xp_reward: int
    is_active: bool


class ChallengeProgressResponse(CamelModel):
    id: str
    user_id: str
    challenge_id: str
    current_sessions: int
    is_completed: bool
    joined_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class ChallengeProgressEntry(CamelModel):
    challenge: ChallengeResponse
    progress: ChallengeProgressResponse
