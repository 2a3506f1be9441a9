from typing import List
from pydantic import Field
from app.schemas.base import CamelModel


class GameDataResponse(CamelModel):
    user_id: str
    total_xp: int
    current_level: int
    xp_to_next_level: int
    completed_achievements: List[str]


class AchievementResponse(CamelModel):
    id: str
    title: str
    description: str
    xp_reward: int
    icon: str
    category: str
    requirement: int


class GameProfileResponse(CamelModel):
    game_data: GameDataResponse
    achievements: List[AchievementResponse]


class XpRequest(CamelModel):
    xp: int = Field(ge=0)
