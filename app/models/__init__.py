from app.models.user import User
from app.models.timer_session import TimerSession
from app.models.user_settings import UserSettings
from app.models.daily_streak import DailyStreak
from app.models.motivational_quote import MotivationalQuote
from app.models.game_data import UserGameData, Achievement
from app.models.task import Task
from app.models.community_challenge import CommunityChallenge, UserChallengeProgress
from app.models.ai_chat import AiChatMessage
from app.models.screen_usage_log import ScreenUsageLog

__all__ = [
    "User",
    "TimerSession",
    "UserSettings",
    "DailyStreak",
    "MotivationalQuote",
    "UserGameData",
    "Achievement",
    "Task",
    "CommunityChallenge",
    "UserChallengeProgress",
    "AiChatMessage",
    "ScreenUsageLog",
]
