"""
Gamification: per-user XP totals and the achievement catalogue.
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, DateTime, JSON
from app.db.base import Base, generate_uuid
from app.core.gamification import XP_PER_LEVEL
from app.utils.dates import utcnow


class UserGameData(Base):
    __tablename__ = "user_game_data"

    id = Column(String, primary_key=True, default=generate_uuid)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    total_xp = Column(Integer, default=0, nullable=False)
    current_level = Column(Integer, default=1, nullable=False)
    xp_to_next_level = Column(Integer, default=XP_PER_LEVEL, nullable=False)
    completed_achievements = Column(JSON, default=list, nullable=False)  # Achievement ids
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)


class Achievement(Base):
    __tablename__ = "achievements"

    id = Column(String, primary_key=True)  # Stable slug, e.g. "first_focus"
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    xp_reward = Column(Integer, default=0, nullable=False)
    icon = Column(String, nullable=False)
    category = Column(String, default="general", nullable=False)
    requirement = Column(Integer, nullable=False)  # sessions/hours/days needed
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
