from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, Numeric
from app.db.base import Base, generate_uuid
from app.core.defaults import (
    DEFAULT_SESSION_DURATION,
    DEFAULT_BREAK_DURATION,
    DEFAULT_LONG_BREAK_DURATION,
    DEFAULT_SESSIONS_UNTIL_LONG_BREAK,
    DEFAULT_DAILY_SESSION_GOAL,
    DEFAULT_TIMEZONE,
)
from app.utils.dates import utcnow


class UserSettings(Base):
    __tablename__ = "user_settings"

    id = Column(String, primary_key=True, default=generate_uuid)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    theme = Column(String, default="light", nullable=False)  # 'light', 'dark'
    haptic_feedback = Column(Boolean, default=True, nullable=False)
    daily_reminders = Column(Boolean, default=True, nullable=False)
    reminder_time = Column(String, default="09:00", nullable=False)
    sound_volume = Column(Numeric(3, 2), default=0.5, nullable=False)
    default_session_duration = Column(Integer, default=DEFAULT_SESSION_DURATION, nullable=False)
    default_break_duration = Column(Integer, default=DEFAULT_BREAK_DURATION, nullable=False)
    sessions_until_long_break = Column(Integer, default=DEFAULT_SESSIONS_UNTIL_LONG_BREAK, nullable=False)
    long_break_duration = Column(Integer, default=DEFAULT_LONG_BREAK_DURATION, nullable=False)
    daily_session_goal = Column(Integer, default=DEFAULT_DAILY_SESSION_GOAL, nullable=False)
    timezone = Column(String, default=DEFAULT_TIMEZONE, nullable=False)  # Reference zone for streak dates
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
