from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from app.db.base import Base, generate_uuid
from app.utils.dates import utcnow


class ScreenUsageLog(Base):
    __tablename__ = "screen_usage_logs"

    id = Column(String, primary_key=True, default=generate_uuid)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    session_id = Column(String, ForeignKey("timer_sessions.id", ondelete="SET NULL"), nullable=True)
    distraction_count = Column(Integer, default=0, nullable=False)
    focus_time = Column(Integer, default=0, nullable=False)  # seconds stayed in app
    away_time = Column(Integer, default=0, nullable=False)  # seconds spent away
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
