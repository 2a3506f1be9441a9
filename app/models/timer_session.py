from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime
from app.db.base import Base, generate_uuid
from app.utils.dates import utcnow


class TimerSession(Base):
    __tablename__ = "timer_sessions"

    id = Column(String, primary_key=True, default=generate_uuid)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    task_id = Column(String, ForeignKey("tasks.id", ondelete="SET NULL"), nullable=True)
    type = Column(String, nullable=False)  # 'focus', 'break', 'long_break'
    duration = Column(Integer, nullable=False)  # seconds
    completed_duration = Column(Integer, nullable=False, default=0)
    is_completed = Column(Boolean, default=False, nullable=False)
    pause_count = Column(Integer, default=0, nullable=False)
    distraction_count = Column(Integer, default=0, nullable=False)
    xp_earned = Column(Integer, default=0, nullable=False)
    started_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    ambient_sound = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
