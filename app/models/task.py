from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, DateTime, JSON
from app.db.base import Base, generate_uuid
from app.utils.dates import utcnow


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String, primary_key=True, default=generate_uuid)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(String, default="medium", nullable=False)  # low, medium, high
    category = Column(String, default="general", nullable=False)
    tags = Column(JSON, default=list, nullable=False)
    is_completed = Column(Boolean, default=False, nullable=False)
    total_focus_time = Column(Integer, default=0, nullable=False)  # seconds
    session_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    completed_at = Column(DateTime(timezone=True), nullable=True)
