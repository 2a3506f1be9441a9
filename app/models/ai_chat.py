from sqlalchemy import Column, String, Text, Boolean, ForeignKey, DateTime
from app.db.base import Base, generate_uuid
from app.utils.dates import utcnow


class AiChatMessage(Base):
    __tablename__ = "ai_chat_history"

    id = Column(String, primary_key=True, default=generate_uuid)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    session_id = Column(String, nullable=True)  # Optional link to a timer session
    message = Column(Text, nullable=False)
    is_user_message = Column(Boolean, nullable=False)
    ai_response = Column(Text, nullable=True)
    context = Column(String, nullable=True)  # 'pause', 'fail', 'general'
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
