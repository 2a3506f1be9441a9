from sqlalchemy import Column, String, Text, Boolean, DateTime
from app.db.base import Base, generate_uuid
from app.utils.dates import utcnow


class MotivationalQuote(Base):
    __tablename__ = "motivational_quotes"

    id = Column(String, primary_key=True, default=generate_uuid)
    text = Column(Text, nullable=False)
    author = Column(String, nullable=False)
    category = Column(String, default="general", nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
