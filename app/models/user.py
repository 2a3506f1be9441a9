from sqlalchemy import Column, String, Boolean, DateTime
from app.db.base import Base
from app.utils.dates import utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)  # Identity provider subject (Supabase "sub")
    email = Column(String, unique=True, index=True, nullable=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    profile_image_url = Column(String, nullable=True)
    stripe_customer_id = Column(String, nullable=True)
    stripe_subscription_id = Column(String, nullable=True)
    is_premium = Column(Boolean, default=False, nullable=False)
    # Trial anchor: never updated after insert
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
