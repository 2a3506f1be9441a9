"""
One row per user per calendar day. goal_met is derived from sessions_completed
and is frozen once the date is in the past. `timezone` is the zone the row was
first written in; later zone changes never reopen it.
"""
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, UniqueConstraint
from app.db.base import Base, generate_uuid
from app.core.defaults import DEFAULT_TIMEZONE
from app.utils.dates import utcnow


class DailyStreak(Base):
    __tablename__ = "daily_streaks"

    id = Column(String, primary_key=True, default=generate_uuid)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(String, nullable=False)  # YYYY-MM-DD in the user's reference time zone
    sessions_completed = Column(Integer, default=0, nullable=False)
    focus_time_minutes = Column(Integer, default=0, nullable=False)
    goal_met = Column(Boolean, default=False, nullable=False)
    timezone = Column(String, default=DEFAULT_TIMEZONE, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_daily_streaks_user_date"),
    )

    def __repr__(self):
        return f"<DailyStreak(user_id={self.user_id}, date={self.date}, sessions={self.sessions_completed}, goal_met={self.goal_met})>"
