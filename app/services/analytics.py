"""
Focus/break totals over a trailing window of timer sessions.
"""
from datetime import datetime, timedelta
from sqlalchemy.orm import Session

from app.core.defaults import ANALYTICS_PERIOD_DAYS
from app.models.timer_session import TimerSession


def get_sessions_by_date_range(db: Session, user_id: str, start: datetime, end: datetime):
    return db.query(TimerSession).filter(
        TimerSession.user_id == user_id,
        TimerSession.started_at >= start,
        TimerSession.started_at <= end
    ).order_by(TimerSession.started_at.desc()).all()


def summarize_sessions(sessions) -> dict:
    summary = {
        "totalFocusTime": 0,
        "totalBreakTime": 0,
        "completedSessions": 0,
        "completedBreaks": 0,
    }
    for session in sessions:
        if not session.is_completed:
            continue
        if session.type == "focus":
            summary["totalFocusTime"] += session.completed_duration or 0
            summary["completedSessions"] += 1
        else:
            summary["totalBreakTime"] += session.completed_duration or 0
            summary["completedBreaks"] += 1
    return summary


def get_summary(db: Session, user_id: str, period: str, now: datetime) -> dict:
    if period not in ANALYTICS_PERIOD_DAYS:
        raise ValueError(f"Unsupported period: {period}")
    start = now - timedelta(days=ANALYTICS_PERIOD_DAYS[period])
    return summarize_sessions(get_sessions_by_date_range(db, user_id, start, now))
