from typing import Optional
from sqlalchemy.orm import Session

from app.core.defaults import SCREEN_USAGE_STATS_WINDOW
from app.models.screen_usage_log import ScreenUsageLog


def get_screen_usage_stats(db: Session, user_id: str, session_id: Optional[str] = None) -> dict:
    """
    Aggregate the most recent screen usage logs (optionally for one timer session).
    focusRatio is focus / (focus + away), or 0 when nothing was recorded.
    """
    query = db.query(ScreenUsageLog).filter(ScreenUsageLog.user_id == user_id)
    if session_id:
        query = query.filter(ScreenUsageLog.session_id == session_id)

    logs = query.order_by(ScreenUsageLog.created_at.desc()).limit(SCREEN_USAGE_STATS_WINDOW).all()

    total_distractions = sum(log.distraction_count or 0 for log in logs)
    total_focus_time = sum(log.focus_time or 0 for log in logs)
    total_away_time = sum(log.away_time or 0 for log in logs)
    tracked = total_focus_time + total_away_time

    return {
        "logs": logs,
        "totalDistractions": total_distractions,
        "totalFocusTime": total_focus_time,
        "totalAwayTime": total_away_time,
        "focusRatio": total_focus_time / tracked if tracked else 0,
    }
