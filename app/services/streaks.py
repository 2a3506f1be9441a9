"""
Daily streak bookkeeping and the current-streak calculation.

A streak counts consecutive calendar days, ending today, on which the user met
their daily session goal. Days are YYYY-MM-DD keys in the user's reference
time zone (UserSettings.timezone).
"""
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.defaults import DEFAULT_DAILY_SESSION_GOAL, DEFAULT_TIMEZONE
from app.models.daily_streak import DailyStreak
from app.models.user_settings import UserSettings
from app.utils.dates import ensure_aware, to_date_key, parse_date_key

logger = logging.getLogger(__name__)


class StreakRecordLocked(ValueError):
    """Raised when a caller tries to rewrite a record for a day other than today."""


def compute_current_streak(dates_desc: Iterable[str], today: date) -> int:
    """
    Count consecutive goal-met days ending today.

    `dates_desc` holds the YYYY-MM-DD keys of goal-met records only, newest
    first. Position i must equal today - i days; the first mismatch ends the
    streak. If today has no record the streak is 0, even when yesterday's
    chain is long.
    """
    streak = 0
    for i, record_date in enumerate(dates_desc):
        expected = to_date_key(today - timedelta(days=i))
        if record_date != expected:
            break
        streak += 1
    return streak


def local_today(tz_name: Optional[str], now: datetime) -> date:
    """Calendar date of `now` in the given IANA zone (UTC when unset)."""
    now = ensure_aware(now)
    if not tz_name or tz_name == "UTC":
        return now.astimezone(timezone.utc).date()
    try:
        return now.astimezone(ZoneInfo(tz_name)).date()
    except ZoneInfoNotFoundError:
        logger.warning("[STREAK] Unknown time zone %r, falling back to UTC", tz_name)
        return now.astimezone(timezone.utc).date()


def get_streak_preferences(db: Session, user_id: str) -> tuple:
    """Return (timezone name, daily session goal) for a user, with defaults."""
    settings = db.query(UserSettings).filter(UserSettings.user_id == user_id).first()
    if not settings:
        return DEFAULT_TIMEZONE, DEFAULT_DAILY_SESSION_GOAL
    return settings.timezone or DEFAULT_TIMEZONE, settings.daily_session_goal or DEFAULT_DAILY_SESSION_GOAL


def get_current_streak(db: Session, user_id: str, now: datetime) -> int:
    tz_name, _ = get_streak_preferences(db, user_id)
    rows = db.query(DailyStreak.date).filter(
        DailyStreak.user_id == user_id,
        DailyStreak.goal_met.is_(True)
    ).order_by(DailyStreak.date.desc()).all()
    return compute_current_streak((row.date for row in rows), local_today(tz_name, now))


def get_daily_streaks(db: Session, user_id: str, limit: int):
    return db.query(DailyStreak).filter(
        DailyStreak.user_id == user_id
    ).order_by(DailyStreak.date.desc()).limit(limit).all()


def upsert_daily_streak(
    db: Session,
    user_id: str,
    date_key: str,
    sessions_completed: int,
    focus_time_minutes: int,
    now: datetime,
) -> DailyStreak:
    """
    Create or overwrite the streak record for `date_key`.

    Only today's record (in the user's zone) may be written; goal_met is
    always derived from sessions_completed and the user's daily goal.
    An existing record stays writable only while its date is still today in
    the zone it was first written in, and no record may be added behind a
    newer one, so changing time zone never reopens a past day.
    """
    tz_name, daily_goal = get_streak_preferences(db, user_id)
    today_key = to_date_key(local_today(tz_name, now))
    # Validates the format before comparing keys lexically
    parse_date_key(date_key)
    if date_key != today_key:
        raise StreakRecordLocked(
            f"Streak records can only be written for today ({today_key}), got {date_key}"
        )

    values = {
        "sessions_completed": sessions_completed,
        "focus_time_minutes": focus_time_minutes,
        "goal_met": sessions_completed >= daily_goal,
    }

    record = db.query(DailyStreak).filter(
        DailyStreak.user_id == user_id,
        DailyStreak.date == date_key
    ).first()

    if record is not None:
        written_today = to_date_key(local_today(record.timezone, now))
        if record.date != written_today:
            raise StreakRecordLocked(f"Streak record for {date_key} is already closed")
    else:
        latest = db.query(DailyStreak.date).filter(
            DailyStreak.user_id == user_id
        ).order_by(DailyStreak.date.desc()).first()
        if latest is not None and latest.date > date_key:
            raise StreakRecordLocked(
                f"Cannot add a streak record for {date_key} after {latest.date}"
            )

    if record is None:
        record = DailyStreak(user_id=user_id, date=date_key, timezone=tz_name, **values)
        db.add(record)
        try:
            db.commit()
        except IntegrityError:
            # Another request inserted today's row first; update that one instead
            db.rollback()
            record = db.query(DailyStreak).filter(
                DailyStreak.user_id == user_id,
                DailyStreak.date == date_key
            ).one()
            for key, value in values.items():
                setattr(record, key, value)
            db.commit()
    else:
        for key, value in values.items():
            setattr(record, key, value)
        db.commit()

    db.refresh(record)
    return record


def record_completed_session(db: Session, user_id: str, completed_seconds: int, now: datetime) -> DailyStreak:
    """Add one completed focus session to today's streak record."""
    tz_name, _ = get_streak_preferences(db, user_id)
    today_key = to_date_key(local_today(tz_name, now))

    existing = db.query(DailyStreak).filter(
        DailyStreak.user_id == user_id,
        DailyStreak.date == today_key
    ).first()
    sessions = (existing.sessions_completed if existing else 0) + 1
    minutes = (existing.focus_time_minutes if existing else 0) + completed_seconds // 60

    record = upsert_daily_streak(db, user_id, today_key, sessions, minutes, now)
    logger.info(
        "[STREAK] user=%s date=%s sessions=%s goal_met=%s",
        user_id, today_key, record.sessions_completed, record.goal_met
    )
    return record
