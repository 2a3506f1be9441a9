import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.defaults import DEFAULT_STREAK_HISTORY_LIMIT
from app.db.session import get_db
from app.dependencies.auth import get_current_user
from app.models.user import User
from app.models.user_settings import UserSettings
from app.schemas.settings import UserSettingsUpdate, UserSettingsResponse
from app.schemas.streak import DailyStreakCreate, DailyStreakResponse, CurrentStreakResponse
from app.services.streaks import (
    StreakRecordLocked,
    get_current_streak,
    get_daily_streaks,
    upsert_daily_streak,
)
from app.utils.dates import utcnow

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/settings", response_model=UserSettingsResponse)
def get_user_settings(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Get the user's settings; a row with defaults is created on first read."""
    settings = db.query(UserSettings).filter(UserSettings.user_id == user.id).first()
    if not settings:
        settings = UserSettings(user_id=user.id)
        db.add(settings)
        db.commit()
        db.refresh(settings)
    return settings


@router.post("/settings", response_model=UserSettingsResponse)
def upsert_user_settings(
    settings_data: UserSettingsUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    settings = db.query(UserSettings).filter(UserSettings.user_id == user.id).first()
    if not settings:
        settings = UserSettings(user_id=user.id)
        db.add(settings)

    for field, value in settings_data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(settings, field, value)

    db.commit()
    db.refresh(settings)
    return settings


@router.get("/streaks", response_model=List[DailyStreakResponse])
def list_daily_streaks(
    limit: int = DEFAULT_STREAK_HISTORY_LIMIT,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    if limit < 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="limit must be positive"
        )
    return get_daily_streaks(db, user.id, limit)


@router.get("/streak/current", response_model=CurrentStreakResponse)
def get_current_streak_route(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    return {"current_streak": get_current_streak(db, user.id, utcnow())}


@router.post("/streak", response_model=DailyStreakResponse)
def upsert_daily_streak_route(
    streak_data: DailyStreakCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Write today's streak record. Records for other days are read-only."""
    try:
        return upsert_daily_streak(
            db,
            user.id,
            streak_data.date,
            streak_data.sessions_completed,
            streak_data.focus_time_minutes,
            utcnow(),
        )
    except StreakRecordLocked as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid streak date"
        )
