import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.defaults import DEFAULT_SESSION_HISTORY_LIMIT
from app.core.gamification import XP_PER_FOCUS_MINUTE
from app.db.session import get_db
from app.dependencies.auth import get_current_user
from app.models.timer_session import TimerSession
from app.models.user import User
from app.schemas.timer import TimerSessionCreate, TimerSessionUpdate, TimerSessionResponse
from app.services.analytics import get_sessions_by_date_range
from app.services.gamification import add_xp
from app.services.streaks import StreakRecordLocked, record_completed_session
from app.services.tasks import add_focus_session, get_owned_task
from app.utils.dates import utcnow, parse_iso_datetime

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/session", response_model=TimerSessionResponse)
def create_timer_session(
    session_data: TimerSessionCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    if session_data.task_id:
        get_owned_task(db, user.id, session_data.task_id)

    session = TimerSession(
        user_id=user.id,
        task_id=session_data.task_id,
        type=session_data.type,
        duration=session_data.duration,
        ambient_sound=session_data.ambient_sound,
        started_at=utcnow(),
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    return session


@router.patch("/session/{session_id}", response_model=TimerSessionResponse)
def update_timer_session(
    session_id: str,
    updates: TimerSessionUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """
    Update a timer session. The first time a focus session is marked complete,
    today's streak record, the user's XP and the linked task are updated too.
    Completion is one-way, and completed_duration never exceeds duration.
    """
    session = db.query(TimerSession).filter(
        TimerSession.id == session_id,
        TimerSession.user_id == user.id
    ).first()
    if not session:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Timer session not found"
        )

    fields = updates.model_dump(exclude_unset=True)
    if fields.get("task_id"):
        get_owned_task(db, user.id, fields["task_id"])

    if session.is_completed and fields.get("is_completed") is False:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Completed sessions cannot be reopened"
        )

    newly_completed = bool(fields.get("is_completed")) and not session.is_completed
    for field, value in fields.items():
        setattr(session, field, value)
    if session.completed_duration > session.duration:
        session.completed_duration = session.duration

    now = utcnow()
    if newly_completed:
        if session.completed_at is None:
            session.completed_at = now
        if session.type == "focus":
            session.xp_earned = (session.completed_duration // 60) * XP_PER_FOCUS_MINUTE

    db.commit()
    db.refresh(session)

    if newly_completed and session.type == "focus":
        try:
            record_completed_session(db, user.id, session.completed_duration, now)
        except StreakRecordLocked as e:
            logger.warning("[STREAK] user=%s session %s not counted: %s", user.id, session.id, e)
        if session.xp_earned:
            add_xp(user.id, session.xp_earned, db)
        if session.task_id:
            add_focus_session(db, session.task_id, session.completed_duration)
        logger.info("[TIMER] user=%s completed focus session %s (%ss)", user.id, session.id, session.completed_duration)
        db.refresh(session)

    return session


@router.get("/sessions", response_model=List[TimerSessionResponse])
def list_timer_sessions(
    limit: int = DEFAULT_SESSION_HISTORY_LIMIT,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    if limit < 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="limit must be positive"
        )
    return db.query(TimerSession).filter(
        TimerSession.user_id == user.id
    ).order_by(TimerSession.started_at.desc()).limit(limit).all()


@router.get("/sessions/range", response_model=List[TimerSessionResponse])
def list_timer_sessions_in_range(
    startDate: str = None,
    endDate: str = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    if not startDate or not endDate:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Start date and end date are required"
        )
    try:
        start = parse_iso_datetime(startDate)
        end = parse_iso_datetime(endDate)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Dates must be ISO-8601"
        )
    return get_sessions_by_date_range(db, user.id, start, end)
