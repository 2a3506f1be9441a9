from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.dependencies.auth import get_current_user
from app.models.screen_usage_log import ScreenUsageLog
from app.models.timer_session import TimerSession
from app.models.user import User
from app.schemas.screen_usage import ScreenUsageCreate, ScreenUsageLogResponse, ScreenUsageStatsResponse
from app.services.screen_usage import get_screen_usage_stats

router = APIRouter()


@router.post("", response_model=ScreenUsageLogResponse)
def save_screen_usage(
    usage_data: ScreenUsageCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    if usage_data.session_id:
        owned = db.query(TimerSession.id).filter(
            TimerSession.id == usage_data.session_id,
            TimerSession.user_id == user.id
        ).first()
        if not owned:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Timer session not found"
            )

    log = ScreenUsageLog(user_id=user.id, **usage_data.model_dump())
    db.add(log)
    db.commit()
    db.refresh(log)
    return log


@router.get("/stats", response_model=ScreenUsageStatsResponse)
def screen_usage_stats(
    sessionId: Optional[str] = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    stats = get_screen_usage_stats(db, user.id, sessionId)
    return ScreenUsageStatsResponse(
        logs=[ScreenUsageLogResponse.model_validate(log) for log in stats["logs"]],
        total_distractions=stats["totalDistractions"],
        total_focus_time=stats["totalFocusTime"],
        total_away_time=stats["totalAwayTime"],
        focus_ratio=stats["focusRatio"],
    )
