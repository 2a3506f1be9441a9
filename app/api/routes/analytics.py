from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.defaults import ANALYTICS_PERIOD_DAYS, DEFAULT_ANALYTICS_PERIOD
from app.db.session import get_db
from app.dependencies.auth import get_current_user
from app.models.user import User
from app.schemas.analytics import AnalyticsSummaryResponse
from app.services.analytics import get_summary
from app.utils.dates import utcnow

router = APIRouter()


@router.get("/summary", response_model=AnalyticsSummaryResponse)
def get_analytics_summary(
    period: str = DEFAULT_ANALYTICS_PERIOD,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Completed focus/break totals over the trailing period (1d, 7d, 30d or 90d)."""
    if period not in ANALYTICS_PERIOD_DAYS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"period must be one of {', '.join(ANALYTICS_PERIOD_DAYS)}"
        )
    return get_summary(db, user.id, period, utcnow())
