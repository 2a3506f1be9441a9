from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.dependencies.auth import get_current_user
from app.models.user import User
from app.schemas.game import GameProfileResponse, GameDataResponse, AchievementResponse, XpRequest
from app.services.gamification import get_or_create_game_data, get_active_achievements, add_xp

router = APIRouter()


@router.get("/profile", response_model=GameProfileResponse)
def get_game_profile(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    return GameProfileResponse(
        game_data=GameDataResponse.model_validate(get_or_create_game_data(user.id, db)),
        achievements=[AchievementResponse.model_validate(a) for a in get_active_achievements(db)],
    )


@router.post("/xp", response_model=GameDataResponse)
def award_xp(
    xp_data: XpRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    try:
        return add_xp(user.id, xp_data.xp, db)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
