"""
XP, levels and the achievement catalogue.
"""
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.gamification import level_for_xp
from app.models.game_data import UserGameData, Achievement

logger = logging.getLogger(__name__)


def get_or_create_game_data(user_id: str, db: Session) -> UserGameData:
    """Get the user's game data row, creating the level-1 row on first use."""
    game_data = db.query(UserGameData).filter(UserGameData.user_id == user_id).first()
    if game_data:
        return game_data

    level, xp_to_next_level = level_for_xp(0)
    game_data = UserGameData(
        user_id=user_id,
        total_xp=0,
        current_level=level,
        xp_to_next_level=xp_to_next_level,
        completed_achievements=[]
    )
    db.add(game_data)
    try:
        db.commit()
    except IntegrityError:
        # Created by a concurrent request
        db.rollback()
        return db.query(UserGameData).filter(UserGameData.user_id == user_id).one()
    db.refresh(game_data)
    logger.info("[GAME] Created game data for user %s", user_id)
    return game_data


def add_xp(user_id: str, xp_to_add: int, db: Session) -> UserGameData:
    """Add XP and recompute level and distance to the next level."""
    if xp_to_add < 0:
        raise ValueError("xp_to_add cannot be negative")

    game_data = get_or_create_game_data(user_id, db)
    game_data.total_xp = (game_data.total_xp or 0) + xp_to_add
    game_data.current_level, game_data.xp_to_next_level = level_for_xp(game_data.total_xp)
    db.commit()
    db.refresh(game_data)
    return game_data


def get_active_achievements(db: Session):
    return db.query(Achievement).filter(
        Achievement.is_active.is_(True)
    ).order_by(Achievement.category, Achievement.id).all()
