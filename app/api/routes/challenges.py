from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.dependencies.auth import get_current_user
from app.models.community_challenge import CommunityChallenge
from app.models.user import User
from app.schemas.challenge import ChallengeResponse, ChallengeProgressResponse, ChallengeProgressEntry
from app.services.challenges import get_active_challenges, get_user_challenge_progress, update_challenge_progress
from app.utils.dates import utcnow

router = APIRouter()


@router.get("", response_model=List[ChallengeResponse])
def list_active_challenges(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    return get_active_challenges(db, utcnow())


@router.get("/progress", response_model=List[ChallengeProgressEntry])
def list_challenge_progress(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    return [
        ChallengeProgressEntry(
            challenge=ChallengeResponse.model_validate(challenge),
            progress=ChallengeProgressResponse.model_validate(progress),
        )
        for challenge, progress in get_user_challenge_progress(db, user.id)
    ]


@router.post("/{challenge_id}/join", response_model=ChallengeProgressResponse)
def join_challenge(
    challenge_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    challenge = db.query(CommunityChallenge).filter(
        CommunityChallenge.id == challenge_id,
        CommunityChallenge.is_active.is_(True)
    ).first()
    if not challenge:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Challenge not found"
        )
    return update_challenge_progress(db, user.id, challenge, 0, utcnow())
