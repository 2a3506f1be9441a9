"""
Community challenges: time-boxed session targets users can join.
"""
import logging
from datetime import datetime
from sqlalchemy.orm import Session

from app.models.community_challenge import CommunityChallenge, UserChallengeProgress

logger = logging.getLogger(__name__)


def get_active_challenges(db: Session, now: datetime):
    """Active challenges whose window contains `now`, soonest ending first."""
    return db.query(CommunityChallenge).filter(
        CommunityChallenge.is_active.is_(True),
        CommunityChallenge.start_date <= now,
        CommunityChallenge.end_date >= now
    ).order_by(CommunityChallenge.end_date).all()


def get_user_challenge_progress(db: Session, user_id: str):
    """Pairs of (challenge, progress) for every challenge the user joined, newest first."""
    return db.query(CommunityChallenge, UserChallengeProgress).join(
        UserChallengeProgress, UserChallengeProgress.challenge_id == CommunityChallenge.id
    ).filter(
        UserChallengeProgress.user_id == user_id
    ).order_by(UserChallengeProgress.joined_at.desc()).all()


def update_challenge_progress(
    db: Session,
    user_id: str,
    challenge: CommunityChallenge,
    sessions: int,
    now: datetime,
) -> UserChallengeProgress:
    """Create or update the user's progress; completion is sessions >= target."""
    progress = db.query(UserChallengeProgress).filter(
        UserChallengeProgress.user_id == user_id,
        UserChallengeProgress.challenge_id == challenge.id
    ).first()

    if progress is None:
        progress = UserChallengeProgress(user_id=user_id, challenge_id=challenge.id)
        db.add(progress)

    progress.current_sessions = sessions
    completed = sessions >= challenge.target_sessions
    if completed and not progress.is_completed:
        progress.completed_at = now
        logger.info("[CHALLENGE] user=%s completed challenge %s", user_id, challenge.id)
    progress.is_completed = completed

    db.commit()
    db.refresh(progress)
    return progress
