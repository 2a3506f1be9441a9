import logging
from fastapi import Depends, HTTPException, status

from app.core.premium import PREMIUM_REQUIRED_CODE, PREMIUM_REQUIRED_MESSAGE
from app.dependencies.auth import get_current_user
from app.models.user import User
from app.services.premium_access import evaluate_user_access
from app.utils.dates import utcnow

logger = logging.getLogger(__name__)


def require_premium_access(user: User = Depends(get_current_user)) -> User:
    """
    Gate for every premium feature. Mounted at router level so individual
    handlers never check access themselves.
    """
    access = evaluate_user_access(user, utcnow())
    if not access.has_access:
        logger.info("[PREMIUM] Denied user %s (trial expired, not premium)", user.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "message": PREMIUM_REQUIRED_MESSAGE,
                "code": PREMIUM_REQUIRED_CODE,
            }
        )
    return user
