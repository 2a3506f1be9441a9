from fastapi import APIRouter, Depends

from app.dependencies.auth import get_current_user
from app.models.user import User
from app.schemas.auth import UserResponse

router = APIRouter()


@router.get("/user", response_model=UserResponse)
def get_auth_user(user: User = Depends(get_current_user)):
    """Current user, created on first sign-in from the identity provider's claims."""
    return user
