from typing import Optional
from datetime import datetime
from app.schemas.base import CamelModel


class UserResponse(CamelModel):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    stripe_customer_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    is_premium: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
