from typing import Optional
from app.schemas.base import CamelModel


class PremiumStatusResponse(CamelModel):
    is_premium: bool
    has_access: bool
    trial_days_remaining: int
    account_age: int


class SubscriptionResponse(CamelModel):
    subscription_id: str
    client_secret: Optional[str] = None
