import logging
import stripe
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.dependencies.auth import get_current_user
from app.dependencies.billing import get_billing_service
from app.models.user import User
from app.schemas.premium import PremiumStatusResponse, SubscriptionResponse
from app.services.billing import BillingService, BillingNotConfigured
from app.services.premium_access import evaluate_user_access
from app.utils.dates import utcnow

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/premium/status", response_model=PremiumStatusResponse)
def get_premium_status(user: User = Depends(get_current_user)):
    """Access decision and remaining trial days, for the upgrade banner."""
    return evaluate_user_access(user, utcnow()).to_response()


@router.post("/create-subscription", response_model=SubscriptionResponse)
def create_subscription(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    billing: BillingService = Depends(get_billing_service)
):
    """
    Create a Stripe subscription for the current user.
    Returns the PaymentIntent client secret used by the frontend to confirm payment.
    """
    try:
        return billing.create_subscription(user, db)
    except BillingNotConfigured:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Subscription service not configured. Please contact support."
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except stripe.error.StripeError as e:
        logger.exception("[BILLING] Stripe error creating subscription for user %s", user.id)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to create subscription: {str(e)}"
        )
