"""
Webhooks for the payment provider (Stripe).
Subscription lifecycle events flip User.is_premium.
"""
import logging
from fastapi import APIRouter, Request, HTTPException, status, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.dependencies.billing import get_billing_service
from app.services.billing import BillingService, BillingNotConfigured, WebhookVerificationError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/stripe")
async def stripe_webhook(
    request: Request,
    db: Session = Depends(get_db),
    billing: BillingService = Depends(get_billing_service)
):
    """
    Stripe webhook. Register this URL in the Stripe dashboard:
    https://your-backend.com/api/webhooks/stripe
    """
    payload = await request.body()
    signature = request.headers.get("stripe-signature")

    try:
        event = billing.construct_event(payload, signature)
    except BillingNotConfigured:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Webhook secret not configured"
        )
    except WebhookVerificationError as e:
        logger.warning("[BILLING] Rejected webhook: %s", e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    user = billing.handle_event(event, db)
    return {"received": True, "userId": user.id if user else None}
