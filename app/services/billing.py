"""
Stripe billing: premium subscription creation and webhook handling.

BillingService is built once at startup (see app.main) and handed to routes
through the get_billing_service dependency. It is the only code that writes
User.is_premium; the access evaluator only reads it.
"""
import logging
import os
from typing import Optional

import stripe
from sqlalchemy.orm import Session

from app.core.premium import PREMIUM_SUBSCRIPTION_STATUSES
from app.models.user import User

logger = logging.getLogger(__name__)


class BillingNotConfigured(RuntimeError):
    """Stripe keys are missing from the environment."""


class WebhookVerificationError(ValueError):
    """Webhook payload or signature could not be verified."""


class BillingService:
    def __init__(
        self,
        api_key: Optional[str] = None,
        price_id: Optional[str] = None,
        webhook_secret: Optional[str] = None,
    ):
        self.api_key = api_key
        self.price_id = price_id
        self.webhook_secret = webhook_secret
        if api_key:
            stripe.api_key = api_key

    @classmethod
    def from_env(cls) -> "BillingService":
        return cls(
            api_key=os.getenv("STRIPE_SECRET_KEY") or None,
            price_id=os.getenv("STRIPE_PRICE_ID") or None,
            webhook_secret=os.getenv("STRIPE_WEBHOOK_SECRET") or None,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.price_id)

    # -- subscription creation -------------------------------------------

    def create_subscription(self, user: User, db: Session) -> dict:
        """
        Create (or reuse) the user's Stripe subscription.

        Returns the subscription id and the PaymentIntent client secret the
        frontend needs to confirm the first payment.
        """
        if not self.is_configured:
            raise BillingNotConfigured("Subscription service not configured")

        if user.stripe_subscription_id:
            subscription = stripe.Subscription.retrieve(
                user.stripe_subscription_id,
                expand=["latest_invoice.payment_intent"],
            )
            invoice = subscription.get("latest_invoice")
            if invoice and not isinstance(invoice, str):
                return {
                    "subscriptionId": subscription["id"],
                    "clientSecret": _client_secret(invoice),
                }

        if not user.email:
            raise ValueError("No user email on file")

        customer_id = user.stripe_customer_id
        if not customer_id:
            name = f"{user.first_name or ''} {user.last_name or ''}".strip() or user.email
            customer = stripe.Customer.create(
                email=user.email,
                name=name,
                metadata={"user_id": user.id},
            )
            customer_id = customer["id"]
            logger.info("[BILLING] Created Stripe customer %s for user %s", customer_id, user.id)

        subscription = stripe.Subscription.create(
            customer=customer_id,
            items=[{"price": self.price_id}],
            payment_behavior="default_incomplete",
            expand=["latest_invoice.payment_intent"],
            metadata={"user_id": user.id},
        )

        self.update_user_stripe_info(db, user, customer_id, subscription["id"])
        logger.info("[BILLING] Created subscription %s for user %s", subscription["id"], user.id)

        return {
            "subscriptionId": subscription["id"],
            "clientSecret": _client_secret(subscription.get("latest_invoice")),
        }

    def update_user_stripe_info(
        self,
        db: Session,
        user: User,
        customer_id: str,
        subscription_id: Optional[str],
    ) -> User:
        user.stripe_customer_id = customer_id
        user.stripe_subscription_id = subscription_id
        user.is_premium = bool(subscription_id)
        db.commit()
        db.refresh(user)
        return user

    # -- webhooks -----------------------------------------------------------

    def construct_event(self, payload: bytes, signature: Optional[str]):
        if not self.webhook_secret:
            raise BillingNotConfigured("Stripe webhook secret not configured")
        try:
            return stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except ValueError as e:
            raise WebhookVerificationError("Invalid payload") from e
        except stripe.error.SignatureVerificationError as e:
            raise WebhookVerificationError("Invalid signature") from e

    def handle_event(self, event, db: Session) -> Optional[User]:
        """
        Apply a subscription lifecycle event to the matching user.
        Returns the updated user, or None when the event is ignored.
        """
        event_type = event["type"]
        obj = event["data"]["object"]

        if event_type not in (
            "customer.subscription.created",
            "customer.subscription.updated",
            "customer.subscription.deleted",
        ):
            logger.info("[BILLING] Ignoring webhook event %s", event_type)
            return None

        user = _find_subscription_user(db, obj)
        if not user:
            logger.warning(
                "[BILLING] No user for subscription %s (customer %s)",
                obj.get("id"), obj.get("customer")
            )
            return None

        if event_type == "customer.subscription.deleted":
            user.is_premium = False
            user.stripe_subscription_id = None
        else:
            user.stripe_subscription_id = obj.get("id")
            user.stripe_customer_id = obj.get("customer") or user.stripe_customer_id
            user.is_premium = obj.get("status") in PREMIUM_SUBSCRIPTION_STATUSES

        db.commit()
        db.refresh(user)
        logger.info(
            "[BILLING] %s -> user %s is_premium=%s",
            event_type, user.id, user.is_premium
        )
        return user


def _client_secret(invoice) -> Optional[str]:
    if not invoice or isinstance(invoice, str):
        return None
    payment_intent = invoice.get("payment_intent")
    if not payment_intent or isinstance(payment_intent, str):
        return None
    return payment_intent.get("client_secret")


def _find_subscription_user(db: Session, subscription) -> Optional[User]:
    metadata = subscription.get("metadata") or {}
    user_id = metadata.get("user_id")
    if user_id:
        user = db.query(User).filter(User.id == user_id).first()
        if user:
            return user

    if subscription.get("id"):
        user = db.query(User).filter(User.stripe_subscription_id == subscription["id"]).first()
        if user:
            return user

    if subscription.get("customer"):
        return db.query(User).filter(User.stripe_customer_id == subscription["customer"]).first()

    return None
