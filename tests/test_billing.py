from datetime import timedelta

import pytest

from app.services.billing import BillingNotConfigured, BillingService
from app.services.premium_access import evaluate_user_access
from app.utils.dates import utcnow


def subscription_event(event_type, sub_id="sub_123", customer="cus_123", status="active", metadata=None):
    return {
        "type": event_type,
        "data": {
            "object": {
                "id": sub_id,
                "customer": customer,
                "status": status,
                "metadata": metadata or {},
            }
        },
    }


def test_unconfigured_service():
    billing = BillingService()
    assert billing.is_configured is False
    with pytest.raises(BillingNotConfigured):
        billing.construct_event(b"{}", "sig")


def test_from_env_reads_keys(monkeypatch):
    monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_123")
    monkeypatch.setenv("STRIPE_PRICE_ID", "price_123")
    monkeypatch.delenv("STRIPE_WEBHOOK_SECRET", raising=False)
    billing = BillingService.from_env()
    assert billing.is_configured is True
    assert billing.webhook_secret is None


def test_active_subscription_grants_premium(db_session, make_user):
    user = make_user(age=timedelta(days=30))
    assert evaluate_user_access(user, utcnow()).has_access is False

    event = subscription_event("customer.subscription.created", metadata={"user_id": user.id})
    updated = BillingService().handle_event(event, db_session)

    assert updated.id == user.id
    assert updated.is_premium is True
    assert updated.stripe_subscription_id == "sub_123"
    assert evaluate_user_access(updated, utcnow()).has_access is True


def test_lookup_by_customer_when_metadata_missing(db_session, make_user):
    user = make_user()
    user.stripe_customer_id = "cus_999"
    db_session.commit()

    updated = BillingService().handle_event(
        subscription_event("customer.subscription.updated", sub_id="sub_999", customer="cus_999"),
        db_session,
    )
    assert updated.id == user.id
    assert updated.is_premium is True


def test_past_due_subscription_is_not_premium(db_session, make_user):
    user = make_user(is_premium=True)
    user.stripe_subscription_id = "sub_123"
    db_session.commit()

    updated = BillingService().handle_event(
        subscription_event("customer.subscription.updated", status="past_due"),
        db_session,
    )
    assert updated.is_premium is False


def test_deleted_subscription_revokes_premium(db_session, make_user):
    user = make_user(is_premium=True)
    user.stripe_subscription_id = "sub_123"
    db_session.commit()

    updated = BillingService().handle_event(
        subscription_event("customer.subscription.deleted", status="canceled"),
        db_session,
    )
    assert updated.is_premium is False
    assert updated.stripe_subscription_id is None


def test_unrelated_events_are_ignored(db_session, make_user):
    make_user()
    assert BillingService().handle_event(subscription_event("invoice.paid"), db_session) is None


def test_unknown_subscription_is_ignored(db_session, make_user):
    make_user()
    event = subscription_event("customer.subscription.created", sub_id="sub_x", customer="cus_x")
    assert BillingService().handle_event(event, db_session) is None


def test_webhook_rejects_bad_signature(client_for, make_user):
    from app.main import app

    api = client_for(make_user())
    app.state.billing = BillingService(webhook_secret="whsec_test")
    response = api.post(
        "/api/webhooks/stripe",
        content=b'{"type": "customer.subscription.created"}',
        headers={"stripe-signature": "t=1,v1=bad"},
    )
    assert response.status_code == 400
