from fastapi import Request

from app.services.billing import BillingService


def get_billing_service(request: Request) -> BillingService:
    """The BillingService built at startup and stored on app.state."""
    return request.app.state.billing
