"""
Trial / premium access evaluation.

Every account gets TRIAL_DAYS of full access from its creation timestamp; after
that only premium (subscribed) accounts may use gated features. The result is
recomputed on every request from `created_at` and `is_premium` and is never
persisted.
"""
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from app.core.premium import TRIAL_WINDOW, ONE_DAY
from app.utils.dates import ensure_aware


@dataclass(frozen=True)
class AccessStatus:
    has_access: bool
    is_premium: bool
    trial_days_remaining: int
    account_age_days: int

    def to_response(self) -> dict:
        return {
            "isPremium": self.is_premium,
            "hasAccess": self.has_access,
            "trialDaysRemaining": self.trial_days_remaining,
            "accountAge": self.account_age_days,
        }


def evaluate_access(created_at: Optional[datetime], is_premium: bool, now: datetime) -> AccessStatus:
    """
    Decide whether an account may use premium-gated features.

    The trial boundary is inclusive: an account exactly TRIAL_WINDOW old still
    has access, with 0 trial days remaining. Premium accounts always have
    access and report 0 trial days.
    """
    if created_at is None:
        raise ValueError("created_at is required to evaluate trial access")
    if now is None:
        raise ValueError("now is required to evaluate trial access")

    elapsed = ensure_aware(now) - ensure_aware(created_at)
    account_age_days = max(0, math.floor(elapsed / ONE_DAY))

    if is_premium:
        return AccessStatus(
            has_access=True,
            is_premium=True,
            trial_days_remaining=0,
            account_age_days=account_age_days,
        )

    remaining = TRIAL_WINDOW - elapsed
    trial_days_remaining = max(0, math.ceil(remaining / ONE_DAY))

    return AccessStatus(
        has_access=elapsed <= TRIAL_WINDOW,
        is_premium=False,
        trial_days_remaining=trial_days_remaining,
        account_age_days=account_age_days,
    )


def evaluate_user_access(user, now: datetime) -> AccessStatus:
    return evaluate_access(user.created_at, bool(user.is_premium), now)
