from datetime import datetime, timedelta, timezone

import pytest

from app.core.premium import TRIAL_DAYS
from app.services.premium_access import evaluate_access

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def test_new_account_has_full_trial():
    status = evaluate_access(NOW, False, NOW)
    assert status.has_access is True
    assert status.is_premium is False
    assert status.trial_days_remaining == TRIAL_DAYS
    assert status.account_age_days == 0


def test_partial_days_round_up():
    status = evaluate_access(NOW - timedelta(days=2, hours=1), False, NOW)
    assert status.has_access is True
    assert status.trial_days_remaining == 5
    assert status.account_age_days == 2


def test_exact_boundary_still_has_access():
    status = evaluate_access(NOW - timedelta(days=TRIAL_DAYS), False, NOW)
    assert status.has_access is True
    assert status.trial_days_remaining == 0


def test_one_second_past_trial_loses_access():
    status = evaluate_access(NOW - timedelta(days=TRIAL_DAYS, seconds=1), False, NOW)
    assert status.has_access is False
    assert status.trial_days_remaining == 0


def test_eight_day_old_account_loses_access():
    status = evaluate_access(NOW - timedelta(days=8), False, NOW)
    assert status.has_access is False
    assert status.trial_days_remaining == 0


def test_long_expired_trial_never_goes_negative():
    status = evaluate_access(NOW - timedelta(days=400), False, NOW)
    assert status.has_access is False
    assert status.trial_days_remaining == 0
    assert status.account_age_days == 400


@pytest.mark.parametrize("age", [timedelta(0), timedelta(days=3), timedelta(days=90)])
def test_premium_always_has_access_with_zero_trial_days(age):
    status = evaluate_access(NOW - age, True, NOW)
    assert status.has_access is True
    assert status.is_premium is True
    assert status.trial_days_remaining == 0


def test_naive_created_at_is_treated_as_utc():
    naive = (NOW - timedelta(days=1)).replace(tzinfo=None)
    status = evaluate_access(naive, False, NOW)
    assert status.trial_days_remaining == 6


def test_missing_created_at_is_rejected():
    with pytest.raises(ValueError):
        evaluate_access(None, False, NOW)


def test_response_uses_frontend_keys():
    body = evaluate_access(NOW - timedelta(days=1), False, NOW).to_response()
    assert body == {
        "isPremium": False,
        "hasAccess": True,
        "trialDaysRemaining": 6,
        "accountAge": 1,
    }
