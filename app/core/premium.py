from datetime import timedelta

# Free trial: every account gets full access for one week from creation
TRIAL_DAYS = 7
TRIAL_WINDOW = timedelta(days=TRIAL_DAYS)
ONE_DAY = timedelta(days=1)

# Marker the frontend uses to show an upgrade prompt instead of a generic error
PREMIUM_REQUIRED_CODE = "PREMIUM_REQUIRED"
PREMIUM_REQUIRED_MESSAGE = "Premium feature access required. Free trial has expired."

# Stripe subscription statuses that count as a paid subscription
PREMIUM_SUBSCRIPTION_STATUSES = ("active", "trialing")
