# Timer defaults (seconds), used for new UserSettings rows and the countdown timer
DEFAULT_SESSION_DURATION = 1500  # 25 minutes
DEFAULT_BREAK_DURATION = 300  # 5 minutes
DEFAULT_LONG_BREAK_DURATION = 900  # 15 minutes
DEFAULT_SESSIONS_UNTIL_LONG_BREAK = 4

# Focus sessions per day needed for a streak day to count
DEFAULT_DAILY_SESSION_GOAL = 5

# Reference time zone for calendar-day streak keys
DEFAULT_TIMEZONE = "UTC"

SESSION_TYPES = ("focus", "break", "long_break")

# Analytics summary windows; "1d" is used by the dashboard streak card
ANALYTICS_PERIOD_DAYS = {
    "1d": 1,
    "7d": 7,
    "30d": 30,
    "90d": 90,
}
DEFAULT_ANALYTICS_PERIOD = "7d"

DEFAULT_SESSION_HISTORY_LIMIT = 10
DEFAULT_STREAK_HISTORY_LIMIT = 30
DEFAULT_CHAT_HISTORY_LIMIT = 50
SCREEN_USAGE_STATS_WINDOW = 10
