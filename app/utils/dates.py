"""
Date helpers shared by the streak, analytics and premium code.
Calendar days are exchanged as YYYY-MM-DD strings everywhere.
"""
from datetime import date, datetime, timezone

DATE_KEY_FORMAT = "%Y-%m-%d"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes (e.g. read back from SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_date_key(value: date) -> str:
    return value.strftime(DATE_KEY_FORMAT)


def parse_date_key(value: str) -> date:
    return datetime.strptime(value, DATE_KEY_FORMAT).date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp or plain date coming from a query string."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return ensure_aware(datetime.fromisoformat(value))
