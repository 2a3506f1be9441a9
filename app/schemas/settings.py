from typing import Literal, Optional
from datetime import datetime
from pydantic import Field, field_validator
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from app.schemas.base import CamelModel


class UserSettingsUpdate(CamelModel):
    theme: Optional[Literal["light", "dark"]] = None
    haptic_feedback: Optional[bool] = None
    daily_reminders: Optional[bool] = None
    reminder_time: Optional[str] = Field(default=None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    sound_volume: Optional[float] = Field(default=None, ge=0, le=1)
    default_session_duration: Optional[int] = Field(default=None, gt=0)
    default_break_duration: Optional[int] = Field(default=None, gt=0)
    sessions_until_long_break: Optional[int] = Field(default=None, gt=0)
    long_break_duration: Optional[int] = Field(default=None, gt=0)
    daily_session_goal: Optional[int] = Field(default=None, gt=0)
    timezone: Optional[str] = None

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value):
        if value is None or value == "UTC":
            return value
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone: {value}")
        return value


class UserSettingsResponse(CamelModel):
    id: str
    user_id: str
    theme: str
    haptic_feedback: bool
    daily_reminders: bool
    reminder_time: str
    sound_volume: float
    default_session_duration: int
    default_break_duration: int
    sessions_until_long_break: int
    long_break_duration: int
    daily_session_goal: int
    timezone: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
