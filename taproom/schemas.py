from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ErrorCode(str, Enum):
    invalid_input = "INVALID_INPUT"
    invalid_timezone = "INVALID_TIMEZONE"
    invalid_time_window = "INVALID_TIME_WINDOW"
    setting_not_found = "SETTING_NOT_FOUND"
    user_not_found = "USER_NOT_FOUND"
    validation_error = "VALIDATION_ERROR"
    db_error = "DB_ERROR"


class StatusTag(str, Enum):
    """Badge values rendered by presentation code. The literal strings are a contract."""

    scheduled = "scheduled"
    active = "active"
    inactive = "inactive"
    past = "past"
    expired = "expired"
    published = "published"
    draft = "draft"
    available = "available"
    unavailable = "unavailable"


class HealthStatus(BaseModel):
    status: str
    latency_ms: float | None = None
    last_error: str | None = None


# --- Settings ---

class SettingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    key: str
    value: str
    description: str | None = None
    updated_at: datetime | None = None


class SettingIn(BaseModel):
    value: str = Field(min_length=1, max_length=10000)
    description: str | None = Field(default=None, max_length=1000)


# --- Company clock ---

class ClockOut(BaseModel):
    timezone: str
    now: datetime
    local_now: str = Field(description="Wall clock in the company timezone, YYYY-MM-DDTHH:mm")
    today: str
    tomorrow: str
    weekday: str


class DateTimeConvertIn(BaseModel):
    """Exactly one of the two fields must be given."""

    local: str | None = Field(default=None, description="datetime-local value, YYYY-MM-DDTHH:mm")
    instant: datetime | None = None


class DateTimeConvertOut(BaseModel):
    timezone: str
    local: str
    instant: datetime
    resolution: str


class DateConvertIn(BaseModel):
    date: str | None = Field(default=None, description="Civil date, YYYY-MM-DD")
    instant: datetime | None = None


class DateConvertOut(BaseModel):
    timezone: str
    date: str
    instant: datetime


# --- Status classification ---

class TemporalEntityIn(BaseModel):
    """Any record exposing some of the lifecycle fields. Omitted keys are 'absent'."""

    model_config = ConfigDict(populate_by_name=True)

    is_active: bool | None = Field(default=None, alias="isActive")
    is_available: bool | None = Field(default=None, alias="isAvailable")
    is_published: bool | None = Field(default=None, alias="isPublished")
    publish_at: datetime | None = Field(default=None, alias="publishAt")
    expires_at: datetime | None = Field(default=None, alias="expiresAt")
    start_date_time: datetime | None = Field(default=None, alias="startDateTime")
    end_date_time: datetime | None = Field(default=None, alias="endDateTime")
    start_date: str | None = Field(default=None, alias="startDate", description="YYYY-MM-DD or stored instant")
    end_date: str | None = Field(default=None, alias="endDate", description="YYYY-MM-DD or stored instant")


class StatusOut(BaseModel):
    timezone: str
    today: str
    statuses: list[StatusTag]

