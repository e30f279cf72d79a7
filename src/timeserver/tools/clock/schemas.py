"""
Pydantic schemas for clock tool responses.
"""
from pydantic import BaseModel, Field


class DateTimeInfo(BaseModel):
    """Snapshot of the current instant, as reported by get_datetime_info."""

    timestamp: int = Field(description="Milliseconds since the Unix epoch")
    iso: str = Field(description="ISO-8601 instant in UTC")
    local: str = Field(description="Locale rendering in the local timezone")
    utc: str = Field(description="RFC-1123 rendering in UTC")
    unix: int = Field(description="Seconds since the Unix epoch")
    year: int
    month: int = Field(description="1-indexed month")
    day: int
    hour: int = Field(description="Hour of day, 0-23")
    minute: int
    second: int
    dayOfWeek: str = Field(description="Full weekday name")
    timezone: str = Field(description="Identifier of the local timezone")
    timezoneSpecific: str | None = Field(default=None, description="Rendering in the requested timezone")
    requestedTimezone: str | None = Field(default=None)
    timezoneError: str | None = Field(default=None)
