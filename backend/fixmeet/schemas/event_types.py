import re
from datetime import date, time
from enum import Enum
from typing import Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_date(cls, value: date) -> "Weekday":
        return _WEEKDAYS_BY_INDEX[value.weekday()]


_WEEKDAYS_BY_INDEX = list(Weekday)


class RangeType(str, Enum):
    ROLLING = "rolling"
    RANGE = "range"
    INDEFINITE = "indefinite"


CLOCK_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


class TimeRange(BaseModel):
    start: time = Field(..., description="Local wall-clock start, HH:MM")
    end: time = Field(..., description="Local wall-clock end, HH:MM")

    @field_validator("start", "end", mode="before")
    @classmethod
    def validate_clock(cls, value):
        if isinstance(value, str):
            if not CLOCK_PATTERN.match(value):
                raise ValueError("Times must use the HH:MM format")
        elif isinstance(value, time) and (value.second or value.microsecond):
            raise ValueError("Times must fall on a whole minute")
        return value

    @model_validator(mode="after")
    def validate_order(self) -> "TimeRange":
        if self.end <= self.start:
            raise ValueError("End time must be after start time")
        return self

    @field_serializer("start", "end")
    def serialize_clock(self, value: time) -> str:
        return value.strftime("%H:%M")


WeeklySchedule = Dict[Weekday, List[TimeRange]]


class EventTypeBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    title: str = Field(..., description="Display title of the event type")
    slug: Optional[str] = Field(default=None, description="URL-safe identifier")
    duration_minutes: int = Field(default=30, description="Meeting length")
    weekly_schedule: WeeklySchedule = Field(
        default_factory=dict,
        description="Open local time ranges per weekday; missing days are closed",
    )
    buffer_before_minutes: int = Field(default=0)
    buffer_after_minutes: int = Field(default=0)
    min_notice_minutes: int = Field(default=60)
    slot_interval_minutes: int = Field(default=30)
    max_bookings_per_day: Optional[int] = Field(default=None)
    range_type: RangeType = Field(default=RangeType.ROLLING)
    range_days: Optional[int] = Field(default=60)
    range_start: Optional[date] = Field(default=None)
    range_end: Optional[date] = Field(default=None)
    host_timezone: str = Field(default="UTC", description="IANA timezone identifier")
    is_active: bool = Field(default=True)


class EventTypeCreate(EventTypeBase):
    """Validated input for registering an event type."""

    host_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(
        default=None, min_length=3, max_length=100, pattern=r"^[a-z0-9-]+$"
    )
    duration_minutes: int = Field(default=30, ge=5, le=480)
    buffer_before_minutes: int = Field(default=0, ge=0, le=120)
    buffer_after_minutes: int = Field(default=0, ge=0, le=120)
    min_notice_minutes: int = Field(default=60, ge=0, le=43200)
    slot_interval_minutes: int = Field(default=30, ge=5, le=60)
    max_bookings_per_day: Optional[int] = Field(default=None, ge=1, le=100)
    range_days: Optional[int] = Field(default=60, ge=1, le=365)

    @field_validator("host_timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone '{value}'") from exc
        return value

    @model_validator(mode="after")
    def validate_range(self) -> "EventTypeCreate":
        if (
            self.range_start is not None
            and self.range_end is not None
            and self.range_start > self.range_end
        ):
            raise ValueError("rangeStart must not be after rangeEnd")
        return self


class EventTypeConfig(EventTypeBase):
    """Stored event type; immutable for the duration of a calculation."""

    model_config = ConfigDict(
        populate_by_name=True, alias_generator=to_camel, frozen=True
    )

    id: str = Field(..., description="Event type identifier")
    host_id: str = Field(..., description="Owning host identifier")
