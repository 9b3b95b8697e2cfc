from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class BusyPeriod(BaseModel):
    start: datetime = Field(..., description="ISO8601 start datetime")
    end: datetime = Field(..., description="ISO8601 end datetime")

    @model_validator(mode="after")
    def validate_order(self) -> "BusyPeriod":
        if self.end < self.start:
            raise ValueError("end must not be before start")
        return self


class BusyPayload(BaseModel):
    timezone: Optional[str] = Field(
        default="UTC",
        description="IANA timezone applied to timestamps without an offset",
    )
    periods: List[BusyPeriod] = Field(
        default_factory=list, description="Busy periods reported by the calendar"
    )


class BusyResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    host_id: str = Field(..., description="Host the busy periods belong to")
    timezone: str = Field(default="UTC", description="Timezone of the intervals")
    intervals: List[BusyPeriod] = Field(
        default_factory=list, description="Normalized, merged busy intervals"
    )


class SlotDisplay(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    start: datetime = Field(..., description="Slot start in the requester timezone")
    end: datetime = Field(..., description="Slot end in the requester timezone")
    start_display: str = Field(..., description="Local start, HH:MM")
    end_display: str = Field(..., description="Local end, HH:MM")


class AvailabilityResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    event_type_id: str
    date: date
    timezone: str = Field(..., description="Requester timezone used for display")
    slots: List[SlotDisplay] = Field(default_factory=list)
    count: int = Field(default=0, ge=0)
    external_calendar_checked: bool = Field(
        default=False,
        description="False when external calendar data was not consulted",
    )


class EventTypeAvailability(AvailabilityResponse):
    title: str
    duration_minutes: int


class HostAvailabilityResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    host_id: str
    date: date
    timezone: str
    event_types: List[EventTypeAvailability] = Field(default_factory=list)
    existing_bookings: int = Field(
        default=0, ge=0, description="Confirmed bookings starting on this date in the requested timezone"
    )
