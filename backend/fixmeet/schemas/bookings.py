from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class BookingCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    host_id: str = Field(..., min_length=1)
    event_type_id: Optional[str] = Field(default=None)
    start_time: datetime = Field(..., description="ISO8601 start with offset")
    end_time: datetime = Field(..., description="ISO8601 end with offset")
    invitee_name: Optional[str] = Field(default=None, max_length=255)
    invitee_email: Optional[str] = Field(default=None, max_length=255)

    @model_validator(mode="after")
    def validate_times(self) -> "BookingCreate":
        if self.start_time.tzinfo is None or self.end_time.tzinfo is None:
            raise ValueError("Booking times must include timezone information")
        if self.end_time <= self.start_time:
            raise ValueError("endTime must be after startTime")
        return self


class Booking(BookingCreate):
    id: str
    status: BookingStatus = Field(default=BookingStatus.CONFIRMED)
    cancel_reason: Optional[str] = Field(default=None)


class BookingCancel(BaseModel):
    reason: Optional[str] = Field(default=None, max_length=500)
