from fixmeet.schemas.availability import (
    AvailabilityResponse,
    BusyPayload,
    BusyPeriod,
    BusyResponse,
    EventTypeAvailability,
    HostAvailabilityResponse,
    SlotDisplay,
)
from fixmeet.schemas.bookings import Booking, BookingCancel, BookingCreate, BookingStatus
from fixmeet.schemas.event_types import (
    EventTypeConfig,
    EventTypeCreate,
    RangeType,
    TimeRange,
    Weekday,
    WeeklySchedule,
)

__all__ = [
    "AvailabilityResponse",
    "Booking",
    "BookingCancel",
    "BookingCreate",
    "BookingStatus",
    "BusyPayload",
    "BusyPeriod",
    "BusyResponse",
    "EventTypeAvailability",
    "EventTypeConfig",
    "EventTypeCreate",
    "HostAvailabilityResponse",
    "RangeType",
    "SlotDisplay",
    "TimeRange",
    "Weekday",
    "WeeklySchedule",
]
