"""Time helpers and constants shared by the test modules."""

from datetime import date, datetime, time, timezone

from zoneinfo import ZoneInfo

HOST_TZ_NAME = "America/New_York"
HOST_TZ = ZoneInfo(HOST_TZ_NAME)
MONDAY = date(2025, 6, 2)


def at(day: date, hour: int, minute: int = 0, tz: ZoneInfo = HOST_TZ) -> datetime:
    """UTC instant for a wall-clock time on ``day`` in ``tz``."""
    return datetime.combine(day, time(hour, minute), tzinfo=tz).astimezone(timezone.utc)


def span(day: date, start: tuple, end: tuple, tz: ZoneInfo = HOST_TZ):
    return (at(day, *start, tz=tz), at(day, *end, tz=tz))


def local_starts(slots, tz: ZoneInfo = HOST_TZ):
    return [slot.start.astimezone(tz).strftime("%H:%M") for slot in slots]


def no_bookings(host_id, day, tz):
    return []
