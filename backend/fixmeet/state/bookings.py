from datetime import date, timedelta, tzinfo
from threading import Lock
from typing import Dict, List, Optional
from uuid import uuid4

from fixmeet.exceptions import NotFoundError
from fixmeet.schemas import Booking, BookingCreate, BookingStatus
from fixmeet.services.intervals import Span, overlaps
from fixmeet.services.timeutils import local_day_bounds, to_utc

BOOKING_WINDOW_PADDING = timedelta(days=1)

_bookings: Dict[str, Booking] = {}
_lock = Lock()


def add_booking(payload: BookingCreate) -> Booking:
    booking = Booking(id=str(uuid4()), **payload.model_dump())
    with _lock:
        _bookings[booking.id] = booking
    return booking


def get_booking(booking_id: str) -> Optional[Booking]:
    with _lock:
        return _bookings.get(booking_id)


def cancel_booking(booking_id: str, reason: Optional[str] = None) -> Booking:
    with _lock:
        booking = _bookings.get(booking_id)
        if booking is None:
            raise NotFoundError("Booking not found", details={"booking_id": booking_id})
        cancelled = booking.model_copy(
            update={"status": BookingStatus.CANCELLED, "cancel_reason": reason}
        )
        _bookings[booking_id] = cancelled
    return cancelled


def list_bookings(host_id: str, *, status: Optional[BookingStatus] = None) -> List[Booking]:
    with _lock:
        bookings = [booking for booking in _bookings.values() if booking.host_id == host_id]
    if status is not None:
        bookings = [booking for booking in bookings if booking.status == status]
    return sorted(bookings, key=lambda booking: booking.start_time)


def get_confirmed_bookings(host_id: str, day: date, tz: tzinfo) -> List[Span]:
    """
    Confirmed bookings intersecting ``day`` in ``tz``, as sorted UTC spans.

    The window is padded by one day on each side, so bookings that cross
    midnight and neighbours within buffer reach are included.
    """
    day_start, day_end = local_day_bounds(day, tz)
    window_start = day_start - BOOKING_WINDOW_PADDING
    window_end = day_end + BOOKING_WINDOW_PADDING
    spans = []
    for booking in list_bookings(host_id, status=BookingStatus.CONFIRMED):
        start, end = to_utc(booking.start_time), to_utc(booking.end_time)
        if overlaps(start, end, window_start, window_end):
            spans.append((start, end))
    return spans


def clear_bookings() -> None:
    with _lock:
        _bookings.clear()
