import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from fixmeet.exceptions import NotFoundError
from fixmeet.schemas import Booking, BookingCancel, BookingCreate, BookingStatus
from fixmeet.services.timeutils import local_date, require_timezone
from fixmeet.state.bookings import add_booking, cancel_booking, get_booking, list_bookings

router = APIRouter()

logger = logging.getLogger(__name__)


@router.post("", response_model=Booking, status_code=status.HTTP_201_CREATED)
def create_booking(payload: BookingCreate) -> Booking:
    """
    Record a confirmed booking. Slot exclusivity is not re-checked here.
    """
    booking = add_booking(payload)
    logger.info(
        "Recorded booking %s for host %s at %s",
        booking.id,
        booking.host_id,
        booking.start_time.isoformat(),
    )
    return booking


@router.get("", response_model=List[Booking])
def read_bookings(
    host_id: str = Query(..., alias="hostId"),
    booking_date: Optional[date] = Query(default=None, alias="date"),
    timezone: str = Query(default="UTC"),
    booking_status: Optional[BookingStatus] = Query(default=None, alias="status"),
) -> List[Booking]:
    try:
        tz = require_timezone(timezone)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    bookings = list_bookings(host_id, status=booking_status)
    if booking_date is not None:
        bookings = [b for b in bookings if local_date(b.start_time, tz) == booking_date]
    return bookings


@router.post("/{booking_id}/cancel", response_model=Booking)
def cancel(booking_id: str, payload: BookingCancel) -> Booking:
    try:
        booking = cancel_booking(booking_id, payload.reason)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc
    logger.info("Cancelled booking %s", booking_id)
    return booking


@router.get("/{booking_id}", response_model=Booking)
def read_booking(booking_id: str) -> Booking:
    booking = get_booking(booking_id)
    if booking is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    return booking
