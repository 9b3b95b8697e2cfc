import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from fixmeet.config import Settings
from fixmeet.exceptions import NotFoundError, RequiredDataUnavailable
from fixmeet.routes.dependencies import (
    bookings_provider_dependency,
    clock_dependency,
    external_provider_dependency,
    settings_dependency,
)
from fixmeet.schemas import AvailabilityResponse, EventTypeAvailability, HostAvailabilityResponse
from fixmeet.services.availability import (
    AvailabilityResult,
    BookingsProvider,
    Clock,
    ExternalBusyProvider,
    calculate_availability,
    calculate_host_availability,
    count_bookings_on_date,
)
from fixmeet.state.event_types import get_active_event_type, list_event_types

router = APIRouter()

logger = logging.getLogger(__name__)


def _to_response(result: AvailabilityResult) -> AvailabilityResponse:
    return AvailabilityResponse(
        event_type_id=result.event_type_id,
        date=result.date,
        timezone=result.timezone,
        slots=result.slots,
        count=result.count,
        external_calendar_checked=result.external_calendar_checked,
    )


@router.get(
    "/event-types/{event_type_id}/slots",
    response_model=AvailabilityResponse,
    status_code=status.HTTP_200_OK,
)
def get_event_type_slots(
    event_type_id: str,
    slot_date: date = Query(..., alias="date", description="Target date, YYYY-MM-DD"),
    timezone: str = Query(..., min_length=1, description="Requester IANA timezone"),
    settings: Settings = Depends(settings_dependency),
    bookings_provider: BookingsProvider = Depends(bookings_provider_dependency),
    external_provider: Optional[ExternalBusyProvider] = Depends(external_provider_dependency),
    clock: Clock = Depends(clock_dependency),
) -> AvailabilityResponse:
    """
    Bookable slots for one event type on a date, rendered in the requester's timezone.
    """
    try:
        config = get_active_event_type(event_type_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc

    try:
        result = calculate_availability(
            config,
            slot_date,
            timezone,
            bookings_provider=bookings_provider,
            external_provider=external_provider,
            clock=clock,
            external_timeout=settings.external_calendar_timeout_seconds,
        )
    except RequiredDataUnavailable as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    logger.info("Serving %d slots for event type %s on %s", result.count, event_type_id, slot_date)
    return _to_response(result)


@router.get(
    "/hosts/{host_id}",
    response_model=HostAvailabilityResponse,
    status_code=status.HTTP_200_OK,
)
def get_host_availability(
    host_id: str,
    slot_date: date = Query(..., alias="date", description="Target date, YYYY-MM-DD"),
    timezone: str = Query(..., min_length=1, description="Requester IANA timezone"),
    settings: Settings = Depends(settings_dependency),
    bookings_provider: BookingsProvider = Depends(bookings_provider_dependency),
    external_provider: Optional[ExternalBusyProvider] = Depends(external_provider_dependency),
    clock: Clock = Depends(clock_dependency),
) -> HostAvailabilityResponse:
    """
    Availability across every active event type of a host for one date.
    """
    configs = list_event_types(host_id, active_only=True)
    try:
        results = calculate_host_availability(
            configs,
            slot_date,
            timezone,
            bookings_provider=bookings_provider,
            external_provider=external_provider,
            clock=clock,
            external_timeout=settings.external_calendar_timeout_seconds,
            max_workers=settings.availability_max_workers,
        )
        existing_bookings = count_bookings_on_date(bookings_provider, host_id, slot_date, timezone)
    except RequiredDataUnavailable as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    event_types = [
        EventTypeAvailability(
            **_to_response(result).model_dump(),
            title=config.title,
            duration_minutes=config.duration_minutes,
        )
        for config, result in zip(configs, results)
    ]
    logger.info(
        "Serving availability for %d event types of host %s on %s",
        len(event_types),
        host_id,
        slot_date,
    )
    return HostAvailabilityResponse(
        host_id=host_id,
        date=slot_date,
        timezone=timezone,
        event_types=event_types,
        existing_bookings=existing_bookings,
    )
