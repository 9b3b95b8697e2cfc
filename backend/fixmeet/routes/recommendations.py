import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from google import genai

from fixmeet.config import API_KEY_ENV_KEYS, Settings
from fixmeet.exceptions import NotFoundError, RequiredDataUnavailable
from fixmeet.routes.dependencies import (
    bookings_provider_dependency,
    clock_dependency,
    external_provider_dependency,
    settings_dependency,
)
from fixmeet.schemas.recommendations import (
    RecommendationRequest,
    RecommendationResponse,
)
from fixmeet.services.availability import (
    BookingsProvider,
    Clock,
    ExternalBusyProvider,
    calculate_availability,
)
from fixmeet.services.gemini import generate_recommendation
from fixmeet.state.event_types import get_active_event_type

logger = logging.getLogger(__name__)

router = APIRouter()


@lru_cache(maxsize=4)
def _build_client(api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)


def gemini_client_dependency(
    settings: Settings = Depends(settings_dependency),
) -> Optional[genai.Client]:
    if not settings.gemini_api_key:
        logger.warning(
            "Gemini API key not configured. Set one of %s to enable recommendations.",
            ", ".join(API_KEY_ENV_KEYS),
        )
        return None
    return _build_client(settings.gemini_api_key)


@router.post(
    "",
    response_model=RecommendationResponse,
    status_code=status.HTTP_200_OK,
)
def create_recommendation(
    payload: RecommendationRequest,
    settings: Settings = Depends(settings_dependency),
    client: Optional[genai.Client] = Depends(gemini_client_dependency),
    bookings_provider: BookingsProvider = Depends(bookings_provider_dependency),
    external_provider: Optional[ExternalBusyProvider] = Depends(external_provider_dependency),
    clock: Clock = Depends(clock_dependency),
) -> RecommendationResponse:
    try:
        config = get_active_event_type(payload.event_type_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc

    try:
        availability = calculate_availability(
            config,
            payload.slot_date,
            payload.timezone or config.host_timezone,
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

    if availability.count == 0:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No open slots on the requested date to recommend.",
        )

    if client is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Gemini API key is not configured.",
        )

    try:
        recommendation = generate_recommendation(
            client,
            payload,
            availability,
            model_name=settings.gemini_model,
        )
    except ValueError as exc:
        logger.warning("Unable to generate recommendation: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("Gemini recommendation request failed.")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Gemini service failed to return recommendations.",
        ) from exc

    return recommendation
