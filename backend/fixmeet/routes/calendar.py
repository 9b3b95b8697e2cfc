import logging
from fastapi import APIRouter, HTTPException, status

from fixmeet.schemas import BusyPayload, BusyResponse
from fixmeet.services.calendar import normalize_busy_payload
from fixmeet.state.busy import clear_busy_response, get_busy_response, set_busy_response

router = APIRouter()

logger = logging.getLogger(__name__)


@router.post("/{host_id}/busy", response_model=BusyResponse, status_code=status.HTTP_200_OK)
def post_busy_periods(host_id: str, payload: BusyPayload) -> BusyResponse:
    """
    Accept a host's external calendar busy periods and normalize them into UTC intervals.
    """
    logger.info("Received busy payload with %d periods for host %s", len(payload.periods), host_id)
    normalized = normalize_busy_payload(host_id, payload)
    set_busy_response(normalized)
    logger.info("Busy payload normalized to %d intervals", len(normalized.intervals))
    return normalized


@router.get("/{host_id}/busy", response_model=BusyResponse)
def get_busy_periods(host_id: str) -> BusyResponse:
    """
    Retrieve the last known normalized busy intervals for a host.
    """
    latest_busy_response = get_busy_response(host_id)
    if latest_busy_response is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No external calendar is connected for this host.",
        )
    logger.info("Serving latest busy response with %d intervals", len(latest_busy_response.intervals))
    return latest_busy_response


@router.delete("/{host_id}/busy", status_code=status.HTTP_204_NO_CONTENT)
def delete_busy_periods(host_id: str) -> None:
    """
    Disconnect the host's external calendar data.
    """
    clear_busy_response(host_id)
