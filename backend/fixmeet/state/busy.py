from datetime import datetime
from threading import Lock
from typing import Dict, List, Optional

from fixmeet.schemas import BusyResponse
from fixmeet.services.calendar import spans_within
from fixmeet.services.intervals import Span

_busy_responses: Dict[str, BusyResponse] = {}
_lock = Lock()


def set_busy_response(response: BusyResponse) -> None:
    with _lock:
        _busy_responses[response.host_id] = response


def get_busy_response(host_id: str) -> Optional[BusyResponse]:
    with _lock:
        return _busy_responses.get(host_id)


def clear_busy_response(host_id: Optional[str] = None) -> None:
    with _lock:
        if host_id is None:
            _busy_responses.clear()
        else:
            _busy_responses.pop(host_id, None)


def get_external_busy_intervals(host_id: str, start: datetime, end: datetime) -> Optional[List[Span]]:
    """Busy periods for ``[start, end)``, or ``None`` when no calendar is connected."""
    response = get_busy_response(host_id)
    if response is None:
        return None
    return spans_within(response, start, end)
