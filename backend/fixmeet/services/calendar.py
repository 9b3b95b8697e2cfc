from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import List

from fixmeet.schemas import BusyPayload, BusyPeriod, BusyResponse
from fixmeet.services.intervals import Span, merge_spans, overlaps
from fixmeet.services.timeutils import get_timezone, to_utc

logger = logging.getLogger(__name__)


def _as_utc(value: datetime, tz: tzinfo) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=tz)
    return to_utc(value)


def period_to_span(period: BusyPeriod, tz: tzinfo) -> Span:
    start_dt = _as_utc(period.start, tz)
    end_dt = _as_utc(period.end, tz)
    logger.debug("Busy period spans %s to %s", start_dt.isoformat(), end_dt.isoformat())
    return (start_dt, end_dt)


def normalize_busy_payload(host_id: str, payload: BusyPayload) -> BusyResponse:
    """
    Normalize externally reported busy periods into merged UTC intervals.

    Timestamps without an offset are read in the payload's timezone.
    """
    tz_name = payload.timezone or "UTC"
    logger.info("Normalizing payload for host %s in timezone %s", host_id, tz_name)
    tz = get_timezone(tz_name)
    spans = [period_to_span(period, tz) for period in payload.periods]
    merged = merge_spans(spans)
    logger.info(
        "Normalized %d raw periods into %d merged intervals",
        len(spans),
        len(merged),
    )
    return BusyResponse(
        host_id=host_id,
        timezone="UTC",
        intervals=[BusyPeriod(start=start, end=end) for start, end in merged],
    )


def spans_within(response: BusyResponse, start: datetime, end: datetime) -> List[Span]:
    """Stored intervals that intersect ``[start, end)``."""
    return [
        (interval.start, interval.end)
        for interval in response.intervals
        if overlaps(interval.start, interval.end, start, end)
    ]
