from __future__ import annotations

import logging
from datetime import date, tzinfo
from typing import List, Mapping, Sequence

from fixmeet.schemas.event_types import TimeRange, Weekday
from fixmeet.services.intervals import Span, merge_spans
from fixmeet.services.timeutils import local_instant

logger = logging.getLogger(__name__)


def resolve_open_ranges(
    target_date: date,
    weekly_schedule: Mapping[Weekday, Sequence[TimeRange]],
    tz: tzinfo,
) -> List[Span]:
    """
    Open ranges for ``target_date`` as UTC instants.

    The weekday's local ranges are anchored to the date in the host zone and
    unioned; a weekday without ranges yields an empty list.
    """
    weekday = Weekday.from_date(target_date)
    day_ranges = weekly_schedule.get(weekday) or []
    if not day_ranges:
        logger.debug("No schedule configured for %s (%s)", weekday.value, target_date)
        return []

    spans = [
        (
            local_instant(target_date, time_range.start, tz),
            local_instant(target_date, time_range.end, tz),
        )
        for time_range in day_ranges
    ]
    # A range swallowed by a DST gap can collapse to zero length.
    spans = [(start, end) for start, end in spans if end > start]
    merged = merge_spans(spans)
    logger.debug(
        "Resolved %d configured ranges into %d open ranges for %s",
        len(day_ranges),
        len(merged),
        target_date,
    )
    return merged
