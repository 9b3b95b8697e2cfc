from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from fixmeet.services.busy import BusyInterval
from fixmeet.services.intervals import Span, subtract_spans
from fixmeet.services.timeutils import add_minutes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CandidateSlot:
    start: datetime
    end: datetime


def free_ranges(open_ranges: Sequence[Span], busy: Sequence[BusyInterval]) -> List[Span]:
    """Open ranges minus the (sorted, coalesced) busy set."""
    blocks = [interval.span for interval in busy]
    free: List[Span] = []
    for open_range in open_ranges:
        free.extend(subtract_spans(open_range, blocks))
    return free


def generate_slots(
    open_ranges: Sequence[Span],
    busy: Sequence[BusyInterval],
    *,
    duration_minutes: int,
    slot_interval_minutes: int,
    min_notice_minutes: int,
    now: datetime,
    confirmed_count: int = 0,
    max_bookings_per_day: Optional[int] = None,
) -> List[CandidateSlot]:
    """
    Discretise free time into bookable slots.

    Starts step from each free sub-range's start by ``slot_interval_minutes``
    while the whole duration still fits. Slots may overlap one another when
    the interval is shorter than the duration.
    """
    if max_bookings_per_day is not None and confirmed_count >= max_bookings_per_day:
        logger.info(
            "Daily booking cap reached (%d/%d); no slots offered",
            confirmed_count,
            max_bookings_per_day,
        )
        return []

    earliest_start = add_minutes(now, min_notice_minutes)
    candidates: List[CandidateSlot] = []

    for free_start, free_end in free_ranges(open_ranges, busy):
        current = free_start
        while add_minutes(current, duration_minutes) <= free_end:
            if current >= earliest_start:
                candidates.append(CandidateSlot(current, add_minutes(current, duration_minutes)))
            current = add_minutes(current, slot_interval_minutes)

    candidates.sort(key=lambda slot: slot.start)
    logger.debug(
        "Generated %d slots from %d open ranges and %d busy intervals",
        len(candidates),
        len(open_ranges),
        len(busy),
    )
    return candidates
