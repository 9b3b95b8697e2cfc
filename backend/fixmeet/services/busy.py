"""
Busy interval aggregation.

Internal bookings are widened by the host's buffers; external calendar
periods are taken as reported. Both are coalesced into one sorted list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple

from fixmeet.services.timeutils import add_minutes, to_utc

logger = logging.getLogger(__name__)

SOURCE_INTERNAL_BOOKING = "internal-booking"
SOURCE_EXTERNAL_CALENDAR = "external-calendar"


@dataclass(frozen=True)
class BusyInterval:
    start: datetime
    end: datetime
    source: str = SOURCE_INTERNAL_BOOKING

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(
                f"Busy interval ends before it starts: {self.start.isoformat()} > {self.end.isoformat()}"
            )

    @property
    def span(self) -> Tuple[datetime, datetime]:
        return (self.start, self.end)


def widen_booking(
    start: datetime,
    end: datetime,
    buffer_before_minutes: int,
    buffer_after_minutes: int,
) -> BusyInterval:
    return BusyInterval(
        start=add_minutes(to_utc(start), -buffer_before_minutes),
        end=add_minutes(to_utc(end), buffer_after_minutes),
        source=SOURCE_INTERNAL_BOOKING,
    )


def merge_busy_intervals(intervals: Iterable[BusyInterval]) -> List[BusyInterval]:
    sorted_intervals = sorted(intervals, key=lambda interval: (interval.start, interval.end))

    if not sorted_intervals:
        logger.debug("No intervals provided for merging")
        return []

    merged: List[BusyInterval] = [sorted_intervals[0]]
    for current in sorted_intervals[1:]:
        last = merged[-1]
        if current.start <= last.end:
            if current.end > last.end:
                logger.debug(
                    "Merging intervals (%s, %s) and (%s, %s)",
                    last.start.isoformat(),
                    last.end.isoformat(),
                    current.start.isoformat(),
                    current.end.isoformat(),
                )
                merged[-1] = BusyInterval(start=last.start, end=current.end, source=last.source)
        else:
            merged.append(current)

    return merged


def build_busy_intervals(
    bookings: Sequence[Tuple[datetime, datetime]],
    external: Optional[Sequence[Tuple[datetime, datetime]]] = None,
    *,
    buffer_before_minutes: int = 0,
    buffer_after_minutes: int = 0,
) -> List[BusyInterval]:
    """
    Coalesced busy set for one calculation.

    ``external`` is ``None`` when external calendar data is unavailable, in
    which case only internal bookings obstruct.
    """
    intervals = [
        widen_booking(start, end, buffer_before_minutes, buffer_after_minutes)
        for start, end in bookings
    ]
    if external:
        intervals.extend(
            BusyInterval(start=to_utc(start), end=to_utc(end), source=SOURCE_EXTERNAL_CALENDAR)
            for start, end in external
        )

    merged = merge_busy_intervals(intervals)
    logger.debug(
        "Aggregated %d bookings and %d external periods into %d busy intervals",
        len(bookings),
        len(external or []),
        len(merged),
    )
    return merged
