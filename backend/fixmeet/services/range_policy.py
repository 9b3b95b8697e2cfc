from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional

from fixmeet.schemas.event_types import RangeType

logger = logging.getLogger(__name__)

DEFAULT_ROLLING_DAYS = 60


def is_date_bookable(
    today: date,
    target_date: date,
    range_type: RangeType,
    *,
    range_days: Optional[int] = None,
    range_start: Optional[date] = None,
    range_end: Optional[date] = None,
) -> bool:
    """
    Decide whether ``target_date`` falls inside the booking window.

    ``today`` is the host-local current date. Past dates are never bookable.
    """
    if target_date < today:
        return False

    if range_type is RangeType.INDEFINITE:
        return True

    if range_type is RangeType.ROLLING:
        days = DEFAULT_ROLLING_DAYS if range_days is None else range_days
        return target_date <= today + timedelta(days=days)

    if range_type is RangeType.RANGE:
        if range_start is not None and range_end is not None and range_start > range_end:
            logger.warning(
                "Booking range starts after it ends (%s > %s); no date is bookable",
                range_start,
                range_end,
            )
            return False
        if range_start is not None and target_date < range_start:
            return False
        if range_end is not None and target_date > range_end:
            return False
        return True

    logger.warning("Unknown range type %r; treating date as unbookable", range_type)
    return False
