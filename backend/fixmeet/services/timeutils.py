"""
Timezone helpers shared by the availability engine.

Every instant handed between engine stages is an aware UTC datetime. Local
wall-clock values only exist at the edges: when a weekly schedule is
materialised for a date and when slots are rendered for a requester.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone as datetime_timezone, tzinfo
from typing import Tuple

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

UTC = datetime_timezone.utc


def get_timezone(tz_name: str) -> tzinfo:
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone '%s', falling back to UTC", tz_name)
    except Exception:
        logger.exception("Unexpected error while loading timezone '%s'", tz_name)
    try:
        return ZoneInfo("UTC")
    except Exception:
        logger.warning("UTC timezone data unavailable, using datetime.timezone.utc fallback")
        return UTC


def require_timezone(tz_name: str) -> ZoneInfo:
    """Load an IANA zone, raising ``ValueError`` instead of falling back."""
    if not tz_name:
        raise ValueError("Timezone must be a non-empty IANA identifier.")
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone '{tz_name}'.") from exc


def to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        raise ValueError(f"Expected an aware datetime, got naive {value.isoformat()}")
    return value.astimezone(UTC)


def local_instant(day: date, clock: time, tz: tzinfo) -> datetime:
    """
    Resolve a wall-clock time on ``day`` in ``tz`` to a UTC instant.

    Times falling in a spring-forward gap resolve with ``fold=0`` and
    ambiguous fall-back times pick the first occurrence.
    """
    local = datetime.combine(day, clock).replace(tzinfo=tz, fold=0)
    return local.astimezone(UTC)


def local_day_bounds(day: date, tz: tzinfo) -> Tuple[datetime, datetime]:
    """UTC instants for local midnight of ``day`` and of the following day."""
    start = local_instant(day, time.min, tz)
    end = local_instant(day + timedelta(days=1), time.min, tz)
    return start, end


def local_date(instant: datetime, tz: tzinfo) -> date:
    return to_utc(instant).astimezone(tz).date()


def add_minutes(instant: datetime, minutes: int) -> datetime:
    # UTC arithmetic is absolute; wall-clock shifts never leak in here.
    return instant + timedelta(minutes=minutes)


def format_clock(value: datetime) -> str:
    return value.strftime("%H:%M")
