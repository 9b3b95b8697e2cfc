"""
Availability calculation.

``calculate_slots`` is the pure stage: schedule resolution, range gating,
busy aggregation and slot generation on data already in hand.
``calculate_availability`` wraps it with the two collaborator fetches
(confirmed bookings, required; external busy periods, best-effort) and the
presentation step.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Callable, List, Optional, Sequence

from zoneinfo import ZoneInfo

from fixmeet.exceptions import ConfigurationError, RequiredDataUnavailable, UpstreamUnavailable
from fixmeet.schemas.availability import SlotDisplay
from fixmeet.schemas.event_types import EventTypeConfig
from fixmeet.services.busy import build_busy_intervals
from fixmeet.services.intervals import Span
from fixmeet.services.presenter import present_slots
from fixmeet.services.range_policy import is_date_bookable
from fixmeet.services.schedule import resolve_open_ranges
from fixmeet.services.slots import CandidateSlot, generate_slots
from fixmeet.services.timeutils import UTC, local_date, local_day_bounds, require_timezone, to_utc

logger = logging.getLogger(__name__)

# Confirmed bookings intersecting the host-local date padded by one day each side.
BookingsProvider = Callable[[str, date, tzinfo], Sequence[Span]]
ExternalBusyProvider = Callable[[str, datetime, datetime], Optional[Sequence[Span]]]
Clock = Callable[[], datetime]

DEFAULT_EXTERNAL_TIMEOUT_SECONDS = 3.0


def utc_now() -> datetime:
    return datetime.now(UTC)


def bookings_starting_on(bookings: Sequence[Span], target_date: date, tz: tzinfo) -> int:
    """Number of bookings whose start falls on ``target_date`` in ``tz``."""
    return sum(1 for start, _ in bookings if local_date(start, tz) == target_date)


@dataclass(frozen=True)
class AvailabilityResult:
    event_type_id: str
    date: date
    timezone: str
    slots: List[SlotDisplay] = field(default_factory=list)
    external_calendar_checked: bool = False
    confirmed_bookings: int = 0

    @property
    def count(self) -> int:
        return len(self.slots)


def validate_event_type(config: EventTypeConfig) -> ZoneInfo:
    """Check the settings the engine relies on and return the host zone."""
    problems: List[str] = []
    if config.duration_minutes <= 0:
        problems.append("duration must be positive")
    if config.slot_interval_minutes <= 0:
        problems.append("slot interval must be positive")
    if config.buffer_before_minutes < 0 or config.buffer_after_minutes < 0:
        problems.append("buffers must not be negative")
    if config.min_notice_minutes < 0:
        problems.append("minimum notice must not be negative")
    if config.max_bookings_per_day is not None and config.max_bookings_per_day <= 0:
        problems.append("daily booking cap must be positive")
    if (
        config.range_start is not None
        and config.range_end is not None
        and config.range_start > config.range_end
    ):
        problems.append("booking range starts after it ends")

    try:
        host_tz = require_timezone(config.host_timezone)
    except ValueError as exc:
        problems.append(str(exc))
        host_tz = None

    if problems:
        raise ConfigurationError(
            f"Event type {config.id} is misconfigured: {'; '.join(problems)}",
            details={"event_type_id": config.id, "problems": problems},
        )
    return host_tz


def is_bookable_on(config: EventTypeConfig, target_date: date, now: datetime, host_tz: tzinfo) -> bool:
    return is_date_bookable(
        local_date(now, host_tz),
        target_date,
        config.range_type,
        range_days=config.range_days,
        range_start=config.range_start,
        range_end=config.range_end,
    )


def calculate_slots(
    config: EventTypeConfig,
    target_date: date,
    *,
    bookings: Sequence[Span],
    external_busy: Optional[Sequence[Span]] = None,
    now: datetime,
) -> List[CandidateSlot]:
    """
    Bookable slots for ``target_date`` as UTC instants.

    Pure: identical inputs (including ``now``) give identical output.
    Raises ``ConfigurationError`` for an unusable event type.
    """
    host_tz = validate_event_type(config)
    now = to_utc(now)

    if not is_bookable_on(config, target_date, now, host_tz):
        logger.debug("Date %s outside booking window for event type %s", target_date, config.id)
        return []

    open_ranges = resolve_open_ranges(target_date, config.weekly_schedule, host_tz)
    if not open_ranges:
        return []

    busy = build_busy_intervals(
        bookings,
        external_busy,
        buffer_before_minutes=config.buffer_before_minutes,
        buffer_after_minutes=config.buffer_after_minutes,
    )
    return generate_slots(
        open_ranges,
        busy,
        duration_minutes=config.duration_minutes,
        slot_interval_minutes=config.slot_interval_minutes,
        min_notice_minutes=config.min_notice_minutes,
        now=now,
        confirmed_count=bookings_starting_on(bookings, target_date, host_tz),
        max_bookings_per_day=config.max_bookings_per_day,
    )


def _fetch_bookings(
    provider: BookingsProvider, host_id: str, target_date: date, host_tz: tzinfo
) -> List[Span]:
    try:
        return list(provider(host_id, target_date, host_tz))
    except RequiredDataUnavailable:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.exception("Confirmed bookings lookup failed for host %s on %s", host_id, target_date)
        raise RequiredDataUnavailable(
            "Confirmed bookings could not be retrieved.",
            details={"host_id": host_id, "date": target_date.isoformat()},
        ) from exc


def _fetch_external_busy(
    provider: ExternalBusyProvider,
    host_id: str,
    window: Span,
    timeout: float,
) -> Optional[List[Span]]:
    # One worker per lookup: a hung provider call keeps only its own thread.
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="external-busy")
    future = executor.submit(provider, host_id, window[0], window[1])
    try:
        periods = future.result(timeout=timeout)
    except FutureTimeoutError:
        logger.warning(
            "External calendar lookup for host %s timed out after %.1fs; continuing without it",
            host_id,
            timeout,
        )
        return None
    except UpstreamUnavailable as exc:
        logger.warning(
            "External calendar unavailable for host %s: %s; continuing without it",
            host_id,
            exc.message,
        )
        return None
    except Exception:  # noqa: BLE001
        logger.exception("External calendar lookup failed for host %s; continuing without it", host_id)
        return None
    finally:
        executor.shutdown(wait=False)

    if periods is None:
        logger.debug("Host %s has no external calendar connected", host_id)
        return None
    return list(periods)


def calculate_availability(
    config: EventTypeConfig,
    target_date: date,
    requester_timezone: str,
    *,
    bookings_provider: BookingsProvider,
    external_provider: Optional[ExternalBusyProvider] = None,
    clock: Clock = utc_now,
    external_timeout: float = DEFAULT_EXTERNAL_TIMEOUT_SECONDS,
) -> AvailabilityResult:
    """
    Fetch obstructions for one event type and compute its display slots.

    Raises ``ValueError`` for an unknown requester timezone and
    ``RequiredDataUnavailable`` when bookings cannot be read. A misconfigured
    event type yields an empty result.
    """
    requester_tz = require_timezone(requester_timezone)
    empty = AvailabilityResult(
        event_type_id=config.id, date=target_date, timezone=requester_timezone
    )

    try:
        host_tz = validate_event_type(config)
    except ConfigurationError as exc:
        logger.warning("Skipping availability: %s", exc.message)
        return empty

    now = to_utc(clock())
    if not is_bookable_on(config, target_date, now, host_tz):
        logger.info("Date %s is outside the booking window of event type %s", target_date, config.id)
        return empty
    if not resolve_open_ranges(target_date, config.weekly_schedule, host_tz):
        logger.info("Event type %s has no schedule on %s", config.id, target_date)
        return empty

    bookings = _fetch_bookings(bookings_provider, config.host_id, target_date, host_tz)

    external_busy: Optional[List[Span]] = None
    if external_provider is not None:
        external_busy = _fetch_external_busy(
            external_provider,
            config.host_id,
            local_day_bounds(target_date, host_tz),
            external_timeout,
        )

    slots = calculate_slots(
        config,
        target_date,
        bookings=bookings,
        external_busy=external_busy,
        now=now,
    )
    rendered = present_slots(slots, requester_tz)
    logger.info(
        "Event type %s on %s: %d slots (%d bookings, external calendar %s)",
        config.id,
        target_date,
        len(rendered),
        len(bookings),
        "checked" if external_busy is not None else "not checked",
    )
    return AvailabilityResult(
        event_type_id=config.id,
        date=target_date,
        timezone=requester_timezone,
        slots=rendered,
        external_calendar_checked=external_busy is not None,
        confirmed_bookings=bookings_starting_on(bookings, target_date, host_tz),
    )


def calculate_host_availability(
    configs: Sequence[EventTypeConfig],
    target_date: date,
    requester_timezone: str,
    *,
    bookings_provider: BookingsProvider,
    external_provider: Optional[ExternalBusyProvider] = None,
    clock: Clock = utc_now,
    external_timeout: float = DEFAULT_EXTERNAL_TIMEOUT_SECONDS,
    max_workers: int = 4,
) -> List[AvailabilityResult]:
    """Evaluate several event types independently; results keep input order."""
    require_timezone(requester_timezone)
    if not configs:
        return []

    # One "now" for every event type in the request.
    now = clock()

    def _calculate(config: EventTypeConfig) -> AvailabilityResult:
        return calculate_availability(
            config,
            target_date,
            requester_timezone,
            bookings_provider=bookings_provider,
            external_provider=external_provider,
            clock=lambda: now,
            external_timeout=external_timeout,
        )

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(configs)))) as executor:
        futures = [executor.submit(_calculate, config) for config in configs]
        return [future.result() for future in futures]


def count_bookings_on_date(
    bookings_provider: BookingsProvider,
    host_id: str,
    target_date: date,
    tz_name: str,
) -> int:
    """Confirmed bookings of ``host_id`` starting on ``target_date`` in ``tz_name``."""
    tz = require_timezone(tz_name)
    bookings = _fetch_bookings(bookings_provider, host_id, target_date, tz)
    return bookings_starting_on(bookings, target_date, tz)
