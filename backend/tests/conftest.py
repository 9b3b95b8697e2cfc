"""Shared fixtures for the availability service tests."""

from datetime import time

import pytest

from fixmeet.schemas import EventTypeConfig, RangeType, TimeRange, Weekday
from fixmeet.state.bookings import clear_bookings
from fixmeet.state.busy import clear_busy_response
from fixmeet.state.event_types import clear_event_types
from helpers import HOST_TZ_NAME, MONDAY, at


@pytest.fixture
def make_config():
    """Factory for event types: Monday 09:00-12:00 and 13:00-17:00, 30-minute slots."""

    def _make(**overrides) -> EventTypeConfig:
        data = {
            "id": "evt-intro",
            "host_id": "host-1",
            "title": "Intro call",
            "slug": "intro-call",
            "duration_minutes": 30,
            "slot_interval_minutes": 30,
            "buffer_before_minutes": 0,
            "buffer_after_minutes": 0,
            "min_notice_minutes": 0,
            "range_type": RangeType.INDEFINITE,
            "host_timezone": HOST_TZ_NAME,
            "weekly_schedule": {
                Weekday.MONDAY: [
                    TimeRange(start=time(9, 0), end=time(12, 0)),
                    TimeRange(start=time(13, 0), end=time(17, 0)),
                ],
            },
        }
        data.update(overrides)
        return EventTypeConfig(**data)

    return _make


@pytest.fixture
def monday_morning():
    """Current instant: 08:00 host time on the target Monday."""
    return at(MONDAY, 8, 0)


@pytest.fixture(autouse=True)
def clear_state():
    clear_event_types()
    clear_bookings()
    clear_busy_response()
    yield
    clear_event_types()
    clear_bookings()
    clear_busy_response()
