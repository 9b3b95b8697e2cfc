"""
Collaborator wiring for the routes.

Each dependency returns the callable the availability engine consumes, so
tests can swap any of them through ``app.dependency_overrides``.
"""

from typing import Optional

from fixmeet.config import Settings, get_settings
from fixmeet.services.availability import BookingsProvider, Clock, ExternalBusyProvider, utc_now
from fixmeet.state.bookings import get_confirmed_bookings
from fixmeet.state.busy import get_external_busy_intervals


def settings_dependency() -> Settings:
    return get_settings()


def bookings_provider_dependency() -> BookingsProvider:
    return get_confirmed_bookings


def external_provider_dependency() -> Optional[ExternalBusyProvider]:
    if not get_settings().check_external_calendar:
        return None
    return get_external_busy_intervals


def clock_dependency() -> Clock:
    return utc_now
