"""Tests for booking-window gating."""

from datetime import timedelta

import pytest

from fixmeet.schemas import RangeType
from fixmeet.services.range_policy import DEFAULT_ROLLING_DAYS, is_date_bookable
from helpers import MONDAY

TODAY = MONDAY


class TestPastDates:
    @pytest.mark.parametrize("range_type", list(RangeType))
    def test_yesterday_is_never_bookable(self, range_type):
        assert not is_date_bookable(
            TODAY,
            TODAY - timedelta(days=1),
            range_type,
            range_days=30,
            range_start=TODAY - timedelta(days=10),
            range_end=TODAY + timedelta(days=10),
        )

    @pytest.mark.parametrize("range_type", [RangeType.ROLLING, RangeType.INDEFINITE])
    def test_today_is_bookable(self, range_type):
        assert is_date_bookable(TODAY, TODAY, range_type, range_days=7)


class TestRolling:
    def test_last_day_of_window_is_bookable(self):
        assert is_date_bookable(TODAY, TODAY + timedelta(days=7), RangeType.ROLLING, range_days=7)

    def test_day_after_window_is_not_bookable(self):
        assert not is_date_bookable(TODAY, TODAY + timedelta(days=8), RangeType.ROLLING, range_days=7)

    def test_missing_range_days_uses_default(self):
        limit = TODAY + timedelta(days=DEFAULT_ROLLING_DAYS)
        assert is_date_bookable(TODAY, limit, RangeType.ROLLING)
        assert not is_date_bookable(TODAY, limit + timedelta(days=1), RangeType.ROLLING)


class TestFixedRange:
    def test_bounds_are_inclusive(self):
        start = TODAY + timedelta(days=3)
        end = TODAY + timedelta(days=5)
        kwargs = {"range_start": start, "range_end": end}

        assert not is_date_bookable(TODAY, start - timedelta(days=1), RangeType.RANGE, **kwargs)
        assert is_date_bookable(TODAY, start, RangeType.RANGE, **kwargs)
        assert is_date_bookable(TODAY, end, RangeType.RANGE, **kwargs)
        assert not is_date_bookable(TODAY, end + timedelta(days=1), RangeType.RANGE, **kwargs)

    def test_inverted_range_books_nothing(self):
        kwargs = {"range_start": TODAY + timedelta(days=5), "range_end": TODAY + timedelta(days=3)}
        for offset in range(0, 8):
            assert not is_date_bookable(
                TODAY, TODAY + timedelta(days=offset), RangeType.RANGE, **kwargs
            )

    def test_missing_bound_is_open(self):
        assert is_date_bookable(
            TODAY, TODAY + timedelta(days=400), RangeType.RANGE, range_start=TODAY
        )


def test_indefinite_has_no_upper_bound():
    assert is_date_bookable(TODAY, TODAY + timedelta(days=3650), RangeType.INDEFINITE)
