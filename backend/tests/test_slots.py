"""Tests for slot generation."""

from datetime import timedelta

from fixmeet.services.busy import BusyInterval, build_busy_intervals
from fixmeet.services.slots import free_ranges, generate_slots
from helpers import MONDAY, at, local_starts, span

MORNING_AND_AFTERNOON = [span(MONDAY, (9, 0), (12, 0)), span(MONDAY, (13, 0), (17, 0))]


def _generate(open_ranges=None, busy=(), **overrides):
    params = {
        "duration_minutes": 30,
        "slot_interval_minutes": 30,
        "min_notice_minutes": 0,
        "now": at(MONDAY, 7, 0),
    }
    params.update(overrides)
    return generate_slots(
        MORNING_AND_AFTERNOON if open_ranges is None else open_ranges,
        list(busy),
        **params,
    )


class TestGenerateSlots:
    def test_full_day_without_bookings(self):
        slots = _generate()

        assert len(slots) == 14
        assert local_starts(slots) == [
            "09:00", "09:30", "10:00", "10:30", "11:00", "11:30",
            "13:00", "13:30", "14:00", "14:30", "15:00", "15:30", "16:00", "16:30",
        ]
        assert slots[-1].end == at(MONDAY, 17, 0)
        for earlier, later in zip(slots, slots[1:]):
            assert earlier.start < later.start
            assert earlier.end <= later.start

    def test_slot_may_end_exactly_at_range_end(self):
        slots = _generate([span(MONDAY, (9, 0), (10, 15))], duration_minutes=45)
        assert local_starts(slots) == ["09:00", "09:30"]
        assert slots[-1].end == at(MONDAY, 10, 15)

    def test_slot_must_fit_entirely_in_range(self):
        slots = _generate([span(MONDAY, (9, 0), (10, 14))], duration_minutes=45)
        assert local_starts(slots) == ["09:00"]

    def test_interval_shorter_than_duration_offers_overlapping_starts(self):
        slots = _generate(
            [span(MONDAY, (9, 0), (10, 0))],
            duration_minutes=30,
            slot_interval_minutes=15,
        )
        assert local_starts(slots) == ["09:00", "09:15", "09:30"]

    def test_busy_interval_inside_range_splits_it(self):
        busy = build_busy_intervals(
            [span(MONDAY, (10, 0), (10, 30))],
            buffer_before_minutes=15,
            buffer_after_minutes=15,
        )
        slots = _generate([span(MONDAY, (9, 0), (12, 0))], busy)

        assert local_starts(slots) == ["09:00", "10:45", "11:15"]
        obstructed_start, obstructed_end = at(MONDAY, 9, 45), at(MONDAY, 10, 45)
        for slot in slots:
            assert slot.end <= obstructed_start or slot.start >= obstructed_end

    def test_busy_interval_covering_range_removes_it(self):
        busy = [BusyInterval(at(MONDAY, 8, 0), at(MONDAY, 12, 30))]
        slots = _generate(busy=busy)
        assert local_starts(slots)[0] == "13:00"
        assert len(slots) == 8

    def test_min_notice_filters_early_starts(self):
        slots = _generate(min_notice_minutes=60, now=at(MONDAY, 14, 0))

        assert local_starts(slots) == ["15:00", "15:30", "16:00", "16:30"]
        assert all(slot.start >= at(MONDAY, 15, 0) for slot in slots)

    def test_start_exactly_at_notice_threshold_is_kept(self):
        slots = _generate(min_notice_minutes=30, now=at(MONDAY, 12, 30))
        assert local_starts(slots)[0] == "13:00"

    def test_daily_cap_reached_returns_nothing(self):
        slots = _generate(confirmed_count=3, max_bookings_per_day=3)
        assert slots == []

    def test_daily_cap_not_reached_keeps_slots(self):
        slots = _generate(confirmed_count=2, max_bookings_per_day=3)
        assert len(slots) == 14


def test_free_ranges_subtracts_busy_set():
    busy = [
        BusyInterval(at(MONDAY, 10, 0), at(MONDAY, 10, 30)),
        BusyInterval(at(MONDAY, 11, 30), at(MONDAY, 13, 30)),
    ]
    assert free_ranges(MORNING_AND_AFTERNOON, busy) == [
        span(MONDAY, (9, 0), (10, 0)),
        span(MONDAY, (10, 30), (11, 30)),
        span(MONDAY, (13, 30), (17, 0)),
    ]


def test_no_slot_overlaps_busy_input():
    bookings = [span(MONDAY, (9, 20), (9, 50)), span(MONDAY, (14, 0), (15, 0))]
    external = [span(MONDAY, (11, 5), (11, 10)), span(MONDAY, (16, 40), (18, 0))]

    for before, after in [(0, 0), (10, 0), (0, 25), (15, 15)]:
        busy = build_busy_intervals(
            bookings, external, buffer_before_minutes=before, buffer_after_minutes=after
        )
        for interval_minutes in (5, 15, 30):
            slots = _generate(busy=busy, slot_interval_minutes=interval_minutes)
            assert slots
            for slot in slots:
                for start, end in bookings:
                    widened_start = start - timedelta(minutes=before)
                    widened_end = end + timedelta(minutes=after)
                    assert slot.end <= widened_start or slot.start >= widened_end
                for start, end in external:
                    assert slot.end <= start or slot.start >= end
