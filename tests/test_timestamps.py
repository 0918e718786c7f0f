"""
Local time reconstruction tests: the fixed US window and the system rule.
"""

import os
import time
from datetime import date, datetime, timedelta, timezone

import pytest

from phone_compressor.domain.timestamps import (
    LocalClock,
    dst_window,
    first_sunday_on_or_after,
    is_in_dst_window,
    reconstruct_local_time,
)

EASTERN = LocalClock(base_offset_minutes=-300, observes_dst=True)


@pytest.fixture
def eastern_timezone():
    """Switches the process timezone to US Eastern for the duration of a test."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    previous = os.environ.get("TZ")
    os.environ["TZ"] = "EST5EDT,M3.2.0,M11.1.0"
    time.tzset()
    yield
    if previous is None:
        del os.environ["TZ"]
    else:
        os.environ["TZ"] = previous
    time.tzset()


class TestDstWindow:
    @pytest.mark.parametrize(
        "year, begin, end",
        [
            (2023, date(2023, 3, 12), date(2023, 11, 5)),
            (2024, date(2024, 3, 10), date(2024, 11, 3)),
            # March 8 and November 1 2026 are Sundays themselves.
            (2026, date(2026, 3, 8), date(2026, 11, 1)),
        ],
    )
    def test_window_bounds(self, year, begin, end):
        window_begin, window_end = dst_window(year)
        assert window_begin == datetime.combine(begin, datetime.min.time())
        assert window_end == datetime.combine(end, datetime.min.time())
        assert window_begin.weekday() == window_end.weekday() == 6

    def test_first_sunday_on_or_after(self):
        assert first_sunday_on_or_after(date(2024, 3, 8)) == date(2024, 3, 10)
        assert first_sunday_on_or_after(date(2024, 3, 10)) == date(2024, 3, 10)
        assert first_sunday_on_or_after(date(2024, 3, 11)) == date(2024, 3, 17)

    @pytest.mark.parametrize(
        "timestamp, inside",
        [
            (datetime(2024, 3, 9, 12, 0), False),
            (datetime(2024, 3, 9, 23, 59, 59), False),
            (datetime(2024, 3, 10, 0, 0), True),
            (datetime(2024, 7, 4, 15, 0), True),
            (datetime(2024, 11, 2, 23, 59, 59), True),
            (datetime(2024, 11, 3, 0, 0), False),
            (datetime(2024, 12, 25, 12, 0), False),
            (datetime(2024, 1, 15, 12, 0), False),
        ],
    )
    def test_window_membership(self, timestamp, inside):
        assert is_in_dst_window(timestamp) is inside


class TestFixedRule:
    def test_summer_capture(self):
        result = reconstruct_local_time(datetime(2024, 7, 4, 15, 0), EASTERN, "fixed")
        # -300 minutes plus the one-hour DST shift.
        assert result == datetime(2024, 7, 4, 11, 0)

    def test_winter_capture(self):
        result = reconstruct_local_time(datetime(2024, 1, 15, 15, 0), EASTERN, "fixed")
        assert result == datetime(2024, 1, 15, 10, 0)

    def test_day_before_window_gets_base_offset_only(self):
        result = reconstruct_local_time(datetime(2024, 3, 9, 12, 0), EASTERN, "fixed")
        assert result == datetime(2024, 3, 9, 7, 0)

    def test_window_begin_and_end(self):
        assert reconstruct_local_time(datetime(2024, 3, 10, 0, 0), EASTERN) == datetime(2024, 3, 9, 20, 0)
        assert reconstruct_local_time(datetime(2024, 11, 3, 0, 0), EASTERN) == datetime(2024, 11, 2, 19, 0)
        assert reconstruct_local_time(
            datetime(2024, 11, 2, 23, 59, 59), EASTERN
        ) == datetime(2024, 11, 2, 19, 59, 59)

    def test_zone_without_dst(self):
        clock = LocalClock(base_offset_minutes=-300, observes_dst=False)
        assert reconstruct_local_time(datetime(2024, 7, 4, 15, 0), clock) == datetime(2024, 7, 4, 10, 0)

    def test_positive_offset(self):
        clock = LocalClock(base_offset_minutes=540, observes_dst=False)
        assert reconstruct_local_time(datetime(2024, 7, 4, 20, 0), clock) == datetime(2024, 7, 5, 5, 0)

    def test_aware_input_is_normalized_to_utc(self):
        aware = datetime(2024, 7, 4, 17, 0, tzinfo=timezone(timedelta(hours=2)))
        assert reconstruct_local_time(aware, EASTERN) == datetime(2024, 7, 4, 11, 0)

    def test_repeated_calls_agree(self):
        timestamp = datetime(2024, 7, 4, 15, 0)
        assert reconstruct_local_time(timestamp, EASTERN) == reconstruct_local_time(timestamp, EASTERN)

    def test_unknown_rule(self):
        with pytest.raises(ValueError):
            reconstruct_local_time(datetime(2024, 7, 4, 15, 0), EASTERN, "lunar")


class TestSystemRule:
    def test_summer_and_winter(self, eastern_timezone):
        assert reconstruct_local_time(datetime(2024, 7, 4, 15, 0), rule="system") == datetime(2024, 7, 4, 11, 0)
        assert reconstruct_local_time(datetime(2024, 1, 15, 15, 0), rule="system") == datetime(2024, 1, 15, 10, 0)

    def test_clock_from_system(self, eastern_timezone):
        assert LocalClock.from_system() == EASTERN


def test_clock_from_patched_time_module(monkeypatch):
    monkeypatch.setattr(time, "timezone", -3600)
    monkeypatch.setattr(time, "daylight", 0)
    assert LocalClock.from_system() == LocalClock(base_offset_minutes=60, observes_dst=False)
