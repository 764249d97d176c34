"""Tests for event duration arithmetic."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from calendar_agent.dates.duration import DEFAULT_DURATION_MINUTES, end_instant


def test_default_duration_is_one_hour():
    """Without a duration the event lasts 60 minutes."""
    start = datetime(2025, 1, 13, 7, 0, tzinfo=timezone.utc)

    assert DEFAULT_DURATION_MINUTES == 60
    assert end_instant(start) == datetime(2025, 1, 13, 8, 0, tzinfo=timezone.utc)


def test_custom_duration():
    """Durations are added in minutes."""
    start = datetime(2025, 1, 10, 13, 0, tzinfo=timezone.utc)

    assert end_instant(start, 90) == datetime(2025, 1, 10, 14, 30, tzinfo=timezone.utc)


def test_duration_crossing_midnight():
    """A long event can end on the next day."""
    start = datetime(2025, 1, 10, 21, 0, tzinfo=timezone.utc)

    assert end_instant(start, 240) == datetime(2025, 1, 11, 1, 0, tzinfo=timezone.utc)


def test_duration_is_absolute_across_dst_gap():
    """An hour-long event spanning spring-forward lasts 3600 seconds."""
    helsinki = ZoneInfo("Europe/Helsinki")
    # 02:30 EET; clocks jump from 03:00 to 04:00
    start = datetime(2025, 3, 30, 2, 30, tzinfo=helsinki)

    end = end_instant(start, 60)

    elapsed = end.astimezone(timezone.utc) - start.astimezone(timezone.utc)
    assert elapsed == timedelta(hours=1)
    assert (end.hour, end.minute) == (4, 30)
    assert end.tzinfo is helsinki


def test_duration_is_absolute_across_dst_overlap():
    """An hour-long event spanning fall-back lasts 3600 seconds."""
    helsinki = ZoneInfo("Europe/Helsinki")
    # 03:30 EEST, first pass; clocks go back from 04:00 to 03:00
    start = datetime(2025, 10, 26, 0, 30, tzinfo=timezone.utc).astimezone(helsinki)

    end = end_instant(start, 60)

    assert end.astimezone(timezone.utc) == datetime(2025, 10, 26, 1, 30, tzinfo=timezone.utc)


def test_zero_duration_is_allowed():
    """A zero-length event ends when it starts."""
    start = datetime(2025, 1, 10, 13, 0, tzinfo=timezone.utc)

    assert end_instant(start, 0) == start


def test_negative_duration_rejected():
    """Negative durations raise ValueError."""
    with pytest.raises(ValueError, match="negative"):
        end_instant(datetime(2025, 1, 10, 13, 0, tzinfo=timezone.utc), -5)


def test_naive_start_rejected():
    """Naive datetimes are not instants."""
    with pytest.raises(ValueError, match="timezone-aware"):
        end_instant(datetime(2025, 1, 10, 13, 0))
