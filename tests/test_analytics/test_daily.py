"""
Tests for hygienist_lite/analytics/daily.py.

What we test
------------
- Series length equals ``days``; dates run oldest → newest, ending at reference.
- Days without events appear with event_count 0 and duration_min None.
- Durations are summed per day and converted to minutes.
- Morning/night flags are per-day booleans.
- Events outside the spine are ignored.
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from hygienist_lite.analytics.daily import build_daily_series
from hygienist_lite.taxonomy.brush_taxonomy import TimeOfDay


def test_spine_covers_requested_days(today):
    series = build_daily_series([], days=30, reference_date=today)
    assert len(series) == 30
    assert series[0].log_date == today - timedelta(days=29)
    assert series[-1].log_date == today
    assert all(p.event_count == 0 and p.duration_min is None for p in series)


def test_durations_summed_per_day(make_event, today):
    events = [
        make_event(days_ago=0, duration_sec=90, time_of_day=TimeOfDay.MORNING),
        make_event(days_ago=0, duration_sec=150, time_of_day=TimeOfDay.NIGHT),
    ]
    last = build_daily_series(events, days=7, reference_date=today)[-1]
    assert last.event_count == 2
    assert last.total_duration_sec == 240
    assert last.duration_min == pytest.approx(4.0)
    assert last.has_morning and last.has_night


def test_time_of_day_flags(make_event, today):
    events = [
        make_event(days_ago=1, time_of_day=TimeOfDay.NIGHT),
        make_event(days_ago=2, time_of_day=TimeOfDay.OTHER),
    ]
    series = build_daily_series(events, days=3, reference_date=today)
    two_ago, yesterday, current = series
    assert (yesterday.has_morning, yesterday.has_night) == (False, True)
    assert (two_ago.has_morning, two_ago.has_night) == (False, False)
    assert two_ago.event_count == 1
    assert current.event_count == 0


def test_events_outside_spine_ignored(make_event, today):
    events = [make_event(days_ago=10), make_event(days_ago=-2)]
    series = build_daily_series(events, days=5, reference_date=today)
    assert sum(p.event_count for p in series) == 0


def test_zero_duration_day_reports_zero_minutes(make_event, today):
    series = build_daily_series([make_event(days_ago=0, duration_sec=0)], days=1, reference_date=today)
    assert series[0].duration_min == 0.0
