"""
Tests for consecutive_days(): the brushing streak.

What we test
------------
- Empty log → 0.
- Single event today → 1; adding yesterday → 2.
- Latest event yesterday still counts; two days ago breaks the streak (0).
- A gap stops the count; events before the gap are ignored.
- Several events on one date count as one day.
- Unsorted input is handled.
- The anchor defaults to the real clock when ``today`` is omitted.
"""

from __future__ import annotations

from datetime import date

from hygienist_lite.analytics.metrics import consecutive_days
from hygienist_lite.taxonomy.brush_taxonomy import TimeOfDay


def test_empty_log(today):
    assert consecutive_days([], today=today) == 0


def test_single_event_today(make_event, today):
    assert consecutive_days([make_event(days_ago=0)], today=today) == 1


def test_today_and_yesterday(make_event, today):
    events = [make_event(days_ago=0), make_event(days_ago=1)]
    assert consecutive_days(events, today=today) == 2


def test_latest_yesterday_counts(make_event, today):
    events = [make_event(days_ago=1), make_event(days_ago=2)]
    assert consecutive_days(events, today=today) == 2


def test_latest_two_days_ago_is_zero(make_event, today):
    events = [make_event(days_ago=2), make_event(days_ago=3), make_event(days_ago=4)]
    assert consecutive_days(events, today=today) == 0


def test_gap_stops_count(make_event, today):
    events = [
        make_event(days_ago=0),
        make_event(days_ago=1),
        # gap at 2 days ago
        make_event(days_ago=3),
        make_event(days_ago=4),
        make_event(days_ago=5),
    ]
    assert consecutive_days(events, today=today) == 2


def test_multiple_events_per_day_count_once(make_event, today):
    events = [
        make_event(days_ago=0, time_of_day=TimeOfDay.MORNING),
        make_event(days_ago=0, time_of_day=TimeOfDay.NIGHT),
        make_event(days_ago=1, time_of_day=TimeOfDay.NIGHT),
    ]
    assert consecutive_days(events, today=today) == 2


def test_unsorted_input(make_event, today):
    events = [make_event(days_ago=d) for d in (3, 0, 2, 1)]
    assert consecutive_days(events, today=today) == 4


def test_future_latest_date_is_zero(make_event, today):
    assert consecutive_days([make_event(days_ago=-1), make_event(days_ago=0)], today=today) == 0


def test_streak_ignores_any_analysis_window(make_event, today):
    events = [make_event(days_ago=i) for i in range(45)]
    assert consecutive_days(events, today=today) == 45


def test_defaults_to_real_clock(make_event):
    real_today = date.today()
    events = [make_event(days_ago=0, anchor=real_today), make_event(days_ago=1, anchor=real_today)]
    assert consecutive_days(events) == 2
