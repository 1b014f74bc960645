"""
Daily aggregation of a patient's brushing log.

Collapses events into one row per calendar date over a full date spine, so
days without any session appear explicitly (``event_count == 0``,
``duration_min is None``). This is the series behind a patient's
duration-over-time view.

Input → Output
--------------
Input:  ``list[BrushEvent]`` for one patient, window length, reference date.
Output: ``list[DailyPoint]`` sorted oldest → newest, exactly ``days`` rows.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from hygienist_lite.models.brush_event import BrushEvent
from hygienist_lite.taxonomy.brush_taxonomy import TimeOfDay
from hygienist_lite.utils.time_utils import date_range, resolve_today, window_start


@dataclass(frozen=True)
class DailyPoint:
    """One calendar date in the daily series.

    Attributes:
        log_date:           Calendar date.
        event_count:        Sessions logged that day. 0 if spine-only.
        total_duration_sec: Sum of session durations that day.
        duration_min:       total_duration_sec / 60, or ``None`` with no sessions.
        has_morning:        True if any session that day was a morning one.
        has_night:          True if any session that day was a night one.
    """

    log_date: date
    event_count: int
    total_duration_sec: int
    duration_min: Optional[float]
    has_morning: bool
    has_night: bool


def build_daily_series(
    events: Iterable[BrushEvent],
    days: int = 30,
    reference_date: Optional[date] = None,
) -> list[DailyPoint]:
    """Build the per-day series for the ``days`` dates ending at ``reference_date``.

    Args:
        events:         The patient's events, in any order.
        days:           Number of calendar dates in the series; must be >= 1.
        reference_date: Last date of the series. Defaults to today.

    Returns:
        One ``DailyPoint`` per date, oldest first.
    """
    reference_date = resolve_today(reference_date)
    by_date: dict[date, list[BrushEvent]] = defaultdict(list)
    for e in events:
        by_date[e.log_date].append(e)

    series: list[DailyPoint] = []
    for d in date_range(window_start(reference_date, days), reference_date):
        day_events = by_date.get(d, [])
        total = sum(e.duration_sec for e in day_events)
        series.append(
            DailyPoint(
                log_date=d,
                event_count=len(day_events),
                total_duration_sec=total,
                duration_min=total / 60 if day_events else None,
                has_morning=any(e.time_of_day == TimeOfDay.MORNING for e in day_events),
                has_night=any(e.time_of_day == TimeOfDay.NIGHT for e in day_events),
            )
        )
    return series
