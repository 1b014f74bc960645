"""
Adherence metrics over a patient's brushing log.

Metric design rationale
-----------------------
Analysis window
  ``window_days`` calendar dates ending at ``reference_date``, both ends
  inclusive. Events inside are "relevant"; everything else is ignored by the
  rate and average fields.

Achievement rate
  Distinct relevant dates with at least one event, divided by
  ``window_days``. Several sessions on one day still count as one day.

Averages (duration, self-rating)
  Per-event means over relevant events, not per-day means. 0 when the window
  holds no events.

Coverage rates (morning, night)
  Count of relevant *events* with that time of day divided by
  ``window_days``. Two morning sessions on the same date both count, so a
  coverage rate can exceed 1.0.

Symptom rates (bleeding, sensitivity)
  Flagged relevant events divided by relevant events. 0 when empty.

Consecutive days (streak)
  Computed from the *full* log, not the window. Anchored on the real current
  date: unless the latest logged date is today or yesterday the streak is 0.
  Otherwise count back one calendar day at a time from the latest date until
  the first missing date.

No rounding happens here; presentation rounds for display. ``window_days``
must be >= 1; 0 is a caller contract violation and is not guarded.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from hygienist_lite.models.brush_event import BrushEvent
from hygienist_lite.taxonomy.brush_taxonomy import TimeOfDay
from hygienist_lite.utils.time_utils import resolve_today, window_start

SHORT_WINDOW_DAYS = 7


@dataclass(frozen=True)
class MetricsSummary:
    """Aggregated adherence metrics for one patient.

    Valid only for the log and dates it was computed from; never stored.

    Attributes:
        achievement_days:      Distinct dates in the window with >= 1 event.
        total_days:            Window length in days (the rate denominator).
        achievement_rate:      achievement_days / total_days.
        avg_duration_sec:      Mean session duration over relevant events.
        morning_coverage_rate: Morning event count / total_days (may exceed 1).
        night_coverage_rate:   Night event count / total_days (may exceed 1).
        avg_self_rating:       Mean self-rating over relevant events.
        bleeding_rate:         Fraction of relevant events reporting bleeding.
        sensitivity_rate:      Fraction of relevant events reporting sensitivity.
        consecutive_days:      Streak ending today or yesterday, from the full log.
    """

    achievement_days: int
    total_days: int
    achievement_rate: float
    avg_duration_sec: float
    morning_coverage_rate: float
    night_coverage_rate: float
    avg_self_rating: float
    bleeding_rate: float
    sensitivity_rate: float
    consecutive_days: int


def relevant_events(
    events: Iterable[BrushEvent],
    window_days: int,
    reference_date: date,
) -> list[BrushEvent]:
    """Return the events dated inside the analysis window."""
    start = window_start(reference_date, window_days)
    return [e for e in events if start <= e.log_date <= reference_date]


def summarize(
    events: Iterable[BrushEvent],
    window_days: int = 30,
    reference_date: Optional[date] = None,
    today: Optional[date] = None,
) -> MetricsSummary:
    """Compute adherence metrics for one patient's brushing log.

    Args:
        events:         The patient's events, in any order.
        window_days:    Analysis window length; must be >= 1.
        reference_date: Last date of the window. Defaults to ``today``.
        today:          Streak anchor. Defaults to the real current date.

    Returns:
        MetricsSummary with all fields populated.
    """
    all_events = list(events)
    today = resolve_today(today)
    if reference_date is None:
        reference_date = today

    relevant = relevant_events(all_events, window_days, reference_date)
    n_relevant = len(relevant)

    achievement_days = len({e.log_date for e in relevant})

    morning = sum(1 for e in relevant if e.time_of_day == TimeOfDay.MORNING)
    night   = sum(1 for e in relevant if e.time_of_day == TimeOfDay.NIGHT)

    if n_relevant:
        avg_duration = sum(e.duration_sec for e in relevant) / n_relevant
        avg_rating   = sum(e.self_rating for e in relevant) / n_relevant
        bleeding     = sum(1 for e in relevant if e.bleeding) / n_relevant
        sensitivity  = sum(1 for e in relevant if e.sensitivity) / n_relevant
    else:
        avg_duration = avg_rating = bleeding = sensitivity = 0.0

    return MetricsSummary(
        achievement_days=achievement_days,
        total_days=window_days,
        achievement_rate=achievement_days / window_days,
        avg_duration_sec=avg_duration,
        morning_coverage_rate=morning / window_days,
        night_coverage_rate=night / window_days,
        avg_self_rating=avg_rating,
        bleeding_rate=bleeding,
        sensitivity_rate=sensitivity,
        consecutive_days=consecutive_days(all_events, today=today),
    )


def consecutive_days(events: Iterable[BrushEvent], today: Optional[date] = None) -> int:
    """Count consecutive logged days ending today or yesterday.

    Args:
        events: The full, unfiltered log.
        today:  Anchor date. Defaults to the real current date.

    Returns:
        0 if the log is empty or its latest date is older than yesterday;
        otherwise the length of the unbroken run of dates ending at the
        latest logged date.
    """
    dates = sorted({e.log_date for e in events}, reverse=True)
    if not dates:
        return 0

    today = resolve_today(today)
    latest = dates[0]
    if latest != today and latest != today - timedelta(days=1):
        return 0

    streak = 0
    expected = latest
    for d in dates:
        if d != expected:
            break
        streak += 1
        expected -= timedelta(days=1)
    return streak


def achievement_rate_7d(events: Iterable[BrushEvent], today: Optional[date] = None) -> float:
    """Achievement rate over the last 7 days ending today."""
    return summarize(events, window_days=SHORT_WINDOW_DAYS, today=today).achievement_rate


def last_log_date(events: Iterable[BrushEvent]) -> Optional[date]:
    """Most recent logged date, or ``None`` for an empty log."""
    return max((e.log_date for e in events), default=None)
