"""
Patient roster: couples each patient with their adherence metrics, then
flags, filters and sorts the list.

Usage flow
----------
1. build_overviews(patients, events)
   -> list[PatientOverview]  (one per patient; events grouped by patient_id)

2. filter_overviews(overviews, RosterFilter.LOW_ACHIEVEMENT)
   -> list[PatientOverview]

3. sort_overviews(overviews, RosterSortKey.CONSECUTIVE, descending=True)
   -> list[PatientOverview]

Flags
-----
no_activity      consecutive_days == 0 (no session today or yesterday).
low_achievement  7-day achievement rate < threshold (default 0.40).
follow_up        clinician follow-up flag is set on the patient record.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Any, Iterable, Optional

from hygienist_lite.analytics.metrics import (
    MetricsSummary,
    achievement_rate_7d,
    last_log_date,
    summarize,
)
from hygienist_lite.models.brush_event import BrushEvent
from hygienist_lite.models.patient import Patient
from hygienist_lite.utils.time_utils import resolve_today

log = logging.getLogger(__name__)

LOW_ACHIEVEMENT_THRESHOLD = 0.40


class RosterFilter(StrEnum):
    ALL = "all"
    NO_ACTIVITY = "no-activity"
    LOW_ACHIEVEMENT = "low-achievement"
    FOLLOW_UP = "follow-up"


class RosterSortKey(StrEnum):
    NAME = "name"
    LAST_LOG = "last-log"
    ACHIEVEMENT_7D = "achievement-7d"
    CONSECUTIVE = "consecutive"
    NEXT_APPOINTMENT = "next-appointment"


@dataclass(frozen=True)
class PatientOverview:
    """One roster row.

    Attributes:
        patient:        The patient record.
        metrics:        Metrics over the roster window (default 30 days).
        achievement_7d: 7-day achievement rate ending today.
        last_log_date:  Most recent logged date, or ``None``.
    """

    patient: Patient
    metrics: MetricsSummary
    achievement_7d: float
    last_log_date: Optional[date]

    @property
    def no_activity(self) -> bool:
        return self.metrics.consecutive_days == 0

    def is_low_achievement(self, threshold: float = LOW_ACHIEVEMENT_THRESHOLD) -> bool:
        return self.achievement_7d < threshold


def build_overviews(
    patients: Iterable[Patient],
    events: Iterable[BrushEvent],
    window_days: int = 30,
    today: Optional[date] = None,
) -> list[PatientOverview]:
    """Compute a ``PatientOverview`` for every patient.

    Events whose ``patient_id`` matches no patient are ignored.

    Args:
        patients:    Patient records.
        events:      Brushing events for any number of patients.
        window_days: Window for the main metrics.
        today:       Reference/streak date. Defaults to the real current date.

    Returns:
        Overviews in the same order as ``patients``.
    """
    today = resolve_today(today)
    by_patient: dict[str, list[BrushEvent]] = defaultdict(list)
    for e in events:
        by_patient[e.patient_id].append(e)

    overviews: list[PatientOverview] = []
    for patient in patients:
        patient_events = by_patient.get(patient.id, [])
        overviews.append(
            PatientOverview(
                patient=patient,
                metrics=summarize(patient_events, window_days=window_days, today=today),
                achievement_7d=achievement_rate_7d(patient_events, today=today),
                last_log_date=last_log_date(patient_events),
            )
        )

    log.debug("Built %d patient overviews (window=%dd).", len(overviews), window_days)
    return overviews


def filter_overviews(
    overviews: Iterable[PatientOverview],
    flag: RosterFilter = RosterFilter.ALL,
    low_achievement_threshold: float = LOW_ACHIEVEMENT_THRESHOLD,
) -> list[PatientOverview]:
    """Keep only the overviews matching ``flag``."""
    rows = list(overviews)
    if flag == RosterFilter.NO_ACTIVITY:
        return [o for o in rows if o.no_activity]
    if flag == RosterFilter.LOW_ACHIEVEMENT:
        return [o for o in rows if o.is_low_achievement(low_achievement_threshold)]
    if flag == RosterFilter.FOLLOW_UP:
        return [o for o in rows if o.patient.needs_follow_up]
    return rows


def sort_overviews(
    overviews: Iterable[PatientOverview],
    key: RosterSortKey = RosterSortKey.NAME,
    descending: bool = False,
) -> list[PatientOverview]:
    """Sort overviews by ``key``.

    Missing dates (no logs, no appointment) sort before any real date in
    ascending order. The sort is stable, so equal keys keep input order.
    """
    return sorted(overviews, key=lambda o: _sort_value(o, key), reverse=descending)


def _sort_value(overview: PatientOverview, key: RosterSortKey) -> Any:
    if key == RosterSortKey.NAME:
        return overview.patient.name
    if key == RosterSortKey.LAST_LOG:
        return _date_key(overview.last_log_date)
    if key == RosterSortKey.ACHIEVEMENT_7D:
        return overview.achievement_7d
    if key == RosterSortKey.CONSECUTIVE:
        return overview.metrics.consecutive_days
    if key == RosterSortKey.NEXT_APPOINTMENT:
        return _date_key(overview.patient.next_appointment)
    raise ValueError(f"Unknown sort key '{key}'.")


def _date_key(value: Optional[date]) -> tuple[int, date]:
    if value is None:
        return (0, date.min)
    return (1, value)
