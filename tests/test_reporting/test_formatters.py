"""Tests for hygienist_lite.reporting.formatters."""

from __future__ import annotations

from datetime import date

import pytest

from hygienist_lite.analytics.daily import DailyPoint
from hygienist_lite.analytics.metrics import MetricsSummary
from hygienist_lite.analytics.roster import PatientOverview
from hygienist_lite.models.patient import FollowUp, Patient
from hygienist_lite.models.questionnaire import RecommendationResult
from hygienist_lite.reporting.formatters import (
    format_daily_series,
    format_duration,
    format_metrics_summary,
    format_percentage,
    format_questionnaire,
    format_recommendation,
    format_roster_table,
)
from hygienist_lite.taxonomy.brush_taxonomy import BrushType


def _metrics(**overrides) -> MetricsSummary:
    values = dict(
        achievement_days=14,
        total_days=30,
        achievement_rate=14 / 30,
        avg_duration_sec=150.0,
        morning_coverage_rate=0.5,
        night_coverage_rate=0.25,
        avg_self_rating=3.5,
        bleeding_rate=0.0,
        sensitivity_rate=0.0,
        consecutive_days=3,
    )
    values.update(overrides)
    return MetricsSummary(**values)


# ── Scalars ───────────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "rate, expected",
    [(0.0, "0%"), (14 / 30, "47%"), (1.0, "100%"), (1.5, "150%")],
)
def test_format_percentage(rate, expected) -> None:
    assert format_percentage(rate) == expected


def test_format_duration_minutes_and_seconds() -> None:
    assert format_duration(150) == "2m 30s"
    assert format_duration(120) == "2m 00s"


def test_format_duration_sub_minute() -> None:
    assert format_duration(45) == "45s"
    assert format_duration(0) == "0s"


# ── format_metrics_summary ────────────────────────────────────────────────────


def test_metrics_summary_default_title() -> None:
    out = format_metrics_summary(_metrics())
    assert "=== Adherence Summary ===" in out
    assert "14/30 days (47%)" in out
    assert "2m 30s" in out
    assert "3 day(s)" in out


def test_metrics_summary_custom_title() -> None:
    out = format_metrics_summary(_metrics(), title="Aoki Ren")
    assert "=== Aoki Ren ===" in out


def test_metrics_summary_hides_symptoms_when_none() -> None:
    assert "Symptoms" not in format_metrics_summary(_metrics())


def test_metrics_summary_shows_symptoms() -> None:
    out = format_metrics_summary(_metrics(bleeding_rate=0.25))
    assert "bleeding 25%" in out


# ── Questionnaire ─────────────────────────────────────────────────────────────


def test_format_recommendation_includes_text_and_disclaimer() -> None:
    result = RecommendationResult(
        brush_type=BrushType.COMPACT,
        reason="Precise brushing.",
        notes="Go tooth by tooth.",
    )
    out = format_recommendation(result, disclaimer="Not a diagnosis.")
    assert "(compact)" in out
    assert "Precise brushing." in out
    assert "* Not a diagnosis." in out
    assert "Examples" not in out


def test_format_questionnaire_lists_targets(rules) -> None:
    out = format_questionnaire(rules)
    assert "root: Q1" in out
    assert "-> Q2" in out
    assert "=> compound_tuft" in out


# ── format_roster_table ───────────────────────────────────────────────────────


def test_roster_table_empty() -> None:
    assert "(no patients match)" in format_roster_table([])


def test_roster_header_uses_window_length() -> None:
    header = next(
        line for line in format_roster_table([], window_days=14).splitlines() if "Streak" in line
    )
    assert "14d" in header
    assert "30d" not in header
    assert "30d" in format_roster_table([])


def test_roster_table_flags() -> None:
    patient = Patient(
        id="patient-9",
        name="Doi Kai",
        follow_up=FollowUp(flag=True),
        next_appointment=date(2026, 11, 2),
    )
    overview = PatientOverview(
        patient=patient,
        metrics=_metrics(),
        achievement_7d=0.2,
        last_log_date=date(2026, 10, 18),
    )
    out = format_roster_table([overview])
    row = next(line for line in out.splitlines() if "patient-9" in line)
    assert "2026-10-18" in row
    assert "2026-11-02" in row
    assert row.rstrip().endswith("!F")


def test_roster_table_missing_dates_show_dash() -> None:
    overview = PatientOverview(
        patient=Patient(id="patient-0", name="Eto Yu"),
        metrics=_metrics(consecutive_days=0),
        achievement_7d=0.9,
        last_log_date=None,
    )
    row = next(
        line for line in format_roster_table([overview]).splitlines() if "patient-0" in line
    )
    assert " - " in row
    assert "!" not in row


# ── format_daily_series ───────────────────────────────────────────────────────


def test_daily_series_rows() -> None:
    series = [
        DailyPoint(date(2026, 10, 18), 0, 0, None, False, False),
        DailyPoint(date(2026, 10, 19), 2, 270, 4.5, True, True),
    ]
    out = format_daily_series(series)
    lines = out.splitlines()
    assert "=== Daily Brushing ===" in out
    empty_row = next(line for line in lines if "2026-10-18" in line)
    full_row = next(line for line in lines if "2026-10-19" in line)
    assert " - " in empty_row
    assert "4.5" in full_row
    assert full_row.count("x") == 2
