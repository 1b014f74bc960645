"""
ASCII terminal formatters for CLI commands.

All formatters accept computed domain objects and return plain multi-line
strings suitable for ``typer.echo()``. The analytics layer never rounds;
percentages and durations are rounded here, for display only.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from hygienist_lite.analytics.daily import DailyPoint
from hygienist_lite.analytics.metrics import MetricsSummary
from hygienist_lite.analytics.roster import PatientOverview
from hygienist_lite.models.questionnaire import QuestionnaireRules, RecommendationResult
from hygienist_lite.taxonomy.brush_taxonomy import BRUSH_TYPE_LABELS


# ── Scalars ───────────────────────────────────────────────────────────────────


def format_percentage(rate: float) -> str:
    """``0.4667`` → ``"47%"``."""
    return f"{rate * 100:.0f}%"


def format_duration(seconds: float) -> str:
    """``150`` → ``"2m 30s"``; sub-minute values show seconds only."""
    total = int(round(seconds))
    minutes, secs = divmod(total, 60)
    if minutes == 0:
        return f"{secs}s"
    return f"{minutes}m {secs:02d}s"


def _format_date(value: Optional[date]) -> str:
    return value.isoformat() if value is not None else "-"


# ── Metrics ───────────────────────────────────────────────────────────────────


def format_metrics_summary(metrics: MetricsSummary, title: str = "") -> str:
    """Format a ``MetricsSummary`` as a labelled block.

    Symptom lines appear only when a symptom was reported in the window.
    """
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== {title or 'Adherence Summary'} ===")
    lines.append(
        f"  Achievement:      {metrics.achievement_days}/{metrics.total_days} days "
        f"({format_percentage(metrics.achievement_rate)})"
    )
    lines.append(f"  Avg duration:     {format_duration(metrics.avg_duration_sec)}")
    lines.append(
        f"  Coverage:         morning {format_percentage(metrics.morning_coverage_rate)}"
        f" / night {format_percentage(metrics.night_coverage_rate)}"
    )
    lines.append(f"  Self-rating avg:  {metrics.avg_self_rating:.1f}")
    lines.append(f"  Streak:           {metrics.consecutive_days} day(s)")
    if metrics.bleeding_rate > 0 or metrics.sensitivity_rate > 0:
        lines.append(
            f"  Symptoms:         bleeding {format_percentage(metrics.bleeding_rate)}"
            f" / sensitivity {format_percentage(metrics.sensitivity_rate)}"
        )
    return "\n".join(lines)


# ── Questionnaire ─────────────────────────────────────────────────────────────


def format_recommendation(result: RecommendationResult, disclaimer: str = "") -> str:
    lines: list[str] = []
    lines.append("")
    lines.append("=== Recommended Toothbrush ===")
    lines.append(f"  Type:    {BRUSH_TYPE_LABELS[result.brush_type]} ({result.brush_type.value})")
    lines.append(f"  Reason:  {result.reason}")
    lines.append(f"  Notes:   {result.notes}")
    if result.market_examples:
        lines.append(f"  Examples: {result.market_examples}")
    if disclaimer:
        lines.append("")
        lines.append(f"  * {disclaimer}")
    return "\n".join(lines)


def format_questionnaire(rules: QuestionnaireRules) -> str:
    """List every question with its options and where each one leads."""
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== Questionnaire (root: {rules.root_id}) ===")
    for qid, node in rules.questions.items():
        lines.append("")
        lines.append(f"  [{qid}] {node.text}")
        for opt in node.options:
            target = f"-> {opt.next_id}" if opt.next_id else f"=> {opt.result.value}"  # type: ignore[union-attr]
            lines.append(f"      {opt.value:<14} {opt.label:<32} {target}")
    return "\n".join(lines)


# ── Roster ────────────────────────────────────────────────────────────────────


def format_roster_table(
    overviews: list[PatientOverview],
    low_achievement_threshold: float = 0.40,
    window_days: int = 30,
) -> str:
    """Format the patient roster as an ASCII table.

    The window column is headed with ``window_days`` (e.g. ``30d``).

    ``!`` marks a 7-day rate below ``low_achievement_threshold``;
    ``F`` marks a follow-up flag.
    """
    lines: list[str] = []
    header = (
        f"  {'ID':<12}  {'Name':<20}  {'Last log':>10}  {'7d':>5}  "
        f"{f'{window_days}d':>5}  {'Streak':>6}  {'Next visit':>10}  Flags"
    )
    lines.append("")
    lines.append("=== Patients ===")
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))

    if not overviews:
        lines.append("  (no patients match)")
        return "\n".join(lines)

    for o in overviews:
        flags = ""
        if o.is_low_achievement(low_achievement_threshold):
            flags += "!"
        if o.patient.needs_follow_up:
            flags += "F"
        lines.append(
            f"  {o.patient.id:<12}  {o.patient.name:<20}  "
            f"{_format_date(o.last_log_date):>10}  "
            f"{format_percentage(o.achievement_7d):>5}  "
            f"{format_percentage(o.metrics.achievement_rate):>5}  "
            f"{o.metrics.consecutive_days:>6}  "
            f"{_format_date(o.patient.next_appointment):>10}  {flags}"
        )
    return "\n".join(lines)


# ── Daily series ──────────────────────────────────────────────────────────────


def format_daily_series(series: list[DailyPoint]) -> str:
    """One line per date: duration in minutes and morning/night markers."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Daily Brushing ===")
    lines.append(f"  {'Date':<10}  {'Sessions':>8}  {'Minutes':>7}  AM  PM")
    for p in series:
        minutes = f"{p.duration_min:.1f}" if p.duration_min is not None else "-"
        lines.append(
            f"  {p.log_date.isoformat():<10}  {p.event_count:>8}  {minutes:>7}  "
            f"{'x' if p.has_morning else '.':>2}  {'x' if p.has_night else '.':>2}"
        )
    return "\n".join(lines)
