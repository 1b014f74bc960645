"""
Calendar-date utilities for adherence analytics.

Key concepts:
  - Clock: the "today" used by streak calculations is real wall-clock time
    in production. Every analytics entry point accepts an explicit ``today``
    so tests can pin it; ``None`` falls back to ``today()``.
  - Analysis window: ``window_days`` calendar days ending at (and including)
    the reference date.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Callable, Optional

Clock = Callable[[], date]


def today() -> date:
    """Return the current local calendar date."""
    return date.today()


def resolve_today(value: Optional[date] = None, clock: Optional[Clock] = None) -> date:
    """Return ``value`` if given, else the date reported by ``clock`` (default: ``today``)."""
    if value is not None:
        return value
    return (clock or today)()


def window_start(reference_date: date, window_days: int) -> date:
    """Return the first date of a ``window_days``-long window ending at ``reference_date``.

    Both ends are inclusive, so the window holds exactly ``window_days``
    calendar dates.
    """
    return reference_date - timedelta(days=window_days - 1)


def date_range(start: date, end: date, step_days: int = 1) -> list[date]:
    """Generate a list of dates from ``start`` to ``end`` (inclusive).

    Args:
        start: First date in the range.
        end: Last date in the range (inclusive).
        step_days: Step size in days (default 1).

    Returns:
        List of date objects.

    Raises:
        ValueError: If ``end < start`` or ``step_days < 1``.
    """
    if end < start:
        raise ValueError(f"end ({end}) must be >= start ({start}).")
    if step_days < 1:
        raise ValueError(f"step_days must be >= 1, got {step_days}.")

    result: list[date] = []
    current = start
    while current <= end:
        result.append(current)
        current += timedelta(days=step_days)
    return result


def parse_iso_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string.

    Raises:
        ValueError: If ``value`` is not an ISO calendar date.
    """
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValueError(f"Cannot parse date '{value}'. Expected format: YYYY-MM-DD.") from exc
