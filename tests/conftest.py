"""
Shared pytest fixtures for the hygienist-lite test suite.

Provides:
  - ``rules`` / ``engine``: the shipped questionnaire loaded from
    ``config/questionnaire/toothbrush_rules.json``.
  - ``today``: a fixed calendar date used as the streak anchor, so no test
    depends on the real clock.
  - ``make_event``: factory for ``BrushEvent`` objects with sensible defaults.
  - ``sample_patients``: three patient records with differing flags.
"""

from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path
from typing import Callable

import pytest

from hygienist_lite.models.brush_event import BrushEvent
from hygienist_lite.models.patient import FollowUp, Patient
from hygienist_lite.models.questionnaire import QuestionnaireRules
from hygienist_lite.recommendations.engine import RecommendationEngine
from hygienist_lite.recommendations.loader import load_rules
from hygienist_lite.taxonomy.brush_taxonomy import LogSource, TimeOfDay

PROJECT_ROOT = Path(__file__).parent.parent
RULES_PATH = PROJECT_ROOT / "config" / "questionnaire" / "toothbrush_rules.json"

FIXED_TODAY = date(2026, 10, 19)


# ── Questionnaire fixtures ────────────────────────────────────────────────────

@pytest.fixture
def rules() -> QuestionnaireRules:
    """The shipped three-question toothbrush questionnaire."""
    return load_rules(RULES_PATH)


@pytest.fixture
def engine(rules: QuestionnaireRules) -> RecommendationEngine:
    return RecommendationEngine(rules)


@pytest.fixture
def minimal_rules_dict() -> dict:
    """A raw two-question tree used to build malformed variants."""
    return {
        "root_id": "A",
        "questions": {
            "A": {
                "text": "First?",
                "options": [
                    {"value": "go", "label": "Go on", "next": "B"},
                    {"value": "stop", "label": "Stop", "result": "compact"},
                ],
            },
            "B": {
                "text": "Second?",
                "options": [
                    {"value": "x", "label": "X", "result": "wide_stepped"},
                ],
            },
        },
        "recommendations": {
            "compact": {"reason": "compact reason", "notes": "compact notes"},
            "wide_stepped": {"reason": "wide reason", "notes": "wide notes"},
        },
        "disclaimer": "Not a diagnosis.",
    }


# ── Brushing log fixtures ─────────────────────────────────────────────────────

@pytest.fixture
def today() -> date:
    return FIXED_TODAY


@pytest.fixture
def make_event() -> Callable[..., BrushEvent]:
    """Return a factory: ``make_event(days_ago=0, **overrides)``."""
    counter = {"n": 0}

    def _make(
        days_ago: int = 0,
        patient_id: str = "patient-1",
        duration_sec: int = 120,
        time_of_day: TimeOfDay = TimeOfDay.MORNING,
        self_rating: int = 4,
        bleeding: bool | None = None,
        sensitivity: bool | None = None,
        pain: bool | None = None,
        anchor: date = FIXED_TODAY,
    ) -> BrushEvent:
        counter["n"] += 1
        return BrushEvent(
            id=f"log-{counter['n']}",
            patient_id=patient_id,
            log_date=anchor - timedelta(days=days_ago),
            duration_sec=duration_sec,
            time_of_day=time_of_day,
            self_rating=self_rating,
            bleeding=bleeding,
            sensitivity=sensitivity,
            pain=pain,
            source=LogSource.DEMO,
        )

    return _make


@pytest.fixture
def sample_patients() -> list[Patient]:
    return [
        Patient(id="patient-1", name="Aoki Ren"),
        Patient(
            id="patient-2",
            name="Baba Mio",
            follow_up=FollowUp(flag=True, note="Recheck gum bleeding"),
            next_appointment=date(2026, 11, 2),
        ),
        Patient(id="patient-3", name="Chiba Sora", next_appointment=date(2026, 10, 25)),
    ]
