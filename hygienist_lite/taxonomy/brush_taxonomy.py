"""
Closed vocabularies shared by the questionnaire and the brushing log.

  - ``BrushType``  - the four toothbrush categories the questionnaire can
    recommend. Persisted onto a patient record as the category slug only.
  - ``TimeOfDay``  - when a brushing session happened.
  - ``LogSource``  - where a brushing event came from.
  - ``Sex``        - patient record demographic field.

``BRUSH_TYPE_LABELS`` maps every ``BrushType`` to its display name.

This module has NO imports from any other ``hygienist_lite`` package.
"""

from enum import StrEnum


class BrushType(StrEnum):
    """Toothbrush category produced by a terminal questionnaire option."""

    COMPOUND_TUFT = "compound_tuft"
    """Multi-level compound bristles; general plaque removal in short sessions."""

    WIDE_STEPPED = "wide_stepped"
    """Large, wide head with stepped bristles; reaches the gum line."""

    ULTRA_FINE_TAPERED = "ultra_fine_tapered"
    """Ultra-fine, super-tapered bristles; gentle on sensitive gums."""

    COMPACT = "compact"
    """Small compact head; precise tooth-by-tooth brushing."""


BRUSH_TYPE_LABELS: dict[BrushType, str] = {
    BrushType.COMPOUND_TUFT:      "Compound tuft",
    BrushType.WIDE_STEPPED:       "Large / wide / stepped bristles",
    BrushType.ULTRA_FINE_TAPERED: "Ultra-fine / super-tapered bristles",
    BrushType.COMPACT:            "Small / compact head",
}


class TimeOfDay(StrEnum):
    """Time-of-day bucket of a brushing session."""

    MORNING = "morning"
    NIGHT = "night"
    OTHER = "other"


class LogSource(StrEnum):
    """Provenance tag of a brushing event."""

    DEMO = "demo"
    IMPORT = "import"


class Sex(StrEnum):
    M = "M"
    F = "F"
    OTHER = "Other"
