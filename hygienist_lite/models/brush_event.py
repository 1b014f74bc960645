"""
Brushing event model: one immutable fact from a patient's brushing log.

``BrushEvent`` mirrors the external log entry stored in the clinic bundle.
Python attribute names are snake_case; the JSON keys of the bundle format
(``patientId``, ``dateISO``, ``durationSec``, ...) are accepted as aliases and
emitted by ``model_dump(by_alias=True)``.

Events are never edited. Several events may share one calendar date
(e.g. a morning and a night session); the analytics layer groups them.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from hygienist_lite.taxonomy.brush_taxonomy import LogSource, TimeOfDay


class BrushEvent(BaseModel):
    """A single logged brushing session.

    Attributes:
        id: Stable event identifier.
        patient_id: Owning patient's identifier.
        log_date: Calendar date of the session (no time component).
        duration_sec: Session length in seconds; non-negative.
        time_of_day: ``morning``, ``night`` or ``other``.
        self_rating: Patient's self-assessment, 1 (poor) to 5 (excellent).
        bleeding: Gum bleeding reported, or ``None`` when not recorded.
        sensitivity: Tooth sensitivity reported, or ``None``.
        pain: Pain reported, or ``None``.
        source: Provenance tag (``demo`` or ``import``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    patient_id: str = Field(alias="patientId")
    log_date: date = Field(alias="dateISO")
    duration_sec: int = Field(alias="durationSec", ge=0)
    time_of_day: TimeOfDay = Field(alias="timeOfDay")
    self_rating: int = Field(alias="selfRating", ge=1, le=5)
    bleeding: Optional[bool] = None
    sensitivity: Optional[bool] = None
    pain: Optional[bool] = None
    source: LogSource = LogSource.IMPORT
