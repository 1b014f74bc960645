"""
Patient record models carried inside the clinic bundle.

The core analytics never read these: they consume ``BrushEvent`` lists
only. The roster layer joins a ``Patient`` with its computed metrics for
ranking and flagging.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from hygienist_lite.taxonomy.brush_taxonomy import BrushType, Sex


class FollowUp(BaseModel):
    """Clinician follow-up flag with an optional note."""

    model_config = ConfigDict(frozen=True)

    flag: bool = False
    note: Optional[str] = None


class Patient(BaseModel):
    """A patient record.

    Attributes:
        id: Stable patient identifier, referenced by ``BrushEvent.patient_id``.
        name: Display name.
        brush_type: Toothbrush category chosen from the questionnaire, if any.
        follow_up: Follow-up flag set by the clinician.
        next_appointment: Date of the next booked visit, or ``None``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    birthday: Optional[date] = None
    sex: Optional[Sex] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    notes: Optional[str] = None
    brush_type: Optional[BrushType] = Field(default=None, alias="brushType")
    follow_up: Optional[FollowUp] = Field(default=None, alias="followUp")
    next_appointment: Optional[date] = Field(default=None, alias="nextAppointment")

    @property
    def needs_follow_up(self) -> bool:
        return self.follow_up is not None and self.follow_up.flag


class MessageSummary(BaseModel):
    """Short summary of a message exchanged with a patient."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    patient_id: str = Field(alias="patientId")
    created_at: datetime = Field(alias="createdAt")
    summary: str
