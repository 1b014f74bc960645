"""
Versioned clinic bundle: JSON ↔ ``ClinicBundle``.

JSON shape
----------
::

    {
      "patients": [ {"id": "patient-1", "name": "...", ...}, ... ],
      "logs":     [ {"id": "...", "patientId": "...", "dateISO": "2026-10-01",
                     "durationSec": 120, "timeOfDay": "morning",
                     "selfRating": 4, "source": "import"}, ... ],
      "messages": [ ... ],                     (optional)
      "version":  "daisan-hygienist-lite-v1"
    }

Validation rules
----------------
- ``version`` must equal ``BUNDLE_VERSION`` exactly.
- Every patient, log and message must validate against its model.
- Any failure rejects the whole bundle with ``BundleError``; a bundle is
  never partially accepted.

Updates
-------
``assign_brush_type()`` and ``set_follow_up()`` return a new bundle with one
patient record replaced; the caller writes it back with ``save_bundle()``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from hygienist_lite.models.brush_event import BrushEvent
from hygienist_lite.models.patient import FollowUp, MessageSummary, Patient
from hygienist_lite.taxonomy.brush_taxonomy import BrushType

log = logging.getLogger(__name__)

BUNDLE_VERSION = "daisan-hygienist-lite-v1"


class BundleError(ValueError):
    """Raised when a clinic bundle cannot be parsed, validated or versioned."""


class ClinicBundle(BaseModel):
    """Everything the clinic stores, as one immutable document."""

    model_config = ConfigDict(frozen=True)

    patients: tuple[Patient, ...] = ()
    logs: tuple[BrushEvent, ...] = ()
    messages: tuple[MessageSummary, ...] = ()
    version: str = BUNDLE_VERSION

    def events_for_patient(self, patient_id: str) -> list[BrushEvent]:
        return [e for e in self.logs if e.patient_id == patient_id]

    def find_patient(self, patient_id: str) -> Patient | None:
        return next((p for p in self.patients if p.id == patient_id), None)


def empty_bundle() -> ClinicBundle:
    return ClinicBundle()


def parse_bundle(text: str) -> ClinicBundle:
    """Parse and validate a bundle JSON string.

    Raises:
        BundleError: On invalid JSON, a version mismatch, or any record
            failing validation.
    """
    try:
        raw: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise BundleError(f"Bundle JSON parse error: {exc}") from exc

    if not isinstance(raw, dict):
        raise BundleError("Bundle must be a JSON object.")

    version = raw.get("version")
    if version != BUNDLE_VERSION:
        raise BundleError(
            f"Unsupported bundle version {version!r}; expected '{BUNDLE_VERSION}'."
        )

    try:
        return ClinicBundle.model_validate(
            {
                "patients": raw.get("patients") or [],
                "logs": raw.get("logs") or [],
                "messages": raw.get("messages") or [],
                "version": version,
            }
        )
    except ValidationError as exc:
        raise BundleError(f"Bundle failed validation: {exc}") from exc


def load_bundle(path: Path) -> ClinicBundle:
    """Load a bundle file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        BundleError: If the file content is rejected.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Bundle file not found: {path}")

    bundle = parse_bundle(path.read_text(encoding="utf-8"))
    log.info(
        "Loaded bundle %s: %d patients, %d logs, %d messages.",
        path, len(bundle.patients), len(bundle.logs), len(bundle.messages),
    )
    return bundle


def dump_bundle(bundle: ClinicBundle) -> str:
    """Serialize a bundle to pretty-printed JSON using the external key names."""
    payload = bundle.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(payload, indent=2, ensure_ascii=False)


def save_bundle(bundle: ClinicBundle, path: Path) -> None:
    """Write a bundle to ``path``, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_bundle(bundle), encoding="utf-8")
    log.info("Saved bundle to %s (%d logs).", path, len(bundle.logs))


# ── Patient updates ───────────────────────────────────────────────────────────


def _replace_patient(bundle: ClinicBundle, patient_id: str, **updates: Any) -> ClinicBundle:
    if bundle.find_patient(patient_id) is None:
        raise BundleError(f"Patient '{patient_id}' not found in bundle.")
    patients = tuple(
        p.model_copy(update=updates) if p.id == patient_id else p
        for p in bundle.patients
    )
    return bundle.model_copy(update={"patients": patients})


def assign_brush_type(
    bundle: ClinicBundle, patient_id: str, brush_type: BrushType
) -> ClinicBundle:
    """Record the recommended toothbrush category on a patient.

    Raises:
        BundleError: If ``patient_id`` is not in the bundle.
    """
    updated = _replace_patient(bundle, patient_id, brush_type=BrushType(brush_type))
    log.info(
        "Assigned brush type %s.", brush_type,
        extra={"patient_id": patient_id, "brush_type": str(brush_type)},
    )
    return updated


def set_follow_up(
    bundle: ClinicBundle,
    patient_id: str,
    flag: bool,
    note: Optional[str] = None,
) -> ClinicBundle:
    """Set or clear a patient's follow-up flag.

    An empty ``note`` is stored as no note.

    Raises:
        BundleError: If ``patient_id`` is not in the bundle.
    """
    follow_up = FollowUp(flag=flag, note=note or None)
    updated = _replace_patient(bundle, patient_id, follow_up=follow_up)
    log.info(
        "Follow-up %s.", "set" if flag else "cleared",
        extra={"patient_id": patient_id},
    )
    return updated
