"""
Questionnaire loader: JSON file → validated ``QuestionnaireRules``.

Validation rules (enforced by the pydantic models)
--------------------------------------------------
- The root question id must be defined.
- Every option sets exactly one of ``next`` / ``result``.
- Option values are unique within a question.
- Every ``result`` category must have recommendation text.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from hygienist_lite.models.questionnaire import QuestionnaireRules

log = logging.getLogger(__name__)


class QuestionnaireConfigError(ValueError):
    """Raised when a questionnaire file cannot be parsed or validated."""


def parse_rules(raw: dict) -> QuestionnaireRules:
    """Validate a raw questionnaire dict.

    Raises:
        QuestionnaireConfigError: If the structure fails validation.
    """
    try:
        return QuestionnaireRules.model_validate(raw)
    except ValidationError as exc:
        raise QuestionnaireConfigError(f"Invalid questionnaire: {exc}") from exc


def load_rules(path: Path) -> QuestionnaireRules:
    """Load and validate a questionnaire JSON file.

    Args:
        path: Path to the questionnaire JSON file.

    Returns:
        Frozen ``QuestionnaireRules``.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        QuestionnaireConfigError: If the file is not valid JSON or fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Questionnaire file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as exc:
        raise QuestionnaireConfigError(f"Questionnaire JSON parse error in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise QuestionnaireConfigError(f"Questionnaire file {path} must contain an object.")

    rules = parse_rules(raw)
    log.info(
        "Loaded questionnaire from %s: %d questions, %d categories.",
        path, len(rules.questions), len(rules.recommendations),
    )
    return rules
