"""
Questionnaire models: the decision tree, its answers, and its result.

The decision tree is configuration data, loaded once at startup and never
mutated (all models are frozen and the question and recommendation tables
are read-only mappings). It is a map from question id to
``QuestionNode``; each ``QuestionOption`` either points to the ``next``
question id or resolves to a terminal ``result`` category. New branches are
data, not code.

JSON shape (``config/questionnaire/toothbrush_rules.json``)::

    {
      "root_id": "Q1",
      "questions": {
        "Q1": {"text": "...", "options": [
          {"value": "yes", "label": "...", "next": "Q2"},
          {"value": "no",  "label": "...", "result": "compact"}
        ]}
      },
      "recommendations": {"compact": {"reason": "...", "notes": "..."}},
      "disclaimer": "..."
    }

Structural validation is limited to shape: the root must exist and every
``result`` category must have recommendation text. A ``next`` id that names
no question is accepted here and treated as a dead end during traversal.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from hygienist_lite.taxonomy.brush_taxonomy import BrushType


class QuestionAnswer(BaseModel):
    """One answer given during an intake session."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    question_id: str = Field(alias="questionId")
    answer: str


class QuestionOption(BaseModel):
    """A selectable answer for a question.

    Exactly one of ``next_id`` / ``result`` is set.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    value: str
    label: str = ""
    next_id: Optional[str] = Field(default=None, alias="next")
    result: Optional[BrushType] = None

    @model_validator(mode="after")
    def validate_single_target(self) -> "QuestionOption":
        if (self.next_id is None) == (self.result is None):
            raise ValueError(
                f"Option '{self.value}' must set exactly one of 'next' or 'result'."
            )
        return self

    @property
    def is_terminal(self) -> bool:
        return self.result is not None


class QuestionNode(BaseModel):
    """One step of the decision tree.

    Attributes:
        id: Stable question identifier, e.g. ``"Q1"``.
        text: Display text of the question.
        options: Ordered answer options; values are unique within the node.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    options: tuple[QuestionOption, ...]

    @model_validator(mode="after")
    def validate_unique_values(self) -> "QuestionNode":
        values = [opt.value for opt in self.options]
        if len(values) != len(set(values)):
            raise ValueError(f"Question '{self.id}' has duplicate option values.")
        if not values:
            raise ValueError(f"Question '{self.id}' has no options.")
        return self

    def option_for(self, value: str) -> Optional[QuestionOption]:
        """Return the option whose value equals ``value``, or ``None``."""
        for opt in self.options:
            if opt.value == value:
                return opt
        return None


class RecommendationText(BaseModel):
    """Static rationale text attached to one toothbrush category."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    reason: str
    notes: str
    market_examples: Optional[str] = Field(default=None, alias="marketExamples")


class QuestionnaireRules(BaseModel):
    """The complete questionnaire configuration."""

    model_config = ConfigDict(frozen=True)

    root_id: str = "Q1"
    questions: Mapping[str, QuestionNode]
    recommendations: Mapping[BrushType, RecommendationText]
    disclaimer: str = ""

    @model_validator(mode="before")
    @classmethod
    def inject_question_ids(cls, data: Any) -> Any:
        """Fill each node's ``id`` from its key when the JSON omits it."""
        if isinstance(data, dict) and isinstance(data.get("questions"), dict):
            questions = {}
            for qid, node in data["questions"].items():
                if isinstance(node, dict) and "id" not in node:
                    node = {**node, "id": qid}
                questions[qid] = node
            data = {**data, "questions": questions}
        return data

    @field_validator("questions", "recommendations", mode="after")
    @classmethod
    def freeze_mapping(cls, v: Mapping) -> Mapping:
        """Store tables as read-only views; item assignment raises ``TypeError``."""
        return MappingProxyType(dict(v))

    @model_validator(mode="after")
    def validate_structure(self) -> "QuestionnaireRules":
        if self.root_id not in self.questions:
            raise ValueError(f"Root question '{self.root_id}' is not defined.")
        for qid, node in self.questions.items():
            if node.id != qid:
                raise ValueError(f"Question key '{qid}' does not match node id '{node.id}'.")
            for opt in node.options:
                if opt.result is not None and opt.result not in self.recommendations:
                    raise ValueError(
                        f"Question '{qid}' option '{opt.value}' resolves to "
                        f"'{opt.result}', which has no recommendation text."
                    )
        return self


class RecommendationResult(BaseModel):
    """Toothbrush recommendation produced from a terminal category."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    brush_type: BrushType = Field(alias="brushType")
    reason: str
    notes: str
    market_examples: Optional[str] = Field(default=None, alias="marketExamples")
