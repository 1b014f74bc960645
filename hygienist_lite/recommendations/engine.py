"""
Deterministic toothbrush recommendation engine.

Traversal
---------
1. Collapse the answer sequence into ``question_id -> answer``; a later
   answer for the same question replaces an earlier one (a respondent may
   revisit a question after a reset).
2. Start at ``rules.root_id``. Look up the node, find the option whose value
   equals the stored answer:
     - ``result`` option → build the ``RecommendationResult`` for that
       category from the static text table and stop.
     - ``next`` option   → move to that question id and repeat.

Incomplete paths
----------------
``recommend()`` returns ``None`` and never raises when:
  - the current question has no recorded answer,
  - the answer matches none of the node's options,
  - a ``next`` id names a question that does not exist,
  - more nodes are visited than the tree contains (a malformed, cyclic tree).

``None`` means "keep asking" or "cannot recommend", not a defect.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from hygienist_lite.models.questionnaire import (
    QuestionAnswer,
    QuestionNode,
    QuestionnaireRules,
    RecommendationResult,
)
from hygienist_lite.taxonomy.brush_taxonomy import BrushType

log = logging.getLogger(__name__)


class RecommendationEngine:
    """Walks a ``QuestionnaireRules`` tree to a toothbrush category.

    The engine holds no per-session state; one instance can serve any number
    of callers.

    Args:
        rules: Validated questionnaire configuration.
    """

    def __init__(self, rules: QuestionnaireRules) -> None:
        self._rules = rules

    @property
    def rules(self) -> QuestionnaireRules:
        return self._rules

    @property
    def root_id(self) -> str:
        return self._rules.root_id

    @property
    def disclaimer(self) -> str:
        """Static disclaimer shown alongside every recommendation."""
        return self._rules.disclaimer

    def get_question(self, question_id: str) -> Optional[QuestionNode]:
        """Return the question node for ``question_id``, or ``None``."""
        return self._rules.questions.get(question_id)

    def recommend(self, answers: Iterable[QuestionAnswer]) -> Optional[RecommendationResult]:
        """Resolve an answer sequence to a recommendation.

        Args:
            answers: Ordered answers from one session. Later entries for the
                same question id win.

        Returns:
            ``RecommendationResult`` when the answers reach a terminal option,
            otherwise ``None``.
        """
        answer_map: dict[str, str] = {}
        for qa in answers:
            answer_map[qa.question_id] = qa.answer

        max_steps = len(self._rules.questions)
        question_id = self._rules.root_id

        for _ in range(max_steps):
            node = self._rules.questions.get(question_id)
            if node is None:
                log.debug("Dead end: question '%s' is not defined.", question_id)
                return None

            answer = answer_map.get(question_id)
            if answer is None:
                log.debug("Incomplete: no answer for question '%s'.", question_id)
                return None

            option = node.option_for(answer)
            if option is None:
                log.debug(
                    "Unrecognised answer '%s' for question '%s'.", answer, question_id
                )
                return None

            if option.result is not None:
                return self.build_result(option.result)

            question_id = option.next_id  # type: ignore[assignment]

        log.warning(
            "Traversal exceeded %d steps from '%s'; questionnaire contains a cycle.",
            max_steps, self._rules.root_id,
        )
        return None

    def build_result(self, brush_type: BrushType) -> RecommendationResult:
        """Build the result for ``brush_type`` from the static text table."""
        text = self._rules.recommendations[brush_type]
        return RecommendationResult(
            brush_type=brush_type,
            reason=text.reason,
            notes=text.notes,
            market_examples=text.market_examples,
        )
