"""
Intake session: the questionnaire as an explicit finite-state machine.

State is either "asking ``current_question_id``" or "done with ``result``".
Each call to ``answer()`` is one transition:

  - unknown option value → no transition, returns ``False``
  - ``next`` option      → move to the next question
  - ``result`` option    → resolve the full answer history through
                           ``RecommendationEngine.recommend()`` and finish
  - ``next`` naming an undefined question → finish with ``result = None``

The complete answer history is retained so the engine's last-write-wins
rule sees every answer given in the session. ``reset()`` returns to the root
question and clears the history.
"""

from __future__ import annotations

from typing import Optional

from hygienist_lite.models.questionnaire import (
    QuestionAnswer,
    QuestionNode,
    RecommendationResult,
)
from hygienist_lite.recommendations.engine import RecommendationEngine


class IntakeSession:
    """One respondent's pass through the questionnaire."""

    def __init__(self, engine: RecommendationEngine) -> None:
        self._engine = engine
        self._current_id: Optional[str] = engine.root_id
        self._answers: list[QuestionAnswer] = []
        self._result: Optional[RecommendationResult] = None

    @property
    def current_question_id(self) -> Optional[str]:
        """Id of the question being asked; ``None`` once the session is done."""
        return self._current_id

    @property
    def current_question(self) -> Optional[QuestionNode]:
        if self._current_id is None:
            return None
        return self._engine.get_question(self._current_id)

    @property
    def answers(self) -> tuple[QuestionAnswer, ...]:
        return tuple(self._answers)

    @property
    def result(self) -> Optional[RecommendationResult]:
        return self._result

    @property
    def is_complete(self) -> bool:
        return self._current_id is None

    @property
    def step_number(self) -> int:
        """1-based number of the question currently shown."""
        return len(self._answers) + 1

    def answer(self, value: str) -> bool:
        """Apply one answer to the current question.

        Returns:
            ``True`` if the answer matched an option and the state advanced,
            ``False`` if the session is complete, the current question is
            unknown, or ``value`` matches no option.
        """
        node = self.current_question
        if node is None:
            return False
        option = node.option_for(value)
        if option is None:
            return False

        self._answers.append(QuestionAnswer(question_id=node.id, answer=value))

        if option.is_terminal:
            self._result = self._engine.recommend(self._answers)
            self._current_id = None
        elif self._engine.get_question(option.next_id) is None:  # type: ignore[arg-type]
            self._result = None
            self._current_id = None
        else:
            self._current_id = option.next_id
        return True

    def reset(self) -> None:
        self._current_id = self._engine.root_id
        self._answers = []
        self._result = None
