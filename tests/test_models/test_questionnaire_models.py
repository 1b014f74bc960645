"""Tests for questionnaire models: option targets, node ids, immutability."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from hygienist_lite.models.questionnaire import (
    QuestionAnswer,
    QuestionNode,
    QuestionOption,
    QuestionnaireRules,
    RecommendationResult,
)
from hygienist_lite.taxonomy.brush_taxonomy import BrushType


class TestQuestionOption:
    def test_next_option(self):
        opt = QuestionOption(value="yes", label="Yes", next="Q2")
        assert opt.next_id == "Q2"
        assert not opt.is_terminal

    def test_result_option(self):
        opt = QuestionOption(value="no", result="compact")
        assert opt.result == BrushType.COMPACT
        assert opt.is_terminal

    def test_both_targets_raises(self):
        with pytest.raises(ValidationError, match="exactly one"):
            QuestionOption(value="x", next="Q2", result="compact")

    def test_no_target_raises(self):
        with pytest.raises(ValidationError, match="exactly one"):
            QuestionOption(value="x")

    def test_unknown_category_raises(self):
        with pytest.raises(ValidationError):
            QuestionOption(value="x", result="electric")


class TestQuestionNode:
    def test_option_for(self):
        node = QuestionNode(
            id="Q1",
            text="?",
            options=[QuestionOption(value="a", next="Q2"), QuestionOption(value="b", next="Q3")],
        )
        assert node.option_for("b").next_id == "Q3"
        assert node.option_for("c") is None

    def test_duplicate_values_raise(self):
        with pytest.raises(ValidationError, match="duplicate"):
            QuestionNode(
                id="Q1",
                text="?",
                options=[QuestionOption(value="a", next="Q2"), QuestionOption(value="a", next="Q3")],
            )

    def test_empty_options_raise(self):
        with pytest.raises(ValidationError, match="no options"):
            QuestionNode(id="Q1", text="?", options=[])


class TestQuestionnaireRules:
    def test_ids_injected_from_keys(self, minimal_rules_dict):
        rules = QuestionnaireRules.model_validate(minimal_rules_dict)
        assert rules.questions["A"].id == "A"
        assert rules.questions["B"].id == "B"

    def test_mismatched_id_raises(self, minimal_rules_dict):
        minimal_rules_dict["questions"]["A"]["id"] = "Other"
        with pytest.raises(ValidationError, match="does not match"):
            QuestionnaireRules.model_validate(minimal_rules_dict)

    def test_dangling_next_is_accepted(self, minimal_rules_dict):
        minimal_rules_dict["questions"]["A"]["options"][0]["next"] = "GHOST"
        rules = QuestionnaireRules.model_validate(minimal_rules_dict)
        assert rules.questions["A"].options[0].next_id == "GHOST"

    def test_rules_are_frozen(self, rules):
        with pytest.raises(ValidationError):
            rules.root_id = "Q2"

    def test_question_table_is_read_only(self, rules):
        with pytest.raises(TypeError):
            rules.questions["Q1"] = rules.questions["Q2"]  # type: ignore[index]
        assert rules.questions["Q1"].id == "Q1"

    def test_recommendation_table_is_read_only(self, rules):
        with pytest.raises(AttributeError):
            rules.recommendations.clear()  # type: ignore[attr-defined]
        with pytest.raises(TypeError):
            del rules.recommendations[BrushType.COMPACT]  # type: ignore[attr-defined]
        assert set(rules.recommendations) == set(BrushType)


def test_question_answer_accepts_alias():
    qa = QuestionAnswer.model_validate({"questionId": "Q1", "answer": "yes"})
    assert qa.question_id == "Q1"


def test_recommendation_result_dumps_external_keys():
    result = RecommendationResult(brush_type=BrushType.COMPACT, reason="r", notes="n")
    dumped = result.model_dump(mode="json", by_alias=True)
    assert dumped["brushType"] == "compact"
    assert dumped["marketExamples"] is None
