"""
Toothbrush recommendation: questionnaire traversal and intake sessions.

Modules
-------
engine   : RecommendationEngine - pure traversal of the decision tree,
           last-write-wins answers, None for incomplete paths.
session  : IntakeSession - finite-state machine over one respondent's answers.
loader   : load_rules() - questionnaire JSON → validated QuestionnaireRules.
"""
