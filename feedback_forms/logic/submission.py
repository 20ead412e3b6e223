# feedback_forms/logic/submission.py
"""
Checks and normalization applied to a public submission before it is stored.

Answers are matched to questions by exact question text. Stored answers are
flat strings: multi-choice selections are joined with ``", "``.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

from feedback_forms.core.errors import ValidationError, Violation
from feedback_forms.logic.question_types import MULTI_VALUE_SEPARATOR, QuestionType


def index_answers(answers: Sequence[Mapping[str, Any]]) -> Dict[str, Any]:
    """Map question text to raw answer value, first occurrence wins."""
    indexed: Dict[str, Any] = {}
    for item in answers:
        text = item.get("question_text")
        if text is None or text in indexed:
            continue
        indexed[text] = item.get("answer")
    return indexed


def _is_blank(kind: Optional[QuestionType], value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (list, tuple, set)):
        return not any(str(v).strip() for v in value if v is not None)
    if kind is QuestionType.MULTI_CHOICE:
        return not [part for part in str(value).split(MULTI_VALUE_SEPARATOR) if part.strip()]
    return str(value).strip() == ""


def check_required_answers(questions: Sequence[Mapping[str, Any]], answers: Mapping[str, Any]) -> None:
    violations: List[Violation] = []
    for question in questions:
        if not question.get("required"):
            continue
        text = question["text"]
        kind = QuestionType.parse(question.get("type"))
        if text not in answers or _is_blank(kind, answers[text]):
            violations.append(Violation(
                "missing-required", f"answers[{text}]", f'Question "{text}" is required.'
            ))
    if violations:
        raise ValidationError(violations)


def flatten_answer(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        parts = [str(v).strip() for v in value if v is not None]
        return MULTI_VALUE_SEPARATOR.join(p for p in parts if p)
    return str(value).strip()


def normalize_answers(questions: Sequence[Mapping[str, Any]], answers: Mapping[str, Any]) -> List[Dict[str, str]]:
    """
    Build the stored answer list in the form's question order.

    Questions without a submitted (non-null) answer are left out; answers to
    question texts the form does not have are dropped.
    """
    stored = []
    for question in questions:
        text = question["text"]
        value = answers.get(text)
        if value is None:
            continue
        stored.append({"question_text": text, "answer": flatten_answer(value)})
    return stored
