# feedback_forms/logic/validation.py
"""
Form schema validation.

``validate_form_draft`` is a pure function: it takes the raw payload of a
create or content update and either returns a normalized ``FormDraft`` or
raises ``ValidationError`` listing every violation found.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from feedback_forms.core.errors import ValidationError, Violation
from feedback_forms.logic.question_types import DEFAULT_OPTION, QuestionType


@dataclass
class FormDraft:
    title: str
    description: Optional[str]
    questions: List[Dict[str, Any]] = field(default_factory=list)


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def normalize_question(raw: Mapping[str, Any], index: int, violations: List[Violation]) -> Dict[str, Any]:
    prefix = f"questions[{index}]"

    text = _clean(raw.get("text"))
    if not text:
        violations.append(Violation(
            "empty-question-text", f"{prefix}.text", f"Question {index + 1} has no text"
        ))

    raw_type = raw.get("type")
    kind = QuestionType.parse(raw_type)
    if kind is None:
        violations.append(Violation(
            "unknown-question-type", f"{prefix}.type",
            f"Question {index + 1} has unknown type {raw_type!r}"
        ))

    question = {
        "text": text,
        "type": kind.value if kind else raw_type,
        "options": None,
        "required": bool(raw.get("required") or False),
    }

    if kind is not None and kind.has_options:
        options = [_clean(opt) for opt in (raw.get("options") or [])]
        if not options:
            options = [DEFAULT_OPTION]
        for j, opt in enumerate(options):
            if not opt:
                violations.append(Violation(
                    "empty-option", f"{prefix}.options[{j}]",
                    f"Question {index + 1} has an empty option"
                ))
        question["options"] = options

    return question


def validate_form_draft(title: Any, description: Optional[str], questions: Optional[Sequence[Mapping[str, Any]]]) -> FormDraft:
    violations: List[Violation] = []

    clean_title = _clean(title)
    if not clean_title:
        violations.append(Violation("empty-title", "title", "Please add a form title"))

    if not questions:
        violations.append(Violation("no-questions", "questions", "Form must have at least one question"))
        questions = []

    normalized = [normalize_question(q, i, violations) for i, q in enumerate(questions)]

    # Answers are keyed by question text, so texts must be unique within a form
    seen = set()
    for i, question in enumerate(normalized):
        text = question["text"]
        if not text:
            continue
        if text in seen:
            violations.append(Violation(
                "duplicate-question-text", f"questions[{i}].text",
                f'Question {i + 1} repeats the text "{text}"'
            ))
        seen.add(text)

    if violations:
        raise ValidationError(violations)

    return FormDraft(title=clean_title, description=description, questions=normalized)
