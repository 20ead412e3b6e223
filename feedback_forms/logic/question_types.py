# feedback_forms/logic/question_types.py
from enum import Enum


class QuestionType(str, Enum):
    SHORT_TEXT = "short-text"
    PARAGRAPH = "paragraph"
    SINGLE_CHOICE = "single-choice"
    MULTI_CHOICE = "multi-choice"
    DROPDOWN = "dropdown"
    RATING = "rating-1-5"

    @classmethod
    def parse(cls, raw):
        """Return the member for ``raw`` or None when it is not a known kind."""
        try:
            return cls(raw)
        except ValueError:
            return None

    @property
    def has_options(self) -> bool:
        return self in CHOICE_TYPES

    @property
    def is_multi_valued(self) -> bool:
        return self is QuestionType.MULTI_CHOICE


CHOICE_TYPES = frozenset({
    QuestionType.SINGLE_CHOICE,
    QuestionType.MULTI_CHOICE,
    QuestionType.DROPDOWN,
})

RATING_MIN = 1
RATING_MAX = 5

# Multi-choice answers are flattened to one string with this separator.
# Option text containing it is not escaped.
MULTI_VALUE_SEPARATOR = ", "

DEFAULT_OPTION = "Option 1"
