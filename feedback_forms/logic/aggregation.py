# feedback_forms/logic/aggregation.py
"""
Summaries derived from a form's question list and its stored responses.

Answers are always located by exact question text. A response recorded
before a question's text changed simply has no answer for it: table cells
show a placeholder, CSV cells stay empty, and tallies don't count it.

Rows (table and CSV) are ordered newest first, matching the live list of
responses.
"""

import csv
import io
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from feedback_forms.logic.question_types import (
    MULTI_VALUE_SEPARATOR,
    RATING_MAX,
    RATING_MIN,
    QuestionType,
)

logger = logging.getLogger(__name__)

TABLE_PLACEHOLDER = "—"
CSV_DATE_COLUMN = "submittedAt"

VIEW_TABLE = "table"
VIEW_CHART = "chart"


def find_answer(response, question_text: str) -> Optional[str]:
    for item in response.answers or []:
        if item.get("question_text") == question_text:
            return item.get("answer")
    return None


def newest_first(responses: Iterable) -> List:
    return sorted(responses, key=lambda r: r.created_at, reverse=True)


def option_tallies(question: Mapping[str, Any], responses: Sequence, omit_empty: bool = False) -> List[Dict[str, Any]]:
    """Count, per declared option, the responses whose answer selects it."""
    kind = QuestionType(question["type"])
    counts = {opt: 0 for opt in question.get("options") or []}

    for response in responses:
        answer = find_answer(response, question["text"])
        if answer is None:
            continue
        if kind.is_multi_valued:
            selected = set(answer.split(MULTI_VALUE_SEPARATOR))
        else:
            selected = {answer}
        for opt in counts:
            if opt in selected:
                counts[opt] += 1

    tallies = [{"option": opt, "count": n} for opt, n in counts.items()]
    if omit_empty:
        tallies = [t for t in tallies if t["count"] > 0]
    return tallies


def parse_rating(answer: Optional[str]) -> Optional[int]:
    if answer is None:
        return None
    try:
        value = int(str(answer).strip())
    except ValueError:
        return None
    if RATING_MIN <= value <= RATING_MAX:
        return value
    return None


def rating_histogram(question: Mapping[str, Any], responses: Sequence) -> Dict[int, int]:
    """Five buckets; unparsable or out of range answers are left out."""
    buckets = {value: 0 for value in range(RATING_MIN, RATING_MAX + 1)}
    for response in responses:
        value = parse_rating(find_answer(response, question["text"]))
        if value is not None:
            buckets[value] += 1
    return buckets


def summarize_question(question: Mapping[str, Any], responses: Sequence, view: str = VIEW_TABLE) -> Dict[str, Any]:
    kind = QuestionType(question["type"])
    summary: Dict[str, Any] = {"question_text": question["text"], "type": kind.value}

    if kind.has_options:
        summary["tallies"] = option_tallies(question, responses, omit_empty=(view == VIEW_CHART))
    elif kind is QuestionType.RATING:
        summary["histogram"] = rating_histogram(question, responses)
    else:
        summary["answered"] = sum(
            1 for r in responses if (find_answer(r, question["text"]) or "").strip()
        )
    return summary


def table_rows(questions: Sequence[Mapping[str, Any]], responses: Sequence, placeholder: str = TABLE_PLACEHOLDER) -> List[Dict[str, Any]]:
    rows = []
    for response in newest_first(responses):
        cells = []
        for question in questions:
            answer = find_answer(response, question["text"])
            cells.append(placeholder if answer is None else answer)
        rows.append({
            "response_id": response.id,
            "submitted_at": response.created_at,
            "cells": cells,
        })
    return rows


def summarize(questions: Sequence[Mapping[str, Any]], responses: Sequence, view: str = VIEW_TABLE) -> Dict[str, Any]:
    result: Dict[str, Any] = {
        "view": view,
        "response_count": len(responses),
        "questions": [summarize_question(q, responses, view) for q in questions],
    }
    if view == VIEW_TABLE:
        result["columns"] = [q["text"] for q in questions]
        result["rows"] = table_rows(questions, responses)
    return result


def export_csv(questions: Sequence[Mapping[str, Any]], responses: Sequence) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow([CSV_DATE_COLUMN] + [q["text"] for q in questions])

    for row in table_rows(questions, responses, placeholder=""):
        writer.writerow([row["submitted_at"].isoformat()] + row["cells"])

    logger.debug(f"Exported {len(responses)} responses across {len(questions)} columns")
    return buffer.getvalue()
