# feedback_forms/services/responses.py
import logging
from typing import Any, Dict, List, Mapping, Sequence, Tuple
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from feedback_forms.core.errors import NotFound, ValidationError, Violation
from feedback_forms.logic import aggregation
from feedback_forms.logic.access import require_open
from feedback_forms.logic.submission import check_required_answers, index_answers, normalize_answers
from feedback_forms.models.form import Form
from feedback_forms.models.response import Response
from feedback_forms.services.forms import find_by_public_token, get_owned_form

logger = logging.getLogger(__name__)


async def submit_response(db: AsyncSession, token: str, answers: Sequence[Mapping[str, Any]]) -> Response:
    form = await find_by_public_token(db, token)
    require_open(form)

    if not answers:
        raise ValidationError([Violation("no-answers", "answers", "Please provide answers to the questions")])

    indexed = index_answers(answers)
    try:
        check_required_answers(form.questions, indexed)
    except ValidationError as e:
        logger.warning(f"Submission to form {form.id} rejected: {e.message}")
        raise

    response = Response(form_id=form.id, answers=normalize_answers(form.questions, indexed))
    db.add(response)

    # Single-statement increment; updated_at is pinned so submissions don't touch it
    await db.execute(
        update(Form)
        .where(Form.id == form.id)
        .values(response_count=Form.response_count + 1, updated_at=Form.updated_at)
    )
    await db.commit()
    await db.refresh(response)

    logger.info(f"📨 Response {response.id} accepted for form {form.id}")
    return response


async def fetch_responses(db: AsyncSession, form_id: UUID) -> List[Response]:
    result = await db.execute(
        select(Response)
        .where(Response.form_id == form_id)
        .order_by(Response.created_at.desc())
    )
    return list(result.scalars().all())


async def list_responses(db: AsyncSession, form_id: UUID, owner_id: UUID) -> List[Response]:
    form = await get_owned_form(db, form_id, owner_id)
    return await fetch_responses(db, form.id)


async def summarize_responses(db: AsyncSession, form_id: UUID, owner_id: UUID, view: str) -> Dict[str, Any]:
    form = await get_owned_form(db, form_id, owner_id)
    responses = await fetch_responses(db, form.id)
    return aggregation.summarize(form.questions, responses, view)


async def export_responses_csv(db: AsyncSession, form_id: UUID, owner_id: UUID) -> Tuple[Form, str]:
    form = await get_owned_form(db, form_id, owner_id)
    responses = await fetch_responses(db, form.id)
    if not responses:
        raise NotFound("No responses to export")
    return form, aggregation.export_csv(form.questions, responses)
