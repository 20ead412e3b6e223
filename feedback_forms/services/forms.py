# feedback_forms/services/forms.py
"""
Form lifecycle: create, list, read, edit, open/close, delete.

The content edit lock is a read-check-write against ``response_count``; a
submission committing between the check and the write can leave a form
edited after its first response. That gap is accepted.
"""

import logging
import secrets
from typing import List
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from feedback_forms.core.errors import Internal, NotFound
from feedback_forms.core.settings import settings
from feedback_forms.logic.access import require_editable_content, require_open, require_owner
from feedback_forms.logic.validation import FormDraft, validate_form_draft
from feedback_forms.models.form import Form, FormStatus
from feedback_forms.models.response import Response
from feedback_forms.schemas.form import FormUpdate

logger = logging.getLogger(__name__)


def generate_public_token() -> str:
    return secrets.token_hex(settings.PUBLIC_TOKEN_BYTES)


async def _token_taken(db: AsyncSession, token: str) -> bool:
    result = await db.execute(select(Form.id).where(Form.public_token == token))
    return result.first() is not None


async def create_form(db: AsyncSession, owner_id: UUID, draft: FormDraft) -> Form:
    for attempt in range(1, settings.PUBLIC_TOKEN_MAX_ATTEMPTS + 1):
        token = generate_public_token()
        if await _token_taken(db, token):
            continue

        form = Form(
            owner_id=owner_id,
            title=draft.title,
            description=draft.description,
            questions=draft.questions,
            status=FormStatus.OPEN.value,
            response_count=0,
            public_token=token,
        )
        db.add(form)
        try:
            await db.commit()
        except IntegrityError:
            # Unique index on public_token caught a concurrent create
            await db.rollback()
            logger.warning(f"Public token collision on attempt {attempt}, regenerating")
            continue

        await db.refresh(form)
        logger.info(f"✅ Created form {form.id} with {len(form.questions)} questions for admin {owner_id}")
        return form

    logger.error(f"Could not allocate a unique public token after {settings.PUBLIC_TOKEN_MAX_ATTEMPTS} attempts")
    raise Internal("Could not allocate a public link for this form")


async def list_forms(db: AsyncSession, owner_id: UUID) -> List[Form]:
    result = await db.execute(
        select(Form)
        .where(Form.owner_id == owner_id)
        .order_by(Form.created_at.desc())
    )
    return list(result.scalars().all())


async def load_form(db: AsyncSession, form_id: UUID) -> Form:
    form = await db.get(Form, form_id)
    if form is None:
        raise NotFound("Form not found")
    return form


async def get_owned_form(db: AsyncSession, form_id: UUID, owner_id: UUID) -> Form:
    form = await load_form(db, form_id)
    require_owner(form, owner_id)
    return form


async def set_form_status(db: AsyncSession, form_id: UUID, owner_id: UUID, status: FormStatus) -> Form:
    form = await get_owned_form(db, form_id, owner_id)
    form.status = FormStatus(status).value
    await db.commit()
    await db.refresh(form)
    logger.info(f"Form {form.id} is now {form.status}")
    return form


async def update_form(db: AsyncSession, form_id: UUID, owner_id: UUID, patch: FormUpdate) -> Form:
    form = await get_owned_form(db, form_id, owner_id)

    if not patch.touches_content():
        if patch.status is not None:
            return await set_form_status(db, form_id, owner_id, patch.status)
        return form

    if form.response_count:
        logger.warning(f"Content edit rejected for form {form.id}: {form.response_count} responses exist")
    require_editable_content(form)

    fields = patch.model_fields_set
    title = patch.title if "title" in fields else form.title
    description = patch.description if "description" in fields else form.description
    if "questions" in fields:
        questions = [q.model_dump() for q in patch.questions] if patch.questions is not None else None
    else:
        questions = form.questions

    draft = validate_form_draft(title, description, questions)

    form.title = draft.title
    form.description = draft.description
    form.questions = draft.questions
    if patch.status is not None:
        form.status = patch.status.value

    await db.commit()
    await db.refresh(form)
    logger.info(f"✅ Updated form {form.id}")
    return form


async def delete_form(db: AsyncSession, form_id: UUID, owner_id: UUID) -> None:
    form = await get_owned_form(db, form_id, owner_id)

    # Responses and form go in one transaction so no orphans are left behind
    result = await db.execute(delete(Response).where(Response.form_id == form.id))
    await db.delete(form)
    await db.commit()

    logger.info(f"🗑️ Deleted form {form_id} and {result.rowcount} responses")


async def find_by_public_token(db: AsyncSession, token: str) -> Form:
    result = await db.execute(select(Form).where(Form.public_token == token))
    form = result.scalar_one_or_none()
    if form is None:
        raise NotFound("Form not found or link is invalid")
    return form


async def get_public_form(db: AsyncSession, token: str) -> Form:
    form = await find_by_public_token(db, token)
    require_open(form)
    return form
