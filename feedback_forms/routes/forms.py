from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from feedback_forms.core.database import get_db
from feedback_forms.core.security import get_current_admin
from feedback_forms.logic.validation import validate_form_draft
from feedback_forms.models.admin import Admin
from feedback_forms.schemas.form import (
    FormCreate,
    FormResponse,
    FormUpdate,
    PublicFormResponse,
    StatusUpdate,
)
from feedback_forms.services import forms as form_service

router = APIRouter(
    prefix="/forms",
    tags=["Forms"]
)


# --- Public (no authentication) ---
# Declared before /{form_id} so "public" is never parsed as a form id

@router.get("/public/{token}", response_model=PublicFormResponse)
async def get_public_form(token: str, db: AsyncSession = Depends(get_db)):
    return await form_service.get_public_form(db, token)


# --- Owner only ---

@router.post("", response_model=FormResponse, status_code=status.HTTP_201_CREATED)
async def create_form(
    body: FormCreate,
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin)
):
    questions = [q.model_dump() for q in body.questions] if body.questions is not None else None
    draft = validate_form_draft(body.title, body.description, questions)
    return await form_service.create_form(db, current_admin.id, draft)


@router.get("", response_model=List[FormResponse])
async def list_forms(
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin)
):
    return await form_service.list_forms(db, current_admin.id)


@router.get("/{form_id}", response_model=FormResponse)
async def get_form(
    form_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin)
):
    return await form_service.get_owned_form(db, form_id, current_admin.id)


@router.put("/{form_id}", response_model=FormResponse)
async def update_form(
    form_id: UUID,
    body: FormUpdate,
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin)
):
    return await form_service.update_form(db, form_id, current_admin.id, body)


@router.patch("/{form_id}/status", response_model=FormResponse)
async def set_form_status(
    form_id: UUID,
    body: StatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin)
):
    return await form_service.set_form_status(db, form_id, current_admin.id, body.status)


@router.delete("/{form_id}")
async def delete_form(
    form_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin)
):
    await form_service.delete_form(db, form_id, current_admin.id)
    return {"success": True, "message": "Form and all its responses have been deleted"}
