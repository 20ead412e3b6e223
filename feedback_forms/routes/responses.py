from typing import List, Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from feedback_forms.core.database import get_db
from feedback_forms.core.security import get_current_admin
from feedback_forms.logic.aggregation import VIEW_TABLE
from feedback_forms.models.admin import Admin
from feedback_forms.schemas.response import ResponseOut, SubmissionCreate
from feedback_forms.services import responses as response_service

router = APIRouter(
    prefix="/responses",
    tags=["Responses"]
)


@router.post("/public/{token}", status_code=status.HTTP_201_CREATED)
async def submit_response(
    token: str,
    body: SubmissionCreate,
    db: AsyncSession = Depends(get_db)
):
    """Public submission against a form's sharing token."""
    response = await response_service.submit_response(
        db, token, [a.model_dump() for a in body.answers]
    )
    return {
        "success": True,
        "message": "Response submitted successfully",
        "response": ResponseOut.model_validate(response),
    }


@router.get("/{form_id}", response_model=List[ResponseOut])
async def list_responses(
    form_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin)
):
    return await response_service.list_responses(db, form_id, current_admin.id)


@router.get("/{form_id}/summary")
async def summarize_responses(
    form_id: UUID,
    view: Literal["table", "chart"] = Query(VIEW_TABLE),
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin)
):
    return await response_service.summarize_responses(db, form_id, current_admin.id, view)


@router.get("/{form_id}/export")
async def export_responses(
    form_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin)
):
    form, payload = await response_service.export_responses_csv(db, form_id, current_admin.id)
    return Response(
        content=payload,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="form-{form.public_token}-responses.csv"'},
    )
