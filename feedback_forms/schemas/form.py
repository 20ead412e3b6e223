from pydantic import BaseModel
from typing import ClassVar, List, Optional, Tuple
from uuid import UUID
from datetime import datetime

from feedback_forms.models.form import FormStatus


class QuestionIn(BaseModel):
    # Loosely typed so schema validation can report every violation at once
    text: Optional[str] = None
    type: Optional[str] = None
    options: Optional[List[Optional[str]]] = None
    required: bool = False


class FormCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    questions: Optional[List[QuestionIn]] = None


class FormUpdate(BaseModel):
    """Partial update; content fields are subject to the edit lock, status is not."""
    title: Optional[str] = None
    description: Optional[str] = None
    questions: Optional[List[QuestionIn]] = None
    status: Optional[FormStatus] = None

    CONTENT_FIELDS: ClassVar[Tuple[str, ...]] = ("title", "description", "questions")

    def touches_content(self) -> bool:
        return any(name in self.model_fields_set for name in self.CONTENT_FIELDS)


class StatusUpdate(BaseModel):
    status: FormStatus


class QuestionOut(BaseModel):
    text: str
    type: str
    options: Optional[List[str]] = None
    required: bool = False


class PublicFormResponse(BaseModel):
    id: UUID
    title: str
    description: Optional[str] = None
    questions: List[QuestionOut]
    status: FormStatus

    class Config:
        from_attributes = True


class FormResponse(PublicFormResponse):
    owner_id: UUID
    response_count: int
    public_token: str
    created_at: datetime
    updated_at: datetime
