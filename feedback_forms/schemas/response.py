from pydantic import BaseModel, StrictFloat, StrictInt, StrictStr
from typing import List, Optional, Union
from uuid import UUID
from datetime import datetime


class AnswerIn(BaseModel):
    question_text: str
    # Multi-choice selections arrive as a list and are stored joined
    # Strict members so JSON booleans are rejected instead of coerced to 1/0
    answer: Optional[Union[List[StrictStr], StrictInt, StrictFloat, StrictStr]] = None


class SubmissionCreate(BaseModel):
    answers: List[AnswerIn]


class AnswerOut(BaseModel):
    question_text: str
    answer: str


class ResponseOut(BaseModel):
    id: UUID
    form_id: UUID
    answers: List[AnswerOut]
    created_at: datetime

    class Config:
        from_attributes = True
