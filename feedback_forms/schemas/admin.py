from pydantic import BaseModel
from uuid import UUID
from datetime import datetime


class AdminCredentials(BaseModel):
    username: str
    password: str


class AdminResponse(BaseModel):
    id: UUID
    username: str
    created_at: datetime

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    id: UUID
    username: str
    token: str
    token_type: str = "bearer"
