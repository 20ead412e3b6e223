from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from feedback_forms.core.database import get_db
from feedback_forms.core.security import create_access_token, get_current_admin
from feedback_forms.models.admin import Admin
from feedback_forms.schemas.admin import AdminCredentials, AdminResponse, AuthResponse
from feedback_forms.services.admins import authenticate_admin, register_admin

router = APIRouter(prefix="/auth", tags=["Auth"])


def _token_for(admin: Admin) -> AuthResponse:
    return AuthResponse(
        id=admin.id,
        username=admin.username,
        token=create_access_token({"admin_id": str(admin.id)}),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(body: AdminCredentials, db: AsyncSession = Depends(get_db)):
    admin = await register_admin(db, body.username, body.password)
    return _token_for(admin)


@router.post("/login", response_model=AuthResponse)
async def login(body: AdminCredentials, db: AsyncSession = Depends(get_db)):
    admin = await authenticate_admin(db, body.username, body.password)
    if admin is None:
        # Same message for unknown user and wrong password
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password"
        )
    return _token_for(admin)


@router.get("/me", response_model=AdminResponse)
async def me(current_admin: Admin = Depends(get_current_admin)):
    return current_admin
