# feedback_forms/services/admins.py
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from feedback_forms.core.errors import Conflict, ValidationError, Violation
from feedback_forms.core.security import hash_password, verify_password
from feedback_forms.core.settings import settings
from feedback_forms.models.admin import Admin

logger = logging.getLogger(__name__)


async def find_by_username(db: AsyncSession, username: str) -> Optional[Admin]:
    result = await db.execute(select(Admin).where(Admin.username == username))
    return result.scalar_one_or_none()


async def register_admin(db: AsyncSession, username: str, password: str) -> Admin:
    username = (username or "").strip()

    violations = []
    if not username:
        violations.append(Violation("empty-username", "username", "Please add a username"))
    if len(password or "") < settings.PASSWORD_MIN_LENGTH:
        violations.append(Violation(
            "short-password", "password",
            f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters"
        ))
    if violations:
        raise ValidationError(violations)

    if await find_by_username(db, username):
        logger.warning(f"Registration rejected, username taken: {username}")
        raise Conflict("Admin with that username already exists")

    admin = Admin(username=username, password_hash=hash_password(password))
    db.add(admin)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration of the same name
        await db.rollback()
        raise Conflict("Admin with that username already exists")
    await db.refresh(admin)

    logger.info(f"✅ Registered admin {admin.id} ({admin.username})")
    return admin


async def authenticate_admin(db: AsyncSession, username: str, password: str) -> Optional[Admin]:
    admin = await find_by_username(db, (username or "").strip())
    if admin is None or not verify_password(password or "", admin.password_hash):
        logger.warning(f"Failed login for username {username!r}")
        return None
    return admin
