import uuid

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from lineup.core.exceptions import ForbiddenError, UnauthorizedError
from lineup.core.security import decode_token
from lineup.db.session import get_db
from lineup.models.user import User, UserRole

bearer_scheme = HTTPBearer(auto_error=False)

__all__ = ["get_db", "get_current_user", "require_admin", "require_producer"]


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    if credentials is None:
        raise UnauthorizedError()
    try:
        payload = decode_token(credentials.credentials)
    except ValueError:
        raise UnauthorizedError()

    if payload.get("type") != "access":
        raise UnauthorizedError("Invalid token type")

    try:
        user_id = uuid.UUID(payload.get("sub"))
    except (ValueError, TypeError):
        raise UnauthorizedError()

    user = await db.get(User, user_id)
    if not user or not user.is_active:
        raise UnauthorizedError("User not found or inactive")
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != UserRole.ADMIN:
        raise ForbiddenError("Admin access required")
    return user


async def require_producer(user: User = Depends(get_current_user)) -> User:
    """Anyone allowed to edit the schedule and lineups."""
    if user.role not in (UserRole.ADMIN, UserRole.PRODUCER):
        raise ForbiddenError("Producer access required")
    return user
