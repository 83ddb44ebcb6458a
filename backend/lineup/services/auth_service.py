import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from lineup.core.exceptions import ConflictError, UnauthorizedError
from lineup.core.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from lineup.models.user import User, UserRole
from lineup.models.worker import Worker


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User:
    result = await db.execute(select(User).where(func.lower(User.email) == email.lower()))
    user = result.scalar_one_or_none()

    if not user or not verify_password(password, user.hashed_password):
        raise UnauthorizedError("Invalid email or password")

    if not user.is_active:
        raise UnauthorizedError("Account is disabled")

    return user


def create_tokens(user: User) -> dict:
    access_token = create_access_token(
        subject=str(user.id),
        extra_claims={"role": user.role.value},
    )
    refresh_token = create_refresh_token(subject=str(user.id))
    return {
        "access_token": access_token,
        "refresh_token": refresh_token,
        "token_type": "bearer",
    }


async def refresh_access_token(db: AsyncSession, refresh_token: str) -> dict:
    try:
        payload = decode_token(refresh_token)
    except ValueError:
        raise UnauthorizedError("Invalid refresh token")

    if payload.get("type") != "refresh":
        raise UnauthorizedError("Invalid token type")

    try:
        user_id = uuid.UUID(payload.get("sub"))
    except (ValueError, TypeError):
        raise UnauthorizedError("Invalid refresh token")
    user = await db.get(User, user_id)

    if not user or not user.is_active:
        raise UnauthorizedError("User not found or inactive")

    return create_tokens(user)


async def create_worker_account(db: AsyncSession, worker: Worker, password: str, role: UserRole) -> User:
    """Give a worker a login using the email on their worker record."""
    result = await db.execute(select(User).where(func.lower(User.email) == worker.email.lower()))
    if result.scalar_one_or_none():
        raise ConflictError("A user with this email already exists")

    user = User(
        email=worker.email.lower(),
        hashed_password=hash_password(password),
        role=role,
        display_name=worker.name,
        worker_id=worker.id,
        is_active=True,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user
