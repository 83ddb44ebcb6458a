from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lineup.core.dependencies import get_current_user, get_db
from lineup.models.user import User
from lineup.schemas.auth import LoginRequest, RefreshRequest, TokenResponse, UserResponse
from lineup.services.auth_service import authenticate_user, create_tokens, refresh_access_token

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    user = await authenticate_user(db, body.email, body.password)
    return create_tokens(user)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(body: RefreshRequest, db: AsyncSession = Depends(get_db)):
    return await refresh_access_token(db, body.refresh_token)


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    return current_user
