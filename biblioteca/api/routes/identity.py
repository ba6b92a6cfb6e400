"""Identity Routes — register, login and the current user."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from biblioteca.api.dependencies import get_current_user
from biblioteca.config import Settings, get_settings
from biblioteca.infrastructure.database import get_db
from biblioteca.models.user import User
from biblioteca.schemas.common import MessageResponse
from biblioteca.schemas.identity import (
    LoginRequest, RegisterRequest, TokenResponse, UserResponse,
)
from biblioteca.services.identity import IdentityService

router = APIRouter(tags=["identity"])


@router.post(
    "/register", response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    await IdentityService(db, settings).register(body)
    return MessageResponse(message="User registered")


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    token = await IdentityService(db, settings).login(body)
    return TokenResponse(token=token)


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(get_current_user)):
    return user
