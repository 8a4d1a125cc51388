"""Auth Routes — register, login, refresh, current user.

Invariants:
    - register is rate limited per client address, login per client address + email
      (fixed window)
    - refresh and /me are not rate limited
    - /me re-reads the user row: 404 if the account was erased after the token was minted
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from mini_notes.api.dependencies import login_body, require_auth
from mini_notes.config import Settings, get_settings
from mini_notes.core.domain_types import AuthenticatedUser
from mini_notes.infrastructure.database import get_db
from mini_notes.infrastructure.rate_limiter import (
    limiter, login_key, login_limit, register_limit,
)
from mini_notes.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    RefreshRequest,
    RegisterRequest,
    TokenRefreshResponse,
)
from mini_notes.services.auth_service import AuthService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/register", response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(register_limit)
async def register(
    request: Request,
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Create an account (ToS consent required) and return a token pair."""
    return await AuthService(db, settings).register(body)


@router.post("/login", response_model=AuthResponse)
@limiter.limit(login_limit, key_func=login_key)
async def login(
    request: Request,
    body: LoginRequest = Depends(login_body),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Exchange email + password for a token pair."""
    return await AuthService(db, settings).login(body)


@router.post("/refresh", response_model=TokenRefreshResponse)
async def refresh(
    body: RefreshRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Exchange a refresh token for a new access + refresh pair."""
    return await AuthService(db, settings).refresh(body)


@router.get("/me", response_model=MeResponse)
async def me(
    user: AuthenticatedUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return await AuthService(db, settings).me(user)
