"""Account Routes — export, stats, profile rectification, erasure.

Invariants:
    - Every route requires a valid access token
    - DELETE body is optional; absent body means deleteNotes=true
    - DELETE is rate limited per user (fixed window, default 1/hour)
    - Export is served as a JSON attachment named mini-notes-data-export-<epoch ms>.json
"""

import logging
import time

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from mini_notes.api.dependencies import require_auth
from mini_notes.core.domain_types import AuthenticatedUser
from mini_notes.infrastructure.database import get_db
from mini_notes.infrastructure.rate_limiter import (
    delete_account_limit, limiter, user_key,
)
from mini_notes.schemas.account import (
    AccountDeleteRequest,
    AccountDeleteResponse,
    AccountStats,
    ProfileUpdate,
    ProfileUpdateResponse,
)
from mini_notes.services.account_service import AccountService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/account", tags=["account"])


@router.delete("", response_model=AccountDeleteResponse)
@limiter.limit(delete_account_limit, key_func=user_key)
async def delete_account(
    request: Request,
    body: AccountDeleteRequest | None = Body(None),
    user: AuthenticatedUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    """Erase the account; notes are deleted or anonymized per deleteNotes."""
    delete_notes = body.delete_notes if body is not None else True
    return await AccountService(db).delete_account(user.id, delete_notes)


@router.get("/export")
async def export_account(
    user: AuthenticatedUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    data = await AccountService(db).export_data(user.id)
    filename = f"mini-notes-data-export-{int(time.time() * 1000)}.json"
    return JSONResponse(
        content=data,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/stats", response_model=AccountStats)
async def account_stats(
    user: AuthenticatedUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    return await AccountService(db).stats(user.id)


@router.patch("/profile", response_model=ProfileUpdateResponse)
async def update_profile(
    body: ProfileUpdate,
    user: AuthenticatedUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    return await AccountService(db).update_profile(user.id, body)
