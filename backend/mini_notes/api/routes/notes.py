"""Notes Routes — owner-scoped CRUD, filter, search and sort.

Invariants:
    - Every route requires a valid access token
    - Listing only returns the caller's notes
    - {note_id} must be a positive integer (400 otherwise)
    - Envelope: {success, data, count|message}
"""

import logging

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from mini_notes.api.dependencies import require_auth
from mini_notes.core.domain_types import AuthenticatedUser, NoteId, NoteSortField, SortOrder
from mini_notes.infrastructure.database import get_db
from mini_notes.schemas.note import (
    NoteCreate,
    NoteDeletedResponse,
    NoteListResponse,
    NoteResponse,
    NoteUpdate,
)
from mini_notes.services.note_service import NoteService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/notes", tags=["notes"])


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


@router.get("", response_model=NoteListResponse)
async def list_notes(
    category: str | None = Query(None, max_length=50),
    is_pinned: bool | None = Query(None, alias="isPinned"),
    search: str | None = Query(None, max_length=100),
    sort_by: NoteSortField = Query(NoteSortField.CREATED_AT, alias="sortBy"),
    order: SortOrder = Query(SortOrder.DESC),
    user: AuthenticatedUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    """List the caller's notes with optional filters."""
    notes = await NoteService(db, user.id).list_notes(
        category=_clean(category),
        is_pinned=is_pinned,
        search=_clean(search),
        sort_by=sort_by,
        order=order,
    )
    return NoteListResponse(data=notes, count=len(notes))


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: int = Path(..., ge=1),
    user: AuthenticatedUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    note = await NoteService(db, user.id).get_note(NoteId(note_id))
    return NoteResponse(data=note)


@router.post(
    "", response_model=NoteResponse, status_code=status.HTTP_201_CREATED,
)
async def create_note(
    body: NoteCreate,
    user: AuthenticatedUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    note = await NoteService(db, user.id).create_note(body)
    return NoteResponse(data=note, message="Note created successfully")


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    body: NoteUpdate,
    note_id: int = Path(..., ge=1),
    user: AuthenticatedUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    """Partial update: only fields present in the body change."""
    note = await NoteService(db, user.id).update_note(NoteId(note_id), body)
    return NoteResponse(data=note, message="Note updated successfully")


@router.delete("/{note_id}", response_model=NoteDeletedResponse)
async def delete_note(
    note_id: int = Path(..., ge=1),
    user: AuthenticatedUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    await NoteService(db, user.id).delete_note(NoteId(note_id))
    return NoteDeletedResponse(message="Note deleted successfully")
