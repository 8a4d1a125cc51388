"""Note Service — owner-scoped note CRUD with 404/403 separation.

Invariants:
    - A note that does not exist -> 404 NOTE_NOT_FOUND
    - A note that exists but belongs to someone else (or nobody) -> 403 FORBIDDEN
    - An update with no fields -> 400 NO_FIELDS_TO_UPDATE
    - Deleted notes are gone (hard delete); a later lookup is a 404
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from mini_notes.core.domain_types import NoteId, NoteSortField, SortOrder, UserId
from mini_notes.core.errors import (
    ErrorContext,
    ForbiddenError,
    InputValidationError,
    ResourceNotFoundError,
)
from mini_notes.models.note import Note
from mini_notes.repositories.note_repository import NoteRepository
from mini_notes.schemas.note import NoteCreate, NoteOut, NoteUpdate

logger = logging.getLogger(__name__)


class NoteService:
    """Note use cases for one authenticated user."""

    def __init__(self, db: AsyncSession, user_id: UserId):
        self.db = db
        self.user_id = user_id
        self.notes = NoteRepository(db)

    async def _owned_note(self, note_id: NoteId) -> Note:
        note = await self.notes.get_by_id(note_id)
        if note is None:
            raise ResourceNotFoundError("Note", str(note_id), "NOTE_NOT_FOUND")
        if note.user_id != self.user_id:
            logger.warning(
                "Note access denied",
                extra={"user_id": self.user_id, "note_id": note_id},
            )
            raise ForbiddenError(
                "You do not have permission to access this note",
                ErrorContext(user_id=self.user_id, note_id=note_id),
            )
        return note

    async def list_notes(
        self,
        category: str | None = None,
        is_pinned: bool | None = None,
        search: str | None = None,
        sort_by: NoteSortField = NoteSortField.CREATED_AT,
        order: SortOrder = SortOrder.DESC,
    ) -> list[NoteOut]:
        notes = await self.notes.list_for_user(
            self.user_id,
            category=category,
            is_pinned=is_pinned,
            search=search,
            sort_by=sort_by,
            order=order,
        )
        return [NoteOut.model_validate(n) for n in notes]

    async def get_note(self, note_id: NoteId) -> NoteOut:
        return NoteOut.model_validate(await self._owned_note(note_id))

    async def create_note(self, body: NoteCreate) -> NoteOut:
        note = await self.notes.create(
            self.user_id, body.model_dump(by_alias=False),
        )
        await self.db.commit()
        logger.info(
            "Note created", extra={"user_id": self.user_id, "note_id": note.id},
        )
        return NoteOut.model_validate(note)

    async def update_note(self, note_id: NoteId, body: NoteUpdate) -> NoteOut:
        note = await self._owned_note(note_id)
        changes = body.changes()
        if not changes:
            raise InputValidationError(
                "No fields to update", field="body", code="NO_FIELDS_TO_UPDATE",
            )
        note = await self.notes.update(note, changes)
        await self.db.commit()
        return NoteOut.model_validate(note)

    async def delete_note(self, note_id: NoteId) -> None:
        note = await self._owned_note(note_id)
        await self.notes.delete(note)
        await self.db.commit()
        logger.info(
            "Note deleted", extra={"user_id": self.user_id, "note_id": note_id},
        )
