"""Note Repository — owner-scoped listing, CRUD, statistics and bulk erasure.

Invariants:
    - list_for_user/all_for_user/stats_for_user only ever see rows with user_id == owner
    - get_by_id is NOT owner-scoped: the service needs to tell 404 (absent) from 403 (not yours)
    - Search is a case-insensitive substring over title OR content with LIKE
      wildcards in the term escaped
    - Category filter is case-insensitive equality
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import case, delete, distinct, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from mini_notes.core.domain_types import NoteSortField, SortOrder
from mini_notes.models.note import Note

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    NoteSortField.TITLE: Note.title,
    NoteSortField.CREATED_AT: Note.created_at,
    NoteSortField.UPDATED_AT: Note.updated_at,
}


class NoteRepository:
    """Persistence for Note rows."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_user(
        self,
        user_id: int,
        category: str | None = None,
        is_pinned: bool | None = None,
        search: str | None = None,
        sort_by: NoteSortField = NoteSortField.CREATED_AT,
        order: SortOrder = SortOrder.DESC,
    ) -> list[Note]:
        query = select(Note).where(Note.user_id == user_id)
        if category:
            query = query.where(func.lower(Note.category) == category.lower())
        if is_pinned is not None:
            query = query.where(Note.is_pinned.is_(is_pinned))
        if search:
            query = query.where(or_(
                Note.title.icontains(search, autoescape=True),
                Note.content.icontains(search, autoescape=True),
            ))

        column = _SORT_COLUMNS[sort_by]
        if order is SortOrder.ASC:
            query = query.order_by(column.asc(), Note.id.asc())
        else:
            query = query.order_by(column.desc(), Note.id.desc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def all_for_user(self, user_id: int) -> list[Note]:
        """Every note the user owns, newest first (export order)."""
        result = await self.db.execute(
            select(Note)
            .where(Note.user_id == user_id)
            .order_by(Note.created_at.desc(), Note.id.desc()),
        )
        return list(result.scalars().all())

    async def get_by_id(self, note_id: int) -> Note | None:
        result = await self.db.execute(select(Note).where(Note.id == note_id))
        return result.scalar_one_or_none()

    async def create(self, user_id: int, fields: dict) -> Note:
        note = Note(user_id=user_id, **fields)
        self.db.add(note)
        await self.db.flush()
        return note

    async def update(self, note: Note, changes: dict) -> Note:
        for name, value in changes.items():
            setattr(note, name, value)
        note.updated_at = datetime.now(timezone.utc)
        await self.db.flush()
        return note

    async def delete(self, note: Note) -> None:
        await self.db.delete(note)
        await self.db.flush()

    async def stats_for_user(self, user_id: int) -> dict:
        result = await self.db.execute(
            select(
                func.count(Note.id).label("total_notes"),
                func.count(case((Note.is_pinned.is_(True), 1))).label("pinned_notes"),
                func.count(distinct(Note.category)).label("unique_categories"),
                func.min(Note.created_at).label("oldest_note"),
                func.max(Note.created_at).label("newest_note"),
            ).where(Note.user_id == user_id),
        )
        return dict(result.one()._mapping)

    async def delete_all_for_user(self, user_id: int) -> int:
        result = await self.db.execute(
            delete(Note).where(Note.user_id == user_id),
        )
        return result.rowcount

    async def anonymize_all_for_user(self, user_id: int) -> int:
        """Detach every note from its owner (user_id -> NULL), keeping the rows."""
        result = await self.db.execute(
            update(Note)
            .where(Note.user_id == user_id)
            .values(user_id=None),
        )
        return result.rowcount
