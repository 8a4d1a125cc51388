"""Account Service — GDPR-style rights: access (export), rectification (profile),
erasure (delete or anonymize), plus usage statistics.

Invariants:
    - Erasure is one transaction: notes deleted OR anonymized, user stamped
      deleted_at, user row removed; any failure rolls back every step
    - deleteNotes=False keeps note rows with user_id NULL; deleteNotes=True removes them
    - Profile update requires at least one of username/email; email lower-cased;
      a value held by ANOTHER user is a 409, re-submitting your own is not
    - Export categoryCounts buckets null category as "uncategorized"

Design Decisions:
    - Soft-delete stamp before hard delete: keeps the audit trigger point even
      though the row is gone at commit (ADR: mirrors the erasure procedure of record)
    - Explicit rollback + AccountDeletionError (500) rather than letting the session
      manager map to DatabaseError (503): the client must learn nothing was deleted
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from mini_notes.core.domain_types import EXPORT_FORMAT_VERSION
from mini_notes.core.errors import (
    AccountDeletionError,
    ConflictError,
    ErrorContext,
    InputValidationError,
    ResourceNotFoundError,
)
from mini_notes.core.note_stats import export_statistics
from mini_notes.repositories.note_repository import NoteRepository
from mini_notes.repositories.user_repository import UserRepository
from mini_notes.schemas.account import (
    AccountDeleteResponse,
    AccountStats,
    ProfileUpdate,
    ProfileUpdateResponse,
    ProfileUser,
)
from mini_notes.schemas.base import as_utc
from mini_notes.schemas.note import NoteOut

logger = logging.getLogger(__name__)


class AccountService:
    """Account-level operations for an authenticated user."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserRepository(db)
        self.notes = NoteRepository(db)

    async def _require_user(self, user_id: int):
        user = await self.users.find_active_by_id(user_id)
        if user is None:
            raise ResourceNotFoundError("User", str(user_id), "USER_NOT_FOUND")
        return user

    async def delete_account(
        self, user_id: int, delete_notes: bool = True,
    ) -> AccountDeleteResponse:
        await self._require_user(user_id)
        try:
            if delete_notes:
                affected = await self.notes.delete_all_for_user(user_id)
            else:
                affected = await self.notes.anonymize_all_for_user(user_id)
            await self.users.mark_deleted(user_id)
            await self.users.hard_delete(user_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Account deletion rolled back: {e}",
                extra={"user_id": user_id}, exc_info=True,
            )
            raise AccountDeletionError(ErrorContext(user_id=user_id)) from e

        logger.info(
            f"Account deleted ({'deleted' if delete_notes else 'anonymized'} "
            f"{affected} notes)",
            extra={"user_id": user_id},
        )
        return AccountDeleteResponse(
            message="Account deleted successfully",
            deleted_notes=delete_notes,
            anonymized_notes=not delete_notes,
        )

    async def export_data(self, user_id: int) -> dict:
        """Portability document: profile, every owned note, summary statistics."""
        user = await self._require_user(user_id)
        notes = await self.notes.all_for_user(user_id)
        return {
            "exportDate": datetime.now(timezone.utc).isoformat(),
            "exportVersion": EXPORT_FORMAT_VERSION,
            "user": {
                "id": user.id,
                "username": user.username,
                "email": user.email,
                "tosVersionAccepted": user.tos_version_accepted,
                "tosAcceptedAt": (
                    as_utc(user.tos_accepted_at).isoformat()
                    if user.tos_accepted_at else None
                ),
                "accountCreated": as_utc(user.created_at).isoformat(),
                "lastUpdated": as_utc(user.updated_at).isoformat(),
            },
            "notes": [
                NoteOut.model_validate(n).model_dump(by_alias=True, mode="json")
                for n in notes
            ],
            "statistics": export_statistics(notes),
        }

    async def stats(self, user_id: int) -> AccountStats:
        row = await self.notes.stats_for_user(user_id)
        return AccountStats(
            total_notes=row["total_notes"] or 0,
            pinned_notes=row["pinned_notes"] or 0,
            unique_categories=row["unique_categories"] or 0,
            oldest_note=row["oldest_note"],
            newest_note=row["newest_note"],
        )

    async def update_profile(
        self, user_id: int, body: ProfileUpdate,
    ) -> ProfileUpdateResponse:
        if not body.username and not body.email:
            raise InputValidationError(
                "Please provide username or email to update",
                field="body", code="NO_FIELDS_TO_UPDATE",
            )
        user = await self._require_user(user_id)

        email = body.email.lower() if body.email else None
        if body.username and await self.users.username_in_use(
            body.username, exclude_user_id=user_id,
        ):
            raise ConflictError("This username is already taken", "USERNAME_TAKEN")
        if email and await self.users.email_in_use(email, exclude_user_id=user_id):
            raise ConflictError("This email is already registered", "EMAIL_TAKEN")

        user = await self.users.update_profile(user, body.username or None, email)
        await self.db.commit()
        logger.info("Profile updated", extra={"user_id": user_id})
        return ProfileUpdateResponse(
            message="Profile updated successfully",
            user=ProfileUser.model_validate(user),
        )
