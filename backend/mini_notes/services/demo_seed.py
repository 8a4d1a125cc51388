"""Demo Seed — idempotently provisions the demo account and its sample notes.

Invariants:
    - Running twice never creates a second demo user or duplicate notes
    - Sample notes are only added when the demo user owns no notes
    - The demo user accepts the current ToS version
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from mini_notes.config import Settings
from mini_notes.core.passwords import hash_password
from mini_notes.models.note import Note
from mini_notes.repositories.note_repository import NoteRepository
from mini_notes.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

DEMO_USERNAME = "demo"
DEMO_EMAIL = "demo@test.com"
DEMO_PASSWORD = "Demo123!"

DEMO_NOTES = [
    {
        "title": "Welcome to Mini Notes!",
        "content": "This is a demo note. Feel free to create, edit, or delete notes.",
        "category": "Personal",
        "is_pinned": True,
    },
    {
        "title": "Getting Started",
        "content": "Try searching, filtering by category, or pinning important notes.",
        "category": "Tips",
        "is_pinned": False,
    },
]


async def seed_demo_account(db: AsyncSession, settings: Settings) -> dict:
    """Create the demo user and sample notes if missing. Returns what was created."""
    users = UserRepository(db)
    notes = NoteRepository(db)

    user = await users.find_active_by_email(DEMO_EMAIL)
    created_user = user is None
    if created_user:
        user = await users.create(
            username=DEMO_USERNAME,
            email=DEMO_EMAIL,
            password_hash=hash_password(DEMO_PASSWORD, settings.bcrypt_rounds),
            tos_version=settings.tos_version,
        )
        logger.info("Demo account created", extra={"user_id": user.id})

    owned = await db.scalar(
        select(func.count(Note.id)).where(Note.user_id == user.id),
    )
    created_notes = 0
    if not owned:
        for fields in DEMO_NOTES:
            await notes.create(user.id, dict(fields))
            created_notes += 1
        logger.info(
            f"Created {created_notes} demo notes", extra={"user_id": user.id},
        )

    await db.commit()
    return {
        "user_id": user.id,
        "created_user": created_user,
        "created_notes": created_notes,
    }
