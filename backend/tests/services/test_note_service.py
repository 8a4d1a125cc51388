"""Note Service — ownership checks called directly with typed ids.

Invariants:
    - The owner reads a note back by NoteId
    - A stranger gets ForbiddenError whose context names both the caller and the note
    - An unknown NoteId raises ResourceNotFoundError with NOTE_NOT_FOUND
"""

import pytest

from mini_notes.core.domain_types import NoteId, UserId
from mini_notes.core.errors import ForbiddenError, ResourceNotFoundError
from mini_notes.repositories.user_repository import UserRepository
from mini_notes.schemas.note import NoteCreate
from mini_notes.services.note_service import NoteService


@pytest.fixture
async def two_users(test_db):
    users = UserRepository(test_db)
    owner = await users.create("owner", "owner@example.com", "x", "1.0.0")
    stranger = await users.create("stranger", "stranger@example.com", "x", "1.0.0")
    await test_db.commit()
    return UserId(owner.id), UserId(stranger.id)


async def test_owner_reads_note_by_id(test_db, two_users):
    owner, _ = two_users
    created = await NoteService(test_db, owner).create_note(
        NoteCreate(title="t", content="c"),
    )

    note = await NoteService(test_db, owner).get_note(NoteId(created.id))
    assert note.title == "t"


async def test_stranger_gets_forbidden_with_context(test_db, two_users):
    owner, stranger = two_users
    created = await NoteService(test_db, owner).create_note(
        NoteCreate(title="t", content="c"),
    )

    with pytest.raises(ForbiddenError) as exc_info:
        await NoteService(test_db, stranger).delete_note(NoteId(created.id))
    assert exc_info.value.context.user_id == stranger
    assert exc_info.value.context.note_id == created.id


async def test_unknown_note_is_not_found(test_db, two_users):
    owner, _ = two_users
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await NoteService(test_db, owner).get_note(NoteId(424242))
    assert exc_info.value.code == "NOTE_NOT_FOUND"
