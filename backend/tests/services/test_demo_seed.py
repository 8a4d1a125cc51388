"""Demo Seed — idempotent provisioning of the demo account.

Invariants:
    - First run creates the user and both sample notes
    - Second run creates nothing
    - The seeded credentials log in through the API
"""

from sqlalchemy import func, select

from mini_notes.config import get_settings
from mini_notes.models.note import Note
from mini_notes.services.demo_seed import (
    DEMO_EMAIL, DEMO_NOTES, DEMO_PASSWORD, seed_demo_account,
)


async def test_seed_is_idempotent(test_session_factory):
    async with test_session_factory() as db:
        first = await seed_demo_account(db, get_settings())
    async with test_session_factory() as db:
        second = await seed_demo_account(db, get_settings())

    assert first["created_user"] is True
    assert first["created_notes"] == len(DEMO_NOTES)
    assert second["created_user"] is False
    assert second["created_notes"] == 0
    assert second["user_id"] == first["user_id"]

    async with test_session_factory() as db:
        count = await db.scalar(select(func.count(Note.id)))
    assert count == len(DEMO_NOTES)


async def test_seeded_account_can_log_in(client, test_session_factory):
    async with test_session_factory() as db:
        await seed_demo_account(db, get_settings())

    res = await client.post("/api/auth/login", json={
        "email": DEMO_EMAIL, "password": DEMO_PASSWORD,
    })
    assert res.status_code == 200
    assert res.json()["user"]["email"] == DEMO_EMAIL
