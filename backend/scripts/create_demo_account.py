"""Seed the demo account (demo@test.com / Demo123!) into the configured database.

Usage (from backend/, after `alembic upgrade head`):
    python -m scripts.create_demo_account
"""

import asyncio
import logging

from mini_notes.config import get_settings
from mini_notes.db.session import create_session_factory
from mini_notes.infrastructure.observability import setup_logging
from mini_notes.services.demo_seed import DEMO_EMAIL, DEMO_PASSWORD, seed_demo_account

logger = logging.getLogger("create_demo_account")


async def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, "text")
    engine, session_factory = create_session_factory(settings.database_url)
    try:
        async with session_factory() as db:
            result = await seed_demo_account(db, settings)
    finally:
        await engine.dispose()

    if result["created_user"]:
        logger.info("Demo account created")
    else:
        logger.info("Demo account already exists")
    logger.info(f"Login with {DEMO_EMAIL} / {DEMO_PASSWORD}")


if __name__ == "__main__":
    asyncio.run(main())
