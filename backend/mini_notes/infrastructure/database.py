"""Database Session Manager — request-scoped async sessions over one pooled engine.

Invariants:
    - A session that raises rolls back before the error leaves the context manager
    - Unique-constraint violations surface as 409s carrying the column's own code
      (EMAIL_TAKEN / USERNAME_TAKEN), so a registration race lost at INSERT time
      answers exactly like the pre-check would have
    - Any other SQLAlchemy failure surfaces as DatabaseError (503)
    - SQLite connections run with foreign keys ON so notes.user_id honours ON DELETE SET NULL

Design Decisions:
    - Module-level db_manager set by init_db() from the lifespan hook (ADR: no import side effects)
    - expire_on_commit=False: services return ORM rows after commit without lazy reloads
    - Pool sizing only for server databases; aiosqlite uses its own pool class
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from mini_notes.core.errors import ConflictError, DatabaseError

logger = logging.getLogger(__name__)

# Checked in order; first match wins.
_FAILURE_MAP: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (OperationalError, "execute", "Connection or operational error"),
    (DBAPIError, "query", "Database driver error"),
    (SQLAlchemyError, "unknown", "Database operation failed"),
)


# Postgres reports the constraint name (see db/base.py NAMING_CONVENTION),
# SQLite reports table.column. The offending value also appears in the
# Postgres DETAIL line, so bare column names are never matched.
_UNIQUE_VIOLATIONS = (
    (
        ('"uq_users_email"', "users.email"),
        "An account with this email already exists",
        "EMAIL_TAKEN",
    ),
    (
        ('"uq_users_username"', "users.username"),
        "This username is already taken. Please choose another.",
        "USERNAME_TAKEN",
    ),
)


def conflict_from_integrity_error(error: IntegrityError) -> ConflictError:
    """Name the unique column that was violated, when the driver message says."""
    detail = str(error.orig).partition("\n")[0]
    for markers, message, code in _UNIQUE_VIOLATIONS:
        if any(marker in detail for marker in markers):
            return ConflictError(message, code)
    return ConflictError(
        "The request conflicts with existing data", "INTEGRITY_CONFLICT",
    )


def _enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class DatabaseSessionManager:
    """Owns the engine and hands out sessions that translate driver failures."""

    def __init__(
        self, database_url: str, pool_size: int = 10, max_overflow: int = 5,
    ):
        is_sqlite = database_url.startswith("sqlite")
        pool_kwargs = {} if is_sqlite else {
            "pool_size": pool_size,
            "max_overflow": max_overflow,
            "pool_recycle": 3600,
        }
        self.engine = create_async_engine(
            database_url, pool_pre_ping=True, **pool_kwargs,
        )
        if is_sqlite:
            _enable_sqlite_foreign_keys(self.engine)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.warning(f"Unique constraint violated: {e.orig}")
            raise conflict_from_integrity_error(e) from e
        except SQLAlchemyError as e:
            await session.rollback()
            for exc_type, operation, message in _FAILURE_MAP:
                if isinstance(e, exc_type):
                    break
            logger.error(f"{message}: {e}")
            raise DatabaseError(message, operation) from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when a trivial query round-trips (readiness check)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"Readiness check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
