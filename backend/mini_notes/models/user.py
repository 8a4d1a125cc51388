"""User ORM — account identity, credentials and Terms-of-Service consent.

Invariants:
    - email stored lower-cased; email and username unique
    - password_hash is bcrypt; plaintext never persisted
    - deleted_at stamped inside the deletion transaction right before the row is removed

Design Decisions:
    - Integer autoincrement PK: note/user ids travel in URLs and JWT claims as numbers
    - No ORM relationship to notes: account deletion chooses delete vs anonymize
      explicitly, an ORM cascade would silently pick one (ADR: explicit SQL per branch)
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from mini_notes.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Registered account."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    username: Mapped[str] = mapped_column(
        String(30), nullable=False, unique=True,
    )
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    tos_accepted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    tos_version_accepted: Mapped[str | None] = mapped_column(
        String(20), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
        onupdate=_utcnow,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
