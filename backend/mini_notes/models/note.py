"""Note ORM — a short text note owned by a user.

Invariants:
    - user_id NULL means anonymized (owner erased their account but kept the content)
    - updated_at bumped on every UPDATE (ORM onupdate)
    - color, when set, is #RRGGBB (validated at the schema boundary)

Design Decisions:
    - ON DELETE SET NULL on user_id: the DB never blocks user removal, the service
      decides delete-vs-anonymize before the user row goes
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mini_notes.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """Note entity."""
    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    user_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True, index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str | None] = mapped_column(String(50), nullable=True)
    color: Mapped[str | None] = mapped_column(String(7), nullable=True)
    is_pinned: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
        onupdate=_utcnow,
    )
