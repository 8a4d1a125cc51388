"""ORM Models — SQLAlchemy declarative models for users and notes.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the owner; every live note is scoped by user_id
    - A note with user_id NULL is anonymized and belongs to nobody

Design Decisions:
    - One file per entity for locality (ADR: ExMA max 3-4 files to understand a feature)
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from mini_notes.models.user import User  # noqa: F401
from mini_notes.models.note import Note  # noqa: F401
