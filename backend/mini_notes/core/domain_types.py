"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, NoteId wrap ints — never pass a bare int where ownership matters
    - All valid sort/token states encoded as Enums — no raw string matching
    - Validation patterns defined once here and shared by the request schemas

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and bind from query strings without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
NoteId = NewType("NoteId", int)


# ─── Constants ───────────────────────────────────────────────────

EXPORT_FORMAT_VERSION = "1.0.0"
UNCATEGORIZED = "uncategorized"
USERNAME_PATTERN = r"^[a-zA-Z0-9_-]{3,30}$"
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


# ─── Enums ───────────────────────────────────────────────────────

class TokenType(str, Enum):
    """JWT `type` claim. Access tokens authorize requests; refresh tokens mint new pairs."""
    ACCESS = "access"
    REFRESH = "refresh"


class NoteSortField(str, Enum):
    """Columns a note listing may be ordered by."""
    TITLE = "title"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


# ─── Value Objects ───────────────────────────────────────────────

@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity decoded from a verified access token. No DB round-trip."""
    id: UserId
    email: str
    username: str
