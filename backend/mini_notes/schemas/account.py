"""Account Schemas — profile rectification, erasure and statistics payloads.

Invariants:
    - ProfileUpdate: both fields optional; "neither provided" is a 400 from the service
    - AccountDeleteRequest.deleteNotes defaults to true (erase notes unless told to anonymize)
"""

from pydantic import Field

from mini_notes.core.domain_types import EMAIL_PATTERN, USERNAME_PATTERN
from mini_notes.schemas.base import ApiModel, UtcDateTime


class ProfileUpdate(ApiModel):
    username: str | None = Field(None, pattern=USERNAME_PATTERN)
    email: str | None = Field(None, max_length=255, pattern=EMAIL_PATTERN)


class ProfileUser(ApiModel):
    id: int
    username: str
    email: str
    updated_at: UtcDateTime


class ProfileUpdateResponse(ApiModel):
    message: str
    user: ProfileUser


class AccountDeleteRequest(ApiModel):
    delete_notes: bool = True


class AccountDeleteResponse(ApiModel):
    message: str
    deleted_notes: bool
    anonymized_notes: bool


class AccountStats(ApiModel):
    total_notes: int
    pinned_notes: int
    unique_categories: int
    oldest_note: UtcDateTime | None = None
    newest_note: UtcDateTime | None = None
