"""Auth Schemas — registration, login, refresh and current-user payloads.

Invariants:
    - RegisterRequest: username 3-30 [A-Za-z0-9_-], email <= 255 with x@y.z shape,
      password 8-100 chars, tosAccepted present
    - tosAccepted == false is a domain rule (400) enforced in auth_service, not here,
      so the client gets the dedicated TOS_NOT_ACCEPTED code
    - RefreshRequest.refreshToken optional at schema level: absence is a 400 from the service
"""

from pydantic import Field

from mini_notes.core.domain_types import EMAIL_PATTERN, USERNAME_PATTERN
from mini_notes.schemas.base import ApiModel, UtcDateTime


class RegisterRequest(ApiModel):
    username: str = Field(min_length=3, max_length=30, pattern=USERNAME_PATTERN)
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=8, max_length=100)
    tos_accepted: bool


class LoginRequest(ApiModel):
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=1, max_length=100)


class RefreshRequest(ApiModel):
    refresh_token: str | None = None


class UserOut(ApiModel):
    """Public account view returned by register."""
    id: int
    username: str
    email: str
    tos_version_accepted: str | None = None
    created_at: UtcDateTime


class UserWithConsent(UserOut):
    """Account view returned by login and /me — flags stale ToS consent."""
    needs_tos_update: bool


class AuthResponse(ApiModel):
    message: str
    user: UserWithConsent | UserOut
    access_token: str
    refresh_token: str


class TokenRefreshResponse(ApiModel):
    message: str
    access_token: str
    refresh_token: str


class MeResponse(ApiModel):
    user: UserWithConsent
