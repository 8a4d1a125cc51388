"""Auth Dependency — resolves the caller's identity from the bearer access token.

Invariants:
    - Missing/non-Bearer Authorization -> 401 AUTHENTICATION_REQUIRED
    - Bad signature, expired, wrong issuer/audience, or a refresh token -> 401 INVALID_TOKEN
    - Identity comes from token claims only (no DB round-trip); routes that need
      the stored row (e.g. /me) look it up themselves

Design Decisions:
    - HTTPBearer(auto_error=False): we raise our own error envelope instead of
      FastAPI's default 403, and the scheme still shows up in OpenAPI
    - login_body runs before the rate-limit check (dependencies resolve first), so the
      login limiter can key on the parsed email without re-reading the request stream
"""

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from mini_notes.config import Settings, get_settings
from mini_notes.core.domain_types import AuthenticatedUser, TokenType, UserId
from mini_notes.core.errors import AuthenticationError
from mini_notes.core.tokens import decode_token
from mini_notes.schemas.auth import LoginRequest

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def require_auth(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> AuthenticatedUser:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Please provide a valid access token")

    claims = decode_token(
        credentials.credentials, settings.token_config(), TokenType.ACCESS,
    )
    if claims is None:
        raise AuthenticationError(
            "Access token is invalid or expired", "INVALID_TOKEN",
        )
    return AuthenticatedUser(
        id=UserId(claims["userId"]),
        email=claims.get("email", ""),
        username=claims.get("username", ""),
    )


async def login_body(request: Request, body: LoginRequest) -> LoginRequest:
    """Parsed login payload; also records the email for the login limiter key."""
    request.state.login_email = body.email.lower()
    return body
