"""Auth Service — registration, login, token refresh and current-user lookup.

Invariants:
    - Emails are lower-cased before every lookup and insert
    - Unknown email and wrong password raise the same InvalidCredentialsError
    - Only non-deleted users can log in, refresh, or be a duplicate on register
    - Every successful register/login/refresh returns a fresh access + refresh pair
    - ToS consent is recorded at registration with the current version;
      needsTosUpdate is true whenever the accepted version differs from current

Design Decisions:
    - Refresh re-reads the user: a deleted account cannot mint new tokens even
      while its refresh token is still within its lifetime
    - Password verification runs even for unknown emails (against a throwaway
      hash) so response time does not reveal whether the account exists
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from mini_notes.config import Settings
from mini_notes.core.domain_types import AuthenticatedUser, TokenType
from mini_notes.core.errors import (
    AuthenticationError,
    ConflictError,
    InputValidationError,
    InvalidCredentialsError,
    ResourceNotFoundError,
)
from mini_notes.core.passwords import hash_password, verify_password
from mini_notes.core.tokens import decode_token, issue_token_pair
from mini_notes.models.user import User
from mini_notes.repositories.user_repository import UserRepository
from mini_notes.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    RefreshRequest,
    RegisterRequest,
    TokenRefreshResponse,
    UserOut,
    UserWithConsent,
)

logger = logging.getLogger(__name__)

_dummy_hashes: dict[int, str] = {}


def _dummy_hash(rounds: int) -> str:
    if rounds not in _dummy_hashes:
        _dummy_hashes[rounds] = hash_password("not-a-real-password", rounds)
    return _dummy_hashes[rounds]


class AuthService:
    """Credential checks and token issuance."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings
        self.users = UserRepository(db)

    def _with_consent(self, user: User) -> UserWithConsent:
        return UserWithConsent(
            id=user.id,
            username=user.username,
            email=user.email,
            tos_version_accepted=user.tos_version_accepted,
            needs_tos_update=user.tos_version_accepted != self.settings.tos_version,
            created_at=user.created_at,
        )

    def _tokens_for(self, user: User):
        return issue_token_pair(
            user.id, user.email, user.username, self.settings.token_config(),
        )

    async def register(self, body: RegisterRequest) -> AuthResponse:
        if not body.tos_accepted:
            raise InputValidationError(
                "You must accept the Terms of Service to create an account",
                field="tosAccepted", code="TOS_NOT_ACCEPTED",
            )

        email = body.email.lower()
        if await self.users.email_in_use(email):
            raise ConflictError(
                "An account with this email already exists", "EMAIL_TAKEN",
            )
        if await self.users.username_in_use(body.username):
            raise ConflictError(
                "This username is already taken. Please choose another.",
                "USERNAME_TAKEN",
            )

        user = await self.users.create(
            username=body.username,
            email=email,
            password_hash=hash_password(body.password, self.settings.bcrypt_rounds),
            tos_version=self.settings.tos_version,
        )
        await self.db.commit()
        logger.info("User registered", extra={"user_id": user.id})

        tokens = self._tokens_for(user)
        return AuthResponse(
            message="Account created successfully",
            user=UserOut(
                id=user.id,
                username=user.username,
                email=user.email,
                tos_version_accepted=user.tos_version_accepted,
                created_at=user.created_at,
            ),
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
        )

    async def login(self, body: LoginRequest) -> AuthResponse:
        user = await self.users.find_active_by_email(body.email.lower())
        if user is None:
            verify_password(body.password, _dummy_hash(self.settings.bcrypt_rounds))
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsError()
        if not verify_password(body.password, user.password_hash):
            logger.info("Login failed: wrong password", extra={"user_id": user.id})
            raise InvalidCredentialsError()

        tokens = self._tokens_for(user)
        logger.info("User logged in", extra={"user_id": user.id})
        return AuthResponse(
            message="Login successful",
            user=self._with_consent(user),
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
        )

    async def refresh(self, body: RefreshRequest) -> TokenRefreshResponse:
        if not body.refresh_token:
            raise InputValidationError(
                "Please provide a refresh token",
                field="refreshToken", code="REFRESH_TOKEN_REQUIRED",
            )
        claims = decode_token(
            body.refresh_token, self.settings.token_config(), TokenType.REFRESH,
        )
        if claims is None:
            raise AuthenticationError(
                "Refresh token is invalid or expired", "INVALID_REFRESH_TOKEN",
            )

        user = await self.users.find_active_by_id(claims["userId"])
        if user is None:
            raise AuthenticationError(
                "User account no longer exists", "USER_NOT_FOUND",
            )

        tokens = self._tokens_for(user)
        return TokenRefreshResponse(
            message="Token refreshed successfully",
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
        )

    async def me(self, identity: AuthenticatedUser) -> MeResponse:
        user = await self.users.find_active_by_id(identity.id)
        if user is None:
            raise ResourceNotFoundError("User", str(identity.id), "USER_NOT_FOUND")
        return MeResponse(user=self._with_consent(user))
