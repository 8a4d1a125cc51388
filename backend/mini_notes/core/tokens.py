"""Token Codec — pure JWT issue/verify for access and refresh tokens.

Invariants:
    - Both token types carry userId, email, username plus iat/exp/iss/aud and `type`
    - Verification pins algorithm, issuer and audience; expiry is always enforced
    - A token is only accepted for the type it was minted as (access != refresh)
    - decode_token never raises on a bad token: returns None (caller maps to 401)

Design Decisions:
    - PyJWT over hand-rolled HMAC: standard claim validation (exp/iss/aud) for free
    - `now` injectable so tests can mint already-expired tokens without sleeping
    - TokenConfig decoupled from Settings: core/ never imports config
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from mini_notes.core.domain_types import TokenType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenConfig:
    secret: str
    algorithm: str
    issuer: str
    audience: str
    access_ttl: timedelta
    refresh_ttl: timedelta


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


def encode_token(
    user_id: int,
    email: str,
    username: str,
    token_type: TokenType,
    config: TokenConfig,
    now: datetime | None = None,
) -> str:
    """Sign a single token of the given type."""
    issued_at = now or datetime.now(timezone.utc)
    ttl = config.access_ttl if token_type is TokenType.ACCESS else config.refresh_ttl
    payload = {
        "userId": user_id,
        "email": email,
        "username": username,
        "type": token_type.value,
        "iat": issued_at,
        "exp": issued_at + ttl,
        "iss": config.issuer,
        "aud": config.audience,
    }
    return jwt.encode(payload, config.secret, algorithm=config.algorithm)


def issue_token_pair(
    user_id: int,
    email: str,
    username: str,
    config: TokenConfig,
    now: datetime | None = None,
) -> TokenPair:
    """Mint a fresh access + refresh pair sharing the same identity claims."""
    return TokenPair(
        access_token=encode_token(
            user_id, email, username, TokenType.ACCESS, config, now,
        ),
        refresh_token=encode_token(
            user_id, email, username, TokenType.REFRESH, config, now,
        ),
    )


def extract_bearer_token(authorization: str | None) -> str | None:
    """Token from an `Authorization: Bearer <jwt>` header value, or None."""
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization[len("Bearer "):].strip()
    return token or None


def decode_token(
    token: str, config: TokenConfig, expected_type: TokenType,
) -> dict | None:
    """Verify signature, expiry, issuer, audience and type. None if any check fails."""
    try:
        claims = jwt.decode(
            token,
            config.secret,
            algorithms=[config.algorithm],
            issuer=config.issuer,
            audience=config.audience,
            options={"require": ["exp", "iat", "iss", "aud"]},
        )
    except jwt.ExpiredSignatureError:
        logger.info(f"Rejected expired {expected_type.value} token")
        return None
    except jwt.PyJWTError as e:
        logger.info(f"Rejected {expected_type.value} token: {e}")
        return None

    if claims.get("type") != expected_type.value:
        logger.info(
            f"Rejected token of type {claims.get('type')!r}, "
            f"expected {expected_type.value}",
        )
        return None
    if not isinstance(claims.get("userId"), int):
        return None
    return claims
