"""Rate Limiter — fixed-window per-key request counters for auth and deletion endpoints.

Invariants:
    - Strategy is fixed-window: each key gets N hits per window, counter resets at window end
    - Registration is keyed by client address; login by client address + submitted email
    - Account deletion is keyed by the authenticated user id (client address if the
      bearer token cannot be decoded, which require_auth rejects anyway)
    - Limits are read from settings at check time, not at import time

Design Decisions:
    - slowapi (limits under the hood) over a hand-rolled dict: fixed-window counters,
      pluggable storage (memory:// now, redis:// for multi-worker) for free
    - In-memory storage: single-process deployment; state lost on restart is acceptable
    - Check runs inside the endpoint wrapper, i.e. after FastAPI dependencies, so an
      unauthenticated deletion attempt gets 401 without consuming the user's budget
"""

import logging

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from mini_notes.config import get_settings
from mini_notes.core.domain_types import TokenType
from mini_notes.core.tokens import decode_token, extract_bearer_token

logger = logging.getLogger(__name__)


def client_address_key(request: Request) -> str:
    return get_remote_address(request)


def login_key(request: Request) -> str:
    """Client address plus the email recorded by the login_body dependency."""
    email = getattr(request.state, "login_email", "")
    return f"{client_address_key(request)}-{email}"


def user_key(request: Request) -> str:
    """Key by user id from the access token, falling back to the client address."""
    token = extract_bearer_token(request.headers.get("authorization"))
    if token:
        claims = decode_token(
            token, get_settings().token_config(), TokenType.ACCESS,
        )
        if claims:
            return f"user:{claims['userId']}"
    return client_address_key(request)


def login_limit() -> str:
    return get_settings().login_rate_limit


def register_limit() -> str:
    return get_settings().register_rate_limit


def delete_account_limit() -> str:
    return get_settings().delete_account_rate_limit


limiter = Limiter(
    key_func=client_address_key,
    strategy="fixed-window",
    storage_uri="memory://",
    enabled=get_settings().rate_limit_enabled,
)
