"""Root conftest — shared test configuration.

Environment is pinned before any mini_notes import so get_settings()
(lru_cached) sees test values: cheap bcrypt, fixed JWT secret, limiter off.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("JWT_SECRET", "test-secret-for-pytest-only-0123456789abcdef")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_FORMAT", "text")
