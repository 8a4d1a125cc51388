"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (the JWT default is for local dev only)
    - get_settings() is cached (lru_cache) — single instance per process
    - token_config() is the only bridge from Settings into core/tokens.py

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - Rate limits expressed as `limits` strings ("10/15 minutes"): read lazily by the
      limiter so tests can override them per-process via env
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mini_notes.core.tokens import TokenConfig


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://mininotes:mininotes@db:5432/mininotes"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 10
    database_max_overflow: int = 5

    # Tokens
    jwt_secret: str = "dev-only-secret-change-me-in-production-0123456789"
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "mini-notes-api"
    jwt_audience: str = "mini-notes-client"
    access_token_ttl_minutes: int = 15
    refresh_token_ttl_days: int = 7

    # Accounts
    bcrypt_rounds: int = 12
    tos_version: str = "1.0.0"

    # Rate limiting (fixed window, per key)
    rate_limit_enabled: bool = True
    login_rate_limit: str = "10/15 minutes"
    register_rate_limit: str = "10/hour"
    delete_account_rate_limit: str = "1/hour"

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def token_config(self) -> TokenConfig:
        return TokenConfig(
            secret=self.jwt_secret,
            algorithm=self.jwt_algorithm,
            issuer=self.jwt_issuer,
            audience=self.jwt_audience,
            access_ttl=timedelta(minutes=self.access_token_ttl_minutes),
            refresh_ttl=timedelta(days=self.refresh_token_ttl_days),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
