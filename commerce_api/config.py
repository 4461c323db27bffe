"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded in production)
    - get_settings() is cached (lru_cache) - single instance per process
    - feature_flags is the configured layer only; COMMERCE_FF_* env vars override it
      (resolved in core/feature_flags.py)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from commerce_api.core.validation import GatedFieldPolicy


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://commerce:commerce@db:5432/commerce"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Sessions (signed cookie)
    cookie_secret: str = "supersecret"
    session_cookie_name: str = "commerce.sid"
    session_max_age_seconds: int = 36_000
    session_https_only: bool = False

    # Feature flags
    feature_flags: dict[str, bool] = {}
    feature_flag_policy: GatedFieldPolicy = GatedFieldPolicy.REJECT

    # API
    cors_origins: list[str] = ["http://localhost:7000", "http://localhost:8000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
