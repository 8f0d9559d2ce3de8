"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - Defaults work out of the box; every field can be overridden from the
      environment or a .env file
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    app_name: str = "DocFactory Template API"

    # Request metadata
    tenant_header: str = "X-Tenant-ID"
    user_header: str = "X-User-ID"
    fallback_user_id: str = "system"

    # Listing
    default_page_limit: int = 50

    @field_validator("default_page_limit")
    @classmethod
    def positive_page_limit(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("default_page_limit must be positive")
        return v

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
