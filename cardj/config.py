"""
Configuration and settings for the CarDJ backend.

Every field can be set from the environment (or a ``.env`` file) under its
upper-cased name, e.g. ``DATABASE_URL`` or ``USE_IN_MEMORY_BACKENDS``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")
    log_level: str = Field(default="INFO")

    # Database (Postgres expected). Unset means in-memory storage.
    database_url: Optional[str] = Field(default=None)
    db_pool_size: int = Field(default=10, ge=1)

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)
    seed_demo_data: bool = Field(default=False)

    # Sessions
    session_cookie_name: str = Field(default="cardj.sid")
    session_ttl_seconds: int = Field(default=86400, ge=60)
    session_check_period_seconds: int = Field(default=86400, ge=1)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
