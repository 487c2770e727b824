"""
Typed settings for the NHL daily stories service.

Uses Pydantic Settings to load configuration from environment variables
with validation and type safety. Settings are read once and the resulting
value is handed to each component at construction time.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .validate_env import validate_env

# One year, the lifetime of a stored story
DEFAULT_STORY_TTL_SECONDS = 60 * 60 * 24 * 365

_DEV_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


class Settings(BaseSettings):
    """Environment-driven settings with sensible defaults for local development."""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[1] / ".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="allow",
    )

    environment: str = Field("development", alias="ENVIRONMENT")
    log_level: str | None = Field(None, alias="LOG_LEVEL")

    # Story storage (key-value store with set support)
    redis_url: str = Field("redis://localhost:6379/0", alias="REDIS_URL")
    story_ttl_seconds: int = Field(DEFAULT_STORY_TTL_SECONDS, alias="STORY_TTL_SECONDS")

    # Completion service. Without a key every story body is templated.
    openai_api_key: str | None = Field(None, alias="OPENAI_API_KEY")
    openai_model: str = Field("gpt-4o-mini", alias="OPENAI_MODEL")
    story_max_tokens: int = Field(800, alias="STORY_MAX_TOKENS")
    story_temperature: float = Field(0.7, alias="STORY_TEMPERATURE")

    # Schedule feed
    schedule_base_url: str = Field(
        "https://statsapi.web.nhl.com/api/v1", alias="SCHEDULE_BASE_URL"
    )
    schedule_timeout_seconds: float = Field(10.0, alias="SCHEDULE_TIMEOUT_SECONDS")

    # Selection: upcoming games are capped so previews don't crowd out results
    max_scheduled_stories: int = Field(2, alias="MAX_SCHEDULED_STORIES")

    # Shared secret for the periodic trigger
    cron_secret: str | None = Field(None, alias="CRON_SECRET")

    rate_limit_requests: int = Field(120, alias="RATE_LIMIT_REQUESTS")
    rate_limit_window_seconds: int = Field(60, alias="RATE_LIMIT_WINDOW_SECONDS")
    cors_origins: str | None = Field(None, alias="ALLOWED_CORS_ORIGINS")

    @field_validator("schedule_base_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def allowed_cors_origins(self) -> list[str]:
        """Explicit origins from ALLOWED_CORS_ORIGINS, else local dev ports."""
        if self.cors_origins:
            return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        return list(_DEV_CORS_ORIGINS)

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Settings are cached to avoid re-parsing environment variables
    on every access. Environment variables don't change during runtime.
    """
    validate_env()
    return Settings()
