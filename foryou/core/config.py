from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    PORT: int = 8000
    APP_NAME: str = "For You"
    APP_ENV: Literal["development", "production"] = "production"

    # Empty means records are served from an in-memory store
    REDIS_URL: str = ""
    REDIS_MAX_CONNECTIONS: int = 20
    REDIS_KEY_PREFIX: str = "foryou"

    # Remote weight overrides; empty disables the fetch
    REMOTE_CONFIG_URL: str = ""
    REMOTE_CONFIG_TIMEOUT_SECONDS: float = 5.0

    # Feed sessions kept in memory; the least recently used is closed past the limit
    FEED_MAX_SESSIONS: int = 1000
    FEED_SESSION_TTL_SECONDS: float = 3600.0

    # Weights published on /api/admin/ai-recommend. Unset fields are left out
    # of the payload so consumers keep their own values for them.
    RECOMMEND_W_FAV: float | None = None
    RECOMMEND_W_RECENCY: float | None = None
    RECOMMEND_W_PROGRESS: float | None = None
    RECOMMEND_DECAY_DAYS: float | None = None
    RECOMMEND_MAX_ITEMS: int | None = None


settings = Settings()
