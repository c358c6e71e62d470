from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from roomi.core.version import __version__


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    PORT: int = 8000
    APP_ENV: Literal["development", "production"] = "production"
    LOG_LEVEL: str = "INFO"

    REDIS_URL: str = "redis://redis:6379/0"
    # Maximum number of connections Redis client will open per process
    REDIS_MAX_CONNECTIONS: int = 20
    REDIS_KEY_PREFIX: str = "roomi:"

    # Number of profiles scanned per ranking request. Results are the best
    # candidates within this pool, not across the whole profile store.
    CANDIDATE_POOL_SIZE: int = 200
    DEFAULT_CANDIDATE_LIMIT: int = 20
    MAX_CANDIDATE_LIMIT: int = 50


settings = Settings()

APP_VERSION = __version__
