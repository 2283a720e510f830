"""
Application Configuration

Settings are read from environment variables (and an optional .env file)
using pydantic-settings.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the roster API."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    python_env: str = "development"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./roster.db"
    database_echo: bool = False

    # JWT & Security
    secret_key: str = "change-this-secret-key-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # File Storage
    upload_dir: Path = Path("uploads")
    uploads_url_prefix: str = "uploads"

    # Annual rollover
    rollover_month: int = 9  # September
    rollover_check_interval_hours: int = 24
    scheduler_timezone: str = "UTC"
    scheduler_enabled: bool = True

    # Redis (optional, used for login throttling)
    redis_url: str | None = None
    login_rate_limit: int = 10
    login_rate_window_seconds: int = 60

    # CORS
    cors_origins: str = "*"

    @property
    def is_development(self) -> bool:
        return self.python_env.lower() == "development"

    @property
    def is_production(self) -> bool:
        return self.python_env.lower() == "production"

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()


settings = get_settings()
