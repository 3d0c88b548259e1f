"""Application configuration."""

import os
from datetime import timedelta
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    chucks_api_base_url: str = "https://diningdata.cedarville.edu/api"
    menu_days: int = 5
    request_timeout_seconds: float = 30
    cache_expiration_hours: float = 12
    fetch_retry_attempts: int = 1
    cache_dir: Path = Path("~/.cache/chucks-status")
    favorites_path: Path = Path("~/.config/chucks-status/favorites.json")
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def cache_expiration(self) -> timedelta:
        return timedelta(hours=self.cache_expiration_hours)

    @property
    def resolved_cache_dir(self) -> Path:
        return self.cache_dir.expanduser()

    @property
    def resolved_favorites_path(self) -> Path:
        return self.favorites_path.expanduser()
