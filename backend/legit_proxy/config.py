"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App settings
    app_name: str = "Legit App Proxy"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # CORS - Allow all origins by default (restrict in production)
    cors_origins: list[str] = ["*"]

    # Upstream Legit App API
    legit_app_api_url: str | None = None
    legit_app_developer_secret_key: str | None = None
    upstream_timeout_seconds: float | None = 30.0  # None waits forever


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
