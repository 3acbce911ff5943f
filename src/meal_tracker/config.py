"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    default_user_id: str = "default-user"
    cors_origins: str = "*"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        """Return True when error details must be hidden from clients."""
        return self.environment == PRODUCTION


def parse_cors_origins(raw: str | None) -> list[str]:
    """Parse allowed CORS origins from env."""
    if raw is None:
        return ["*"]
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return ["*"]
    origins: list[str] = []
    for chunk in cleaned.split(","):
        value = chunk.strip().rstrip("/")
        if value and value not in origins:
            origins.append(value)
    return origins or ["*"]
