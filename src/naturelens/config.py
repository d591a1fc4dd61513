"""Environment-based configuration for Nature Lens."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from NATURELENS_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="NATURELENS_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # Server
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 9002

    # Authentication for callers of this API (None = disabled)
    api_key: str | None = None

    # Model provider
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.0-flash"

    # Input limits
    max_image_bytes: int = Field(default=10_485_760, ge=1)


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
