"""
Settings - Application configuration using Pydantic Settings.

Loads from environment variables (prefix ``SDSPOSTER_``) and .env files.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Gemini
    # Default credential only; callers may pass their own key per request
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "sdsposter_gemini_api_key", "gemini_api_key", "api_key"
        ),
    )
    gemini_model: str = "gemini-3-pro-preview"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_rate_limit_rpm: int = 60

    # Extraction
    extraction_timeout_seconds: float = 120.0
    max_upload_bytes: int = 20 * 1024 * 1024

    # Paths
    pictogram_library_path: Path = Path("data/pictograms.json")

    # Logging
    log_level: str = "INFO"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False

    model_config = SettingsConfigDict(
        env_prefix="sdsposter_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
