"""
Gemini Models - Configuration and response types for the Gemini API.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from sdsposter.config import Settings


class GeminiConfig(BaseModel):
    """Configuration for Gemini client."""

    model: str = Field(default="gemini-3-pro-preview")
    base_url: str = Field(default="https://generativelanguage.googleapis.com/v1beta")
    timeout_seconds: float = Field(default=120.0, gt=0)
    rate_limit_rpm: int = Field(default=60, ge=1)

    model_config = {"frozen": True}

    @classmethod
    def from_settings(cls, settings: Settings) -> GeminiConfig:
        """Build client configuration from application settings."""
        return cls(
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            timeout_seconds=settings.extraction_timeout_seconds,
            rate_limit_rpm=settings.gemini_rate_limit_rpm,
        )


class GeminiResponse(BaseModel):
    """Generic Gemini API response."""

    text: str
    model: str
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    finish_reason: str = "STOP"
