"""
API Dependencies - Dependency injection for FastAPI routes.

Provides singleton instances of the extractor and pictogram library.
"""

from __future__ import annotations

from functools import lru_cache

from sdsposter.adapters.gemini import GeminiClient, GeminiConfig
from sdsposter.adapters.library import PictogramLibrary
from sdsposter.config import get_settings
from sdsposter.domains.extraction import HazardExtractor


@lru_cache
def get_extractor() -> HazardExtractor:
    """Get hazard extractor singleton."""
    settings = get_settings()
    client = GeminiClient(GeminiConfig.from_settings(settings))
    return HazardExtractor(client, timeout_seconds=settings.extraction_timeout_seconds)


@lru_cache
def get_pictogram_library() -> PictogramLibrary:
    """Get pictogram library singleton."""
    settings = get_settings()
    return PictogramLibrary(settings.pictogram_library_path)
