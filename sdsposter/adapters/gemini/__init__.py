"""
Gemini Adapter - Google Gemini API client.

This is the ONLY place that calls the Gemini API.
The extraction domain talks to it through the ExtractionBackend contract.
"""

from .client import GeminiClient
from .models import GeminiConfig, GeminiResponse

__all__ = [
    "GeminiClient",
    "GeminiConfig",
    "GeminiResponse",
]
