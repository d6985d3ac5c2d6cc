"""
Adapters - External service integrations.

All external API calls and local persistence are wrapped here to isolate
domains from third-party changes.
"""

from .gemini import GeminiClient
from .library import PictogramLibrary

__all__ = [
    "GeminiClient",
    "PictogramLibrary",
]
