"""
CLI Interface - Command-line tools for SDS Poster.

Provides commands for:
- Safety data sheet extraction
- Custom pictogram management
- Running the API server
"""

from .main import app, main

__all__ = ["app", "main"]
