"""
API Interface - FastAPI REST API.

Exposes safety data sheet analysis and the pictogram library over HTTP.
"""

from .main import app, create_app

__all__ = ["app", "create_app"]
