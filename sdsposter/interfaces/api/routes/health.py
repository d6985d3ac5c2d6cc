"""
Health Routes - System health and status endpoints.
"""

from typing import Any

from fastapi import APIRouter

from sdsposter import __version__
from sdsposter.config import get_settings

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": "sdsposter"}


@router.get("/api")
async def api_info() -> dict[str, Any]:
    """API info endpoint."""
    settings = get_settings()
    return {
        "name": "SDS Poster API",
        "version": __version__,
        "description": "Trilingual hazard records from safety data sheets",
        "model": settings.gemini_model,
        "api_key_configured": bool(settings.gemini_api_key),
        "docs": "/docs",
    }
