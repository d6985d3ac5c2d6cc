"""
FastAPI Main Application - Unified API entry point.

Run with: uvicorn sdsposter.interfaces.api.main:app --reload
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sdsposter import __version__
from sdsposter.config import get_settings

from .middleware import (
    ErrorHandlerMiddleware,
    RequestIDMiddleware,
)
from .routes import extraction, health, pictograms

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    logger.info("Starting SDS Poster API...")
    logger.info("  Model: %s", settings.gemini_model)
    logger.info("  Pictogram library: %s", settings.pictogram_library_path)
    if not settings.gemini_api_key:
        logger.warning("  No server API key; clients must send X-Gemini-Api-Key")

    yield

    logger.info("Shutting down SDS Poster API...")


def create_app() -> FastAPI:
    """Create FastAPI application."""
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="SDS Poster API",
        description="Trilingual hazard records from safety data sheets",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters - first added = innermost)
    # 1. Error handling (catch exceptions from routes)
    app.add_middleware(ErrorHandlerMiddleware)

    # 2. Request ID (runs first so the inner layers can log it)
    app.add_middleware(RequestIDMiddleware)

    # 3. CORS (framework middleware)
    allowed_origins = [
        "http://localhost:3000",
        "http://localhost:8000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8000",
    ]
    if settings.api_debug:
        allowed_origins.append("http://localhost:*")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID", "X-Gemini-Api-Key"],
    )

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(extraction.router, prefix="/api/extraction", tags=["Extraction"])
    app.include_router(pictograms.router, prefix="/api/pictograms", tags=["Pictograms"])

    return app


# Create app instance
app = create_app()
