"""
Extraction Routes - Safety data sheet analysis endpoints.
"""

from __future__ import annotations

import logging
import mimetypes

from fastapi import APIRouter, Depends, File, Header, HTTPException, Request, UploadFile
from pydantic import BaseModel

from sdsposter.adapters.library import PictogramLibrary
from sdsposter.config import Settings, get_settings
from sdsposter.domains.extraction import HazardExtractor
from sdsposter.domains.hazard import HazardRecord, ResolvedPictogram, resolve_pictograms
from sdsposter.interfaces.api.deps import get_extractor, get_pictogram_library

logger = logging.getLogger(__name__)

router = APIRouter()


class AnalysisResponse(BaseModel):
    """Analysis result response."""

    filename: str
    record: HazardRecord
    pictograms: list[ResolvedPictogram]


def _document_mime_type(file: UploadFile) -> str | None:
    """Accepted MIME type of an upload, or None if unsupported."""
    mime_type = file.content_type
    if not mime_type or mime_type == "application/octet-stream":
        mime_type, _ = mimetypes.guess_type(file.filename or "")
    if mime_type == "application/pdf" or (mime_type and mime_type.startswith("image/")):
        return mime_type
    return None


@router.post("/analyze", response_model=AnalysisResponse, response_model_by_alias=True)
async def analyze_document(
    request: Request,
    file: UploadFile = File(...),
    x_gemini_api_key: str | None = Header(default=None),
    extractor: HazardExtractor = Depends(get_extractor),
    library: PictogramLibrary = Depends(get_pictogram_library),
    settings: Settings = Depends(get_settings),
):
    """
    Extract a trilingual hazard record from a safety data sheet.

    Upload a PDF or image and receive:
    - The hazard record (Japanese, English, Vietnamese)
    - Classified GHS pictograms with display images

    The API key is taken from the X-Gemini-Api-Key header, falling back
    to the server configuration.
    """
    filename = file.filename or "document"

    mime_type = _document_mime_type(file)
    if mime_type is None:
        raise HTTPException(status_code=400, detail="File must be a PDF or an image")

    document = await file.read()
    if not document:
        raise HTTPException(status_code=400, detail="File is empty")
    if len(document) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds {settings.max_upload_bytes} bytes",
        )

    logger.info(
        "Analyzing upload: filename=%s mime=%s bytes=%d request_id=%s",
        filename,
        mime_type,
        len(document),
        getattr(request.state, "request_id", "unknown"),
    )
    record = await extractor.analyze(
        document,
        mime_type,
        x_gemini_api_key or settings.gemini_api_key,
    )

    return AnalysisResponse(
        filename=filename,
        record=record,
        pictograms=resolve_pictograms(record.hazards.ghs_pictograms, library.load()),
    )
