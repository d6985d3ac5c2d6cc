"""
Pictogram Routes - Custom pictogram library endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel, Field

from sdsposter.adapters.library import PictogramEntry, PictogramLibrary, bytes_to_data_uri
from sdsposter.config import Settings, get_settings
from sdsposter.domains.hazard import PictogramCode
from sdsposter.interfaces.api.deps import get_pictogram_library

router = APIRouter()


class ImageReference(BaseModel):
    """Image reference request body."""

    image: str = Field(..., min_length=1, description="URL or data: URI")


@router.get("", response_model=list[PictogramEntry])
async def list_pictograms(library: PictogramLibrary = Depends(get_pictogram_library)):
    """List all nine GHS pictograms with their effective images."""
    return library.catalogue()


@router.put("/{code}", response_model=PictogramEntry)
async def set_pictogram(
    code: PictogramCode,
    body: ImageReference,
    library: PictogramLibrary = Depends(get_pictogram_library),
):
    """Override a pictogram's image with a URL or data: URI."""
    library.set(code, body.image)
    return library.entry(code)


@router.post("/{code}/image", response_model=PictogramEntry)
async def upload_pictogram(
    code: PictogramCode,
    file: UploadFile = File(...),
    library: PictogramLibrary = Depends(get_pictogram_library),
    settings: Settings = Depends(get_settings),
):
    """Override a pictogram's image with an uploaded image file."""
    if not file.content_type or not file.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="File must be an image")

    content = await file.read()
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="Image is too large")

    library.set(code, bytes_to_data_uri(content, file.content_type))
    return library.entry(code)


@router.delete("/{code}", response_model=PictogramEntry)
async def reset_pictogram(
    code: PictogramCode,
    library: PictogramLibrary = Depends(get_pictogram_library),
):
    """Restore a pictogram's default image."""
    if not library.remove(code):
        raise HTTPException(status_code=404, detail=f"No custom image for {code.value}")
    return library.entry(code)
