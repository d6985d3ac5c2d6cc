"""
Hazard Domain - The hazard record contract and its normalization.

This domain handles:
- The trilingual hazard record schema
- GHS pictogram classification and image resolution
- Placeholder filling for presentation
"""

from .assembler import MISSING_JA, MISSING_OTHER, assemble_record, fill_text
from .models import (
    BasicInfo,
    Composition,
    Disposal,
    Firefighting,
    FirstAid,
    FirstAidRoute,
    HandlingStorage,
    HazardRecord,
    Hazards,
    Ingredient,
    MultilingualText,
)
from .pictograms import (
    DEFAULT_PICTOGRAM_IMAGES,
    PictogramCode,
    ResolvedPictogram,
    classify_pictogram,
    resolve_pictogram_image,
    resolve_pictograms,
)

__all__ = [
    # Models
    "HazardRecord",
    "MultilingualText",
    "BasicInfo",
    "Hazards",
    "Composition",
    "Ingredient",
    "FirstAid",
    "FirstAidRoute",
    "Firefighting",
    "HandlingStorage",
    "Disposal",
    # Pictograms
    "PictogramCode",
    "ResolvedPictogram",
    "DEFAULT_PICTOGRAM_IMAGES",
    "classify_pictogram",
    "resolve_pictogram_image",
    "resolve_pictograms",
    # Assembly
    "MISSING_JA",
    "MISSING_OTHER",
    "assemble_record",
    "fill_text",
]
