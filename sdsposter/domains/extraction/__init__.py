"""
Extraction Domain - Safety data sheet to hazard record.

This domain handles:
- Building the backend request (instructions and output schema)
- Running the extraction and re-validating the response
- The caller-side current-record slot with stale-response protection
"""

from .builder import (
    EXTRACTION_PROMPT,
    EXTRACTION_TEMPERATURE,
    HAZARD_RECORD_SCHEMA,
    SYSTEM_INSTRUCTION,
    build_extraction_request,
    response_schema_for,
)
from .contracts import ExtractionBackend, Extractor, StructuredResponse
from .extractor import HazardExtractor
from .models import ExtractionRequest
from .session import ExtractionSession

__all__ = [
    # Contracts
    "ExtractionBackend",
    "Extractor",
    "StructuredResponse",
    # Models
    "ExtractionRequest",
    # Request building
    "EXTRACTION_PROMPT",
    "EXTRACTION_TEMPERATURE",
    "HAZARD_RECORD_SCHEMA",
    "SYSTEM_INSTRUCTION",
    "build_extraction_request",
    "response_schema_for",
    # Implementations
    "HazardExtractor",
    "ExtractionSession",
]
