"""
Extraction Models - Data types for extraction domain.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ExtractionRequest(BaseModel):
    """
    Everything a backend needs to turn one document into a hazard record.

    Backend-neutral: the Gemini adapter translates it to its wire format.
    """

    document: bytes = Field(repr=False)
    mime_type: str
    system_instruction: str
    prompt: str
    response_schema: dict[str, Any]
    response_mime_type: str = "application/json"
    temperature: float = Field(default=0.1, ge=0.0, le=2.0)

    model_config = {"frozen": True}

    @property
    def document_size(self) -> int:
        """Size of the document payload in bytes."""
        return len(self.document)
