"""
Extraction Contracts - Interfaces for extraction domain.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from sdsposter.domains.hazard import HazardRecord

from .models import ExtractionRequest


class StructuredResponse(Protocol):
    """Raw backend answer: the JSON body as text."""

    text: str
    model: str


@runtime_checkable
class ExtractionBackend(Protocol):
    """
    Contract for model backends that answer with schema-constrained JSON.

    Implementations raise ExtractionError for transport, auth and quota
    failures.

    Example:
        >>> class MyBackend:
        ...     async def generate_structured(self, request, api_key):
        ...         ...
        >>> assert isinstance(MyBackend(), ExtractionBackend)
    """

    async def generate_structured(
        self,
        request: ExtractionRequest,
        api_key: str,
    ) -> StructuredResponse:
        """
        Send the request and return the raw JSON text.

        Args:
            request: Built extraction request
            api_key: Caller-supplied credential

        Returns:
            Response whose text should be a JSON object
        """
        ...


@runtime_checkable
class Extractor(Protocol):
    """Contract for document-to-hazard-record extraction."""

    async def extract(self, request: ExtractionRequest, credential: str | None) -> HazardRecord:
        """
        Run one extraction request.

        Args:
            request: Built extraction request
            credential: Backend credential

        Returns:
            Schema-valid, not yet assembled, hazard record
        """
        ...

    async def analyze(
        self,
        document: bytes,
        mime_type: str,
        credential: str | None,
    ) -> HazardRecord:
        """Build, extract and assemble in one call."""
        ...
