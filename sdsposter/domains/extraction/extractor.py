"""
Hazard Extractor - Document to hazard record through a model backend.

Validates the credential, calls the backend once under a timeout, parses
the JSON body and re-validates it against HazardRecord. Every failure
surfaces as ConfigurationError or ExtractionError; there is no retry here.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any

from pydantic import ValidationError

from sdsposter.config.errors import ConfigurationError, ErrorCode, ExtractionError
from sdsposter.domains.hazard import HazardRecord, assemble_record

from .builder import build_extraction_request
from .contracts import ExtractionBackend
from .models import ExtractionRequest

logger = logging.getLogger(__name__)

__all__ = ["HazardExtractor", "MISSING_CREDENTIAL_MESSAGE", "PROCESSING_FAILED_MESSAGE"]

MISSING_CREDENTIAL_MESSAGE = "No Gemini API key is configured."
# Malformed output is most often caused by an invalid or rate-limited key
PROCESSING_FAILED_MESSAGE = (
    "Failed to process the analysis result. Check that the API key is valid."
)


class HazardExtractor:
    """
    Hazard record extractor.

    Example:
        >>> from sdsposter.adapters.gemini import GeminiClient
        >>> extractor = HazardExtractor(GeminiClient())
        >>> record = await extractor.analyze(pdf_bytes, "application/pdf", api_key)
        >>> record.basic_info.product_name.en
        'Acetone'
    """

    def __init__(
        self,
        backend: ExtractionBackend,
        timeout_seconds: float | None = 120.0,
    ) -> None:
        """
        Initialize extractor.

        Args:
            backend: Model backend answering with schema JSON
            timeout_seconds: Upper bound on one backend call (None waits forever)
        """
        self._backend = backend
        self._timeout = timeout_seconds

    async def extract(self, request: ExtractionRequest, credential: str | None) -> HazardRecord:
        """
        Run one extraction request.

        Args:
            request: Built extraction request
            credential: Backend API key

        Returns:
            Schema-valid hazard record (not yet assembled)

        Raises:
            ConfigurationError: No credential supplied
            ExtractionError: Backend failure, timeout, or unusable response
        """
        if not credential or not credential.strip():
            raise ConfigurationError(MISSING_CREDENTIAL_MESSAGE)

        start_time = time.perf_counter()
        logger.info(
            "Starting extraction: mime=%s bytes=%d",
            request.mime_type,
            request.document_size,
        )

        try:
            response = await asyncio.wait_for(
                self._backend.generate_structured(request, credential.strip()),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            raise ExtractionError(
                f"Extraction timed out after {self._timeout:.0f}s",
                {"timeout_seconds": self._timeout},
                code=ErrorCode.EXTRACTION_TIMEOUT,
            ) from e
        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(f"Extraction backend error: {e}") from e

        record = self._parse_record(response.text)

        logger.info(
            "Extraction complete: model=%s pictograms=%d ingredients=%d in %.1fs",
            response.model,
            len(record.hazards.ghs_pictograms),
            record.ingredient_count,
            time.perf_counter() - start_time,
        )
        return record

    async def analyze(
        self,
        document: bytes,
        mime_type: str,
        credential: str | None,
    ) -> HazardRecord:
        """
        Build, extract and assemble: the presentation-safe record for a document.
        """
        request = build_extraction_request(document, mime_type)
        return assemble_record(await self.extract(request, credential))

    def _parse_record(self, text: str | None) -> HazardRecord:
        """Parse and re-validate the backend body."""
        if not text or not text.strip():
            raise _invalid_response("empty response body")

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("Backend returned non-JSON body (%d chars)", len(text))
            raise _invalid_response("response is not valid JSON", error=str(e)) from e

        if not isinstance(data, dict):
            raise _invalid_response(f"expected a JSON object, got {type(data).__name__}")

        try:
            return HazardRecord.model_validate(data)
        except ValidationError as e:
            errors = [
                {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
                for err in e.errors()
            ]
            logger.warning("Backend response failed schema validation: %d errors", len(errors))
            raise _invalid_response("response does not match the hazard record schema", errors=errors) from e


def _invalid_response(reason: str, **extra: Any) -> ExtractionError:
    return ExtractionError(
        PROCESSING_FAILED_MESSAGE,
        {"reason": reason, **extra},
        code=ErrorCode.EXTRACTION_INVALID_RESPONSE,
    )
