"""
Extraction Session - Caller-owned "current record" slot.

The extractor itself is stateless. A session holds the record on display
and a generation counter so that, when uploads overlap, an older response
can never overwrite a newer one. Failed uploads leave the current record
untouched, and a superseded upload reports neither its result nor its error.
"""

from __future__ import annotations

import logging

from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from sdsposter.config.errors import ExtractionError, SdsPosterError
from sdsposter.domains.hazard import HazardRecord

from .contracts import Extractor

logger = logging.getLogger(__name__)

__all__ = ["ExtractionSession"]


def _is_retryable(error: BaseException) -> bool:
    return isinstance(error, ExtractionError) and error.retryable


class ExtractionSession:
    """
    Single-document session: at most one result is ever applied per upload.

    Example:
        >>> session = ExtractionSession(HazardExtractor(GeminiClient()))
        >>> await session.upload(pdf_bytes, "application/pdf", api_key)
        >>> session.current.basic_info.product_name.ja
        'アセトン'
    """

    def __init__(
        self,
        extractor: Extractor,
        retry_wait: wait_base | None = None,
    ) -> None:
        """
        Initialize session.

        Args:
            extractor: Extractor used for every upload
            retry_wait: Backoff between caller-side retries
        """
        self._extractor = extractor
        self._retry_wait = retry_wait or wait_exponential(multiplier=1, min=2, max=30)
        self._generation = 0
        self._in_flight = 0
        self._current: HazardRecord | None = None

    @property
    def current(self) -> HazardRecord | None:
        """The record on display, if any."""
        return self._current

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def busy(self) -> bool:
        """Whether an upload is still waiting on the backend."""
        return self._in_flight > 0

    async def upload(
        self,
        document: bytes,
        mime_type: str,
        credential: str | None,
        attempts: int = 1,
    ) -> HazardRecord | None:
        """
        Extract a document and make it the current record.

        Args:
            document: Raw file bytes
            mime_type: File MIME type
            credential: Backend API key
            attempts: Total tries for retryable backend errors

        Returns:
            The new current record, or None if a newer upload or a reset
            superseded this one while it was in flight (whether it then
            succeeded or failed)

        Raises:
            ConfigurationError: No credential
            ExtractionError: Extraction failed (current record unchanged)
        """
        self._generation += 1
        generation = self._generation

        self._in_flight += 1
        try:
            record = await self._analyze(document, mime_type, credential, attempts)
        except SdsPosterError as e:
            if generation != self._generation:
                logger.info(
                    "Discarding stale extraction error: code=%s generation=%d current=%d",
                    e.code.value,
                    generation,
                    self._generation,
                )
                return None
            raise
        finally:
            self._in_flight -= 1

        if generation != self._generation:
            logger.info(
                "Discarding stale extraction result: generation=%d current=%d",
                generation,
                self._generation,
            )
            return None

        self._current = record
        return record

    def reset(self) -> None:
        """Clear the current record and invalidate in-flight uploads."""
        self._generation += 1
        self._current = None

    async def _analyze(
        self,
        document: bytes,
        mime_type: str,
        credential: str | None,
        attempts: int,
    ) -> HazardRecord:
        retrying = AsyncRetrying(
            retry=retry_if_exception(_is_retryable),
            stop=stop_after_attempt(max(1, attempts)),
            wait=self._retry_wait,
            reraise=True,
        )
        record: HazardRecord | None = None
        async for attempt in retrying:
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.warning(
                        "Retrying extraction: attempt %d of %d",
                        attempt.retry_state.attempt_number,
                        attempts,
                    )
                record = await self._extractor.analyze(document, mime_type, credential)
        assert record is not None  # Guaranteed by reraise=True
        return record
