"""
Gemini Client - Google Gemini REST client for structured extraction.

This is the ONLY place that calls the Gemini API.

Authentication:
- API key supplied per call (the caller owns credential storage)
- Sent in the x-goog-api-key header, never in the URL or logs

Features:
- Inline document upload (base64) with system instruction
- JSON output constrained by a response schema
- Client-side rate limiting (60 RPM default)
- Backend failures mapped to ExtractionError codes; no retries
"""

from __future__ import annotations

import asyncio
import base64
import logging
import time
from typing import Any

import httpx

from sdsposter.config.errors import ErrorCode, ExtractionError
from sdsposter.domains.extraction.extractor import PROCESSING_FAILED_MESSAGE
from sdsposter.domains.extraction.models import ExtractionRequest

from .models import GeminiConfig, GeminiResponse

logger = logging.getLogger(__name__)

__all__ = ["GeminiClient"]

# Error reasons Gemini reports for a bad or unauthorized key
_AUTH_REASONS = ("API_KEY_INVALID", "PERMISSION_DENIED", "UNAUTHENTICATED")


class GeminiClient:
    """
    Gemini API client for schema-constrained document extraction.

    Example:
        >>> client = GeminiClient()
        >>> request = build_extraction_request(pdf_bytes, "application/pdf")
        >>> response = await client.generate_structured(request, api_key="AIza...")
        >>> data = json.loads(response.text)
    """

    def __init__(
        self,
        config: GeminiConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize Gemini client.

        Args:
            config: Client configuration. Uses defaults if None.
            http_client: Shared HTTP client. A short-lived one is created per
                call if None.
        """
        self.config = config or GeminiConfig()
        self._http = http_client

        # Rate limiting state
        self._request_times: list[float] = []
        self._rate_lock = asyncio.Lock()

        logger.info("GeminiClient initialized: model=%s", self.config.model)

    @property
    def endpoint(self) -> str:
        return f"{self.config.base_url.rstrip('/')}/models/{self.config.model}:generateContent"

    async def _check_rate_limit(self) -> None:
        """Enforce rate limiting."""
        async with self._rate_lock:
            now = time.time()
            # Remove requests older than 1 minute
            self._request_times = [t for t in self._request_times if now - t < 60]

            if len(self._request_times) >= self.config.rate_limit_rpm:
                wait_time = 60 - (now - self._request_times[0])
                if wait_time > 0:
                    logger.warning("Rate limit reached, waiting %.1fs", wait_time)
                    await asyncio.sleep(wait_time)

            self._request_times.append(now)

    def build_body(self, request: ExtractionRequest) -> dict[str, Any]:
        """Translate an extraction request into a generateContent body."""
        return {
            "systemInstruction": {"parts": [{"text": request.system_instruction}]},
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {
                            "inlineData": {
                                "mimeType": request.mime_type,
                                "data": base64.b64encode(request.document).decode("ascii"),
                            }
                        },
                        {"text": request.prompt},
                    ],
                }
            ],
            "generationConfig": {
                "temperature": request.temperature,
                "responseMimeType": request.response_mime_type,
                "responseSchema": request.response_schema,
            },
        }

    async def generate_structured(
        self,
        request: ExtractionRequest,
        api_key: str,
    ) -> GeminiResponse:
        """
        Run one schema-constrained generation over an inline document.

        Args:
            request: Built extraction request
            api_key: Gemini API key for this call

        Returns:
            GeminiResponse whose text is the raw JSON body (may be empty)

        Raises:
            ExtractionError: Transport failure, auth rejection, quota, or
                any non-200 answer
        """
        await self._check_rate_limit()

        body = self.build_body(request)
        headers = {"x-goog-api-key": api_key, "Content-Type": "application/json"}

        try:
            if self._http is not None:
                response = await self._post(self._http, headers, body)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._post(client, headers, body)
        except httpx.TimeoutException as e:
            raise ExtractionError(
                f"Gemini request timed out: {e}",
                code=ErrorCode.EXTRACTION_TIMEOUT,
            ) from e
        except httpx.HTTPError as e:
            raise ExtractionError(
                f"Gemini request failed: {e}",
                code=ErrorCode.LLM_UNAVAILABLE,
            ) from e

        if response.status_code != 200:
            raise self._error_for(response)

        try:
            data = response.json()
        except ValueError as e:
            raise _malformed("body is not JSON") from e
        if not isinstance(data, dict):
            raise _malformed("body is not a JSON object")
        return self._parse_response(data)

    async def _post(
        self,
        client: httpx.AsyncClient,
        headers: dict[str, str],
        body: dict[str, Any],
    ) -> httpx.Response:
        return await client.post(
            self.endpoint,
            headers=headers,
            json=body,
            timeout=self.config.timeout_seconds,
        )

    def _error_for(self, response: httpx.Response) -> ExtractionError:
        """Map a non-200 answer to a domain error carrying Gemini's message."""
        message, status = _error_message(response)
        details = {"status_code": response.status_code, "status": status}
        logger.error("Gemini error: %s %s", response.status_code, status or message)

        if response.status_code == 429:
            return ExtractionError(
                f"Gemini quota exceeded: {message}", details, code=ErrorCode.LLM_RATE_LIMITED
            )
        if response.status_code in (401, 403) or any(
            reason in response.text for reason in _AUTH_REASONS
        ):
            return ExtractionError(
                f"Gemini rejected the API key: {message}", details, code=ErrorCode.LLM_AUTH_FAILED
            )
        if response.status_code >= 500:
            return ExtractionError(
                f"Gemini unavailable: {message}", details, code=ErrorCode.LLM_UNAVAILABLE
            )
        return ExtractionError(f"Gemini API error: {message}", details)

    def _parse_response(self, data: dict[str, Any]) -> GeminiResponse:
        """Join the first candidate's text parts."""
        text = ""
        finish_reason = "STOP"
        candidates = data.get("candidates") or []
        if not isinstance(candidates, list):
            raise _malformed("candidates is not a list")
        if candidates:
            candidate = candidates[0]
            if not isinstance(candidate, dict):
                raise _malformed("candidate is not an object")
            finish_reason = candidate.get("finishReason") or finish_reason
            content = candidate.get("content") or {}
            if not isinstance(content, dict):
                raise _malformed("candidate content is not an object")
            parts = content.get("parts") or []
            if not isinstance(parts, list):
                raise _malformed("content parts are not a list")
            for part in parts:
                if not isinstance(part, dict):
                    raise _malformed("content part is not an object")
                if "text" in part and not isinstance(part["text"], str):
                    raise _malformed("text part is not a string")
            text = "".join(part.get("text", "") for part in parts)

        usage = data.get("usageMetadata")
        if not isinstance(usage, dict):
            usage = {}
        prompt_tokens = usage.get("promptTokenCount", 0)
        completion_tokens = usage.get("candidatesTokenCount", 0)

        logger.debug(
            "Gemini response: finish=%s prompt_tokens=%d completion_tokens=%d",
            finish_reason,
            prompt_tokens,
            completion_tokens,
        )

        return GeminiResponse(
            text=text,
            model=data.get("modelVersion") or self.config.model,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=usage.get("totalTokenCount", prompt_tokens + completion_tokens),
            finish_reason=finish_reason,
        )


def _error_message(response: httpx.Response) -> tuple[str, str]:
    """Extract (message, status) from a Google API error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase, ""
    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        error = {}
    return error.get("message") or response.reason_phrase, error.get("status", "")


def _malformed(reason: str) -> ExtractionError:
    logger.warning("Gemini returned a malformed envelope: %s", reason)
    return ExtractionError(
        PROCESSING_FAILED_MESSAGE,
        {"reason": reason},
        code=ErrorCode.EXTRACTION_INVALID_RESPONSE,
    )
