"""
API Middleware - Request/response processing.

Provides:
- Request ID tracking
- Mapping SdsPosterError codes to HTTP statuses
"""

from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from sdsposter.config.errors import ErrorCode, SdsPosterError

logger = logging.getLogger(__name__)

_REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with an ID shared by logs, error bodies and the response.

    A client-supplied X-Request-ID is reused only when it is a short token
    of letters, digits, dots, dashes or underscores; otherwise a fresh one
    is generated.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        supplied = request.headers.get("X-Request-ID", "")
        request_id = supplied if _REQUEST_ID_PATTERN.fullmatch(supplied) else uuid.uuid4().hex
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Convert SdsPosterError exceptions to structured JSON responses."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        try:
            return await call_next(request)
        except SdsPosterError as e:
            request_id = getattr(request.state, "request_id", "unknown")
            logger.error(
                "SdsPosterError: %s request_id=%s details=%s",
                e.message,
                request_id,
                e.details,
            )
            return JSONResponse(
                status_code=error_code_to_status(e.code),
                content={
                    "error": e.to_dict(),
                    "request_id": request_id,
                },
            )
        except Exception as e:
            request_id = getattr(request.state, "request_id", "unknown")
            logger.exception("Unhandled error: %s request_id=%s", str(e), request_id)
            return JSONResponse(
                status_code=500,
                content={
                    "error": {
                        "code": ErrorCode.INTERNAL_ERROR.value,
                        "message": "Internal server error",
                        "details": {},
                    },
                    "request_id": request_id,
                },
            )


def error_code_to_status(code: ErrorCode) -> int:
    """Map error codes to HTTP status codes."""
    mapping = {
        # 400 Bad Request
        ErrorCode.VALIDATION_ERROR: 400,
        # 401 Unauthorized
        ErrorCode.CONFIGURATION_MISSING_CREDENTIAL: 401,
        ErrorCode.LLM_AUTH_FAILED: 401,
        # 404 Not Found
        ErrorCode.NOT_FOUND: 404,
        # 429 Rate Limited
        ErrorCode.LLM_RATE_LIMITED: 429,
        # 502 Bad Gateway
        ErrorCode.EXTRACTION_FAILED: 502,
        ErrorCode.EXTRACTION_INVALID_RESPONSE: 502,
        # 503 Service Unavailable
        ErrorCode.LLM_UNAVAILABLE: 503,
        # 504 Gateway Timeout
        ErrorCode.EXTRACTION_TIMEOUT: 504,
    }
    return mapping.get(code, 500)
