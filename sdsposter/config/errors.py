"""
Error Taxonomy - Consistent error codes across the application.

Usage:
    from sdsposter.config.errors import ErrorCode, SdsPosterError

    raise SdsPosterError(ErrorCode.EXTRACTION_FAILED, "Backend rejected document")
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes for machine-readable error responses."""

    # Configuration errors
    CONFIGURATION_MISSING_CREDENTIAL = "CONFIGURATION_MISSING_CREDENTIAL"

    # Extraction errors
    EXTRACTION_FAILED = "EXTRACTION_FAILED"
    EXTRACTION_TIMEOUT = "EXTRACTION_TIMEOUT"
    EXTRACTION_INVALID_RESPONSE = "EXTRACTION_INVALID_RESPONSE"

    # LLM/Model errors
    LLM_UNAVAILABLE = "LLM_UNAVAILABLE"
    LLM_RATE_LIMITED = "LLM_RATE_LIMITED"
    LLM_AUTH_FAILED = "LLM_AUTH_FAILED"

    # Storage errors (pictogram library)
    STORAGE_READ_FAILED = "STORAGE_READ_FAILED"
    STORAGE_WRITE_FAILED = "STORAGE_WRITE_FAILED"

    # General errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# Backend conditions a caller may reasonably retry
RETRYABLE_CODES = frozenset(
    {
        ErrorCode.EXTRACTION_TIMEOUT,
        ErrorCode.LLM_RATE_LIMITED,
        ErrorCode.LLM_UNAVAILABLE,
    }
)


class SdsPosterError(Exception):
    """Base exception with error code support."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to API-friendly dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


# Domain-specific exceptions for cleaner imports
class ConfigurationError(SdsPosterError):
    """No credential available for the extraction backend."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.CONFIGURATION_MISSING_CREDENTIAL, message, details)


class ExtractionError(SdsPosterError):
    """Extraction backend failed or returned unusable content."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        code: ErrorCode = ErrorCode.EXTRACTION_FAILED,
    ) -> None:
        super().__init__(code, message, details)

    @property
    def retryable(self) -> bool:
        """Whether a caller-side retry could plausibly succeed."""
        return self.code in RETRYABLE_CODES


class StorageError(SdsPosterError):
    """Pictogram library read/write errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        code: ErrorCode = ErrorCode.STORAGE_WRITE_FAILED,
    ) -> None:
        super().__init__(code, message, details)
