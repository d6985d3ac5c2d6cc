"""
Configuration - Application settings and error taxonomy.
"""

from .errors import (
    ConfigurationError,
    ErrorCode,
    ExtractionError,
    SdsPosterError,
    StorageError,
)
from .settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Errors
    "ErrorCode",
    "SdsPosterError",
    "ConfigurationError",
    "ExtractionError",
    "StorageError",
]
