"""
API Routes.
"""

from . import extraction, health, pictograms

__all__ = ["health", "extraction", "pictograms"]
