"""
Pictogram Library Adapter - Local persistence for custom pictogram images.
"""

from .store import PictogramEntry, PictogramLibrary, bytes_to_data_uri, image_to_data_uri

__all__ = ["PictogramLibrary", "PictogramEntry", "bytes_to_data_uri", "image_to_data_uri"]
