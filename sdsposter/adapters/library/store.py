"""
Pictogram Library - Persistent custom pictogram images.

Maps canonical codes ("GHS-03") to image references. Uploaded images are
stored inline as data: URIs so the library is a single portable JSON file.
The core only ever reads the mapping returned by load().

Usage:
    from sdsposter.adapters.library import PictogramLibrary

    library = PictogramLibrary(Path("data/pictograms.json"))
    library.set_image(PictogramCode.GHS_03, Path("flame_over_circle.png"))
    overrides = library.load()
"""

from __future__ import annotations

import base64
import json
import logging
import mimetypes
import os
import tempfile
from pathlib import Path

from pydantic import BaseModel

from sdsposter.config.errors import ErrorCode, StorageError
from sdsposter.domains.hazard import PictogramCode, resolve_pictogram_image

logger = logging.getLogger(__name__)

__all__ = ["PictogramEntry", "PictogramLibrary", "bytes_to_data_uri", "image_to_data_uri"]


class PictogramEntry(BaseModel):
    """One row of the pictogram catalogue."""

    code: PictogramCode
    label: str
    image: str | None
    custom: bool


class PictogramLibrary:
    """
    JSON-file store for the caller-owned pictogram override table.

    Example:
        >>> library = PictogramLibrary(tmp_path / "pictograms.json")
        >>> library.set(PictogramCode.GHS_05, "https://example.com/acid.png")
        >>> library.load()
        {'GHS-05': 'https://example.com/acid.png'}
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> dict[str, str]:
        """
        Read the override table.

        Missing or unreadable files load as an empty table; unknown codes
        and empty references are skipped.
        """
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable pictogram library %s: %s", self.path, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring pictogram library %s: not a JSON object", self.path)
            return {}

        valid_codes = {code.value for code in PictogramCode}
        overrides = {}
        for code, image in data.items():
            if code in valid_codes and isinstance(image, str) and image:
                overrides[code] = image
            else:
                logger.warning("Skipping invalid pictogram library entry: %s", code)
        return overrides

    def set(self, code: PictogramCode, image_ref: str) -> dict[str, str]:
        """Store an image reference for a code; returns the updated table."""
        if not image_ref:
            raise StorageError(
                "Image reference must not be empty",
                {"code": code.value},
                code=ErrorCode.VALIDATION_ERROR,
            )
        overrides = self.load()
        overrides[code.value] = image_ref
        self._save(overrides)
        logger.info("Pictogram override saved: %s", code.value)
        return overrides

    def set_image(self, code: PictogramCode, image_path: str | Path) -> str:
        """Store an image file inline as a data: URI; returns the URI."""
        data_uri = image_to_data_uri(image_path)
        self.set(code, data_uri)
        return data_uri

    def remove(self, code: PictogramCode) -> bool:
        """Drop the override for a code. Returns False if there was none."""
        overrides = self.load()
        if overrides.pop(code.value, None) is None:
            return False
        self._save(overrides)
        logger.info("Pictogram override removed: %s", code.value)
        return True

    def clear(self) -> None:
        """Remove every override."""
        self._save({})

    def entry(self, code: PictogramCode) -> PictogramEntry:
        """One pictogram with its effective image."""
        return _entry(code, self.load())

    def catalogue(self) -> list[PictogramEntry]:
        """All nine pictograms with their effective image."""
        overrides = self.load()
        return [_entry(code, overrides) for code in PictogramCode]

    def _save(self, overrides: dict[str, str]) -> None:
        """Atomically replace the library file."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=".pictograms-", suffix=".json"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(overrides, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except OSError as e:
            raise StorageError(
                f"Failed to write pictogram library: {e}",
                {"path": str(self.path)},
                code=ErrorCode.STORAGE_WRITE_FAILED,
            ) from e


def image_to_data_uri(image_path: str | Path) -> str:
    """Encode an image file as a data: URI."""
    path = Path(image_path)
    mime_type, _ = mimetypes.guess_type(path.name)
    if not mime_type or not mime_type.startswith("image/"):
        raise StorageError(
            f"Not an image file: {path.name}",
            {"path": str(path)},
            code=ErrorCode.VALIDATION_ERROR,
        )
    try:
        content = path.read_bytes()
    except OSError as e:
        raise StorageError(
            f"Failed to read image: {e}",
            {"path": str(path)},
            code=ErrorCode.STORAGE_READ_FAILED,
        ) from e
    return bytes_to_data_uri(content, mime_type)


def bytes_to_data_uri(content: bytes, mime_type: str) -> str:
    """Encode raw image bytes as a data: URI."""
    if not mime_type.startswith("image/"):
        raise StorageError(
            f"Not an image type: {mime_type}",
            {"mime_type": mime_type},
            code=ErrorCode.VALIDATION_ERROR,
        )
    return f"data:{mime_type};base64,{base64.b64encode(content).decode('ascii')}"


def _entry(code: PictogramCode, overrides: dict[str, str]) -> PictogramEntry:
    return PictogramEntry(
        code=code,
        label=code.label,
        image=resolve_pictogram_image(code, overrides),
        custom=code.value in overrides,
    )
