"""
GHS Pictograms - Classification of free-form hazard tokens and image lookup.

The extraction backend emits pictogram tokens as free text ("GHS02",
"引火性", "corrosive", "8番" ...). Every token is normalized to one of the
nine canonical codes before an image is looked up; tokens that cannot be
normalized are dropped, as are codes with no image.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from enum import Enum

from pydantic import BaseModel

__all__ = [
    "DEFAULT_PICTOGRAM_IMAGES",
    "PictogramCode",
    "ResolvedPictogram",
    "classify_pictogram",
    "resolve_pictogram_image",
    "resolve_pictograms",
]


class PictogramCode(str, Enum):
    """The nine GHS hazard pictograms."""

    GHS_01 = "GHS-01"
    GHS_02 = "GHS-02"
    GHS_03 = "GHS-03"
    GHS_04 = "GHS-04"
    GHS_05 = "GHS-05"
    GHS_06 = "GHS-06"
    GHS_07 = "GHS-07"
    GHS_08 = "GHS-08"
    GHS_09 = "GHS-09"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_number(cls, number: int) -> PictogramCode:
        return cls(f"GHS-{number:02d}")


_LABELS: dict[PictogramCode, str] = {
    PictogramCode.GHS_01: "Explosive",
    PictogramCode.GHS_02: "Flammable",
    PictogramCode.GHS_03: "Oxidizing",
    PictogramCode.GHS_04: "Compressed Gas",
    PictogramCode.GHS_05: "Corrosive",
    PictogramCode.GHS_06: "Toxic",
    PictogramCode.GHS_07: "Harmful / Irritant",
    PictogramCode.GHS_08: "Health Hazard",
    PictogramCode.GHS_09: "Environmental",
}

_WIKIMEDIA = "https://upload.wikimedia.org/wikipedia/commons/thumb"

DEFAULT_PICTOGRAM_IMAGES: dict[PictogramCode, str] = {
    PictogramCode.GHS_01: f"{_WIKIMEDIA}/d/d3/GHS-pictogram-explos.svg/300px-GHS-pictogram-explos.svg.png",
    PictogramCode.GHS_02: f"{_WIKIMEDIA}/2/23/GHS-pictogram-flamm.svg/300px-GHS-pictogram-flamm.svg.png",
    PictogramCode.GHS_03: f"{_WIKIMEDIA}/c/cd/GHS-pictogram-oxidiz.svg/300px-GHS-pictogram-oxidiz.svg.png",
    PictogramCode.GHS_04: f"{_WIKIMEDIA}/9/96/GHS-pictogram-cylind.svg/300px-GHS-pictogram-cylind.svg.png",
    PictogramCode.GHS_05: f"{_WIKIMEDIA}/3/30/GHS-pictogram-acid.svg/300px-GHS-pictogram-acid.svg.png",
    PictogramCode.GHS_06: f"{_WIKIMEDIA}/a/a1/GHS-pictogram-skull.svg/300px-GHS-pictogram-skull.svg.png",
    PictogramCode.GHS_07: f"{_WIKIMEDIA}/6/61/GHS-pictogram-exclam.svg/300px-GHS-pictogram-exclam.svg.png",
    PictogramCode.GHS_08: f"{_WIKIMEDIA}/1/1a/GHS-pictogram-silhouette.svg/300px-GHS-pictogram-silhouette.svg.png",
    PictogramCode.GHS_09: f"{_WIKIMEDIA}/f/f0/GHS-pictogram-pollut.svg/300px-GHS-pictogram-pollut.svg.png",
}

_DIGITS = re.compile(r"[0-9]+")

# Checked in order, first hit wins
_KEYWORDS: tuple[tuple[PictogramCode, tuple[str, ...]], ...] = (
    (PictogramCode.GHS_01, ("爆発", "explos")),
    (PictogramCode.GHS_02, ("引火", "flam")),
    (PictogramCode.GHS_03, ("酸化", "oxidiz")),
    (PictogramCode.GHS_04, ("ガス", "gas")),
    (PictogramCode.GHS_05, ("腐食", "corros")),
    (PictogramCode.GHS_06, ("毒", "toxic")),
    (PictogramCode.GHS_07, ("有害", "刺激", "harm")),
    (PictogramCode.GHS_08, ("健康", "health")),
    (PictogramCode.GHS_09, ("環境", "environ")),
)


def classify_pictogram(raw: str) -> PictogramCode | None:
    """
    Map a free-form hazard token to a canonical pictogram code.

    A digit run in 1..9 wins over any keyword, so "8番 爆発" is GHS-08.

    Args:
        raw: Token as emitted by the extraction backend

    Returns:
        The matching code, or None if the token is not recognized
    """
    text = raw.lower()

    match = _DIGITS.search(text)
    if match:
        number = int(match.group())
        if 1 <= number <= 9:
            return PictogramCode.from_number(number)

    for code, keywords in _KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return code
    return None


def resolve_pictogram_image(
    code: PictogramCode,
    overrides: Mapping[str, str] | None = None,
    defaults: Mapping[PictogramCode, str] = DEFAULT_PICTOGRAM_IMAGES,
) -> str | None:
    """
    Look up the image for a code: caller overrides first, then defaults.

    Override tables are keyed by the code string ("GHS-03"). Empty
    references count as absent.
    """
    if overrides:
        custom = overrides.get(code.value)
        if custom:
            return custom
    return defaults.get(code) or None


class ResolvedPictogram(BaseModel):
    """A pictogram ready for display."""

    code: PictogramCode
    label: str
    image: str
    source_token: str

    model_config = {"frozen": True}


def resolve_pictograms(
    tokens: Iterable[str],
    overrides: Mapping[str, str] | None = None,
    defaults: Mapping[PictogramCode, str] = DEFAULT_PICTOGRAM_IMAGES,
) -> list[ResolvedPictogram]:
    """
    Resolve raw tokens to displayable pictograms, preserving order.

    Unrecognized tokens and codes without an image are omitted.
    """
    resolved = []
    for token in tokens:
        code = classify_pictogram(token)
        if code is None:
            continue
        image = resolve_pictogram_image(code, overrides, defaults)
        if image is None:
            continue
        resolved.append(
            ResolvedPictogram(code=code, label=code.label, image=image, source_token=token)
        )
    return resolved
