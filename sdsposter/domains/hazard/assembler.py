"""
Record Assembler - Make an extracted record safe for presentation.

Fills every empty language slot of every MultilingualText with a
placeholder. Ingredients and pictogram tokens pass through unchanged.
"""

from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel

from .models import HazardRecord, MultilingualText

__all__ = ["MISSING_JA", "MISSING_OTHER", "assemble_record", "fill_text"]

MISSING_JA = "記載なし"
MISSING_OTHER = "N/A"

ModelT = TypeVar("ModelT", bound=BaseModel)


def fill_text(text: MultilingualText | None) -> MultilingualText:
    """Default each missing language independently."""
    if text is None:
        text = MultilingualText()
    return MultilingualText(
        ja=text.ja or MISSING_JA,
        en=text.en or MISSING_OTHER,
        vi=text.vi or MISSING_OTHER,
    )


def assemble_record(raw: HazardRecord | None) -> HazardRecord:
    """
    Produce a presentation-safe record. Never raises.

    Args:
        raw: Record from the extraction client, or None

    Returns:
        A new record in which no MultilingualText has an empty field
    """
    return _fill(raw if raw is not None else HazardRecord())


def _fill(model: ModelT) -> ModelT:
    if isinstance(model, MultilingualText):
        return fill_text(model)  # type: ignore[return-value]

    updates = {}
    for name in type(model).model_fields:
        value = getattr(model, name)
        if isinstance(value, BaseModel):
            updates[name] = _fill(value)
        elif isinstance(value, list):
            updates[name] = [_fill(v) if isinstance(v, BaseModel) else v for v in value]
    return model.model_copy(update=updates)
