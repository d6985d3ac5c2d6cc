"""
Hazard Models - The canonical shape of an extracted hazard record.

Wire names are camelCase (as the extraction backend emits them); Python
attribute names are snake_case. Missing keys and JSON nulls fall back to
defaults so a partial backend response still validates. Wrong types do not.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """Base for every hazard record part."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Treat explicit nulls like absent keys."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    def to_wire(self) -> dict[str, Any]:
        """Dump using backend (camelCase) field names."""
        return self.model_dump(by_alias=True)


class MultilingualText(RecordModel):
    """Same content in Japanese, English and Vietnamese."""

    ja: str = ""
    en: str = ""
    vi: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.ja and self.en and self.vi)


class Ingredient(RecordModel):
    """A single composition entry."""

    name: MultilingualText = Field(default_factory=MultilingualText)
    concentration: str = ""


class BasicInfo(RecordModel):
    product_name: MultilingualText = Field(default_factory=MultilingualText)
    company_name: MultilingualText = Field(default_factory=MultilingualText)


class Hazards(RecordModel):
    ghs_class: MultilingualText = Field(default_factory=MultilingualText)
    # Raw tokens as emitted by the backend; see pictograms.classify_pictogram
    ghs_pictograms: list[str] = Field(default_factory=list)
    hazard_statements: MultilingualText = Field(default_factory=MultilingualText)
    precautionary_statements: MultilingualText = Field(default_factory=MultilingualText)


class Composition(RecordModel):
    ingredients: list[Ingredient] = Field(default_factory=list)


class FirstAidRoute(str, Enum):
    """Exposure routes covered by the first-aid section."""

    INHALED = "inhaled"
    SKIN = "skin"
    EYES = "eyes"
    SWALLOWED = "swallowed"

    @property
    def label(self) -> MultilingualText:
        """Trilingual heading for this route."""
        return _FIRST_AID_LABELS[self]


_FIRST_AID_LABELS: dict[FirstAidRoute, MultilingualText] = {
    FirstAidRoute.INHALED: MultilingualText(ja="吸入した場合", en="If inhaled", vi="Khi hít phải"),
    FirstAidRoute.SKIN: MultilingualText(
        ja="皮膚に付着した場合", en="On skin contact", vi="Khi dính vào da"
    ),
    FirstAidRoute.EYES: MultilingualText(ja="眼に入った場合", en="In eyes", vi="Khi dính vào mắt"),
    FirstAidRoute.SWALLOWED: MultilingualText(
        ja="飲み込んだ場合", en="If swallowed", vi="Khi nuốt phải"
    ),
}


class FirstAid(RecordModel):
    inhaled: MultilingualText = Field(default_factory=MultilingualText)
    skin: MultilingualText = Field(default_factory=MultilingualText)
    eyes: MultilingualText = Field(default_factory=MultilingualText)
    swallowed: MultilingualText = Field(default_factory=MultilingualText)

    def get(self, route: FirstAidRoute) -> MultilingualText:
        """Instructions for one exposure route."""
        if route is FirstAidRoute.INHALED:
            return self.inhaled
        if route is FirstAidRoute.SKIN:
            return self.skin
        if route is FirstAidRoute.EYES:
            return self.eyes
        if route is FirstAidRoute.SWALLOWED:
            return self.swallowed
        raise ValueError(f"Unknown first-aid route: {route!r}")

    def items(self) -> list[tuple[FirstAidRoute, MultilingualText]]:
        """All routes in display order."""
        return [(route, self.get(route)) for route in FirstAidRoute]


class Firefighting(RecordModel):
    extinguishing_media: MultilingualText = Field(default_factory=MultilingualText)
    precautions: MultilingualText = Field(default_factory=MultilingualText)


class HandlingStorage(RecordModel):
    handling: MultilingualText = Field(default_factory=MultilingualText)
    storage: MultilingualText = Field(default_factory=MultilingualText)


class Disposal(RecordModel):
    method: MultilingualText = Field(default_factory=MultilingualText)


class HazardRecord(RecordModel):
    """
    Structured, trilingual summary of one safety data sheet.

    Created once per successful extraction and held in caller memory only.

    Example:
        >>> record = HazardRecord.model_validate(
        ...     {"hazards": {"ghsClass": {"ja": "腐食性"}, "ghsPictograms": ["GHS05"]}}
        ... )
        >>> record.hazards.ghs_class.ja
        '腐食性'
    """

    basic_info: BasicInfo = Field(default_factory=BasicInfo)
    hazards: Hazards = Field(default_factory=Hazards)
    composition: Composition = Field(default_factory=Composition)
    first_aid: FirstAid = Field(default_factory=FirstAid)
    firefighting: Firefighting = Field(default_factory=Firefighting)
    handling_storage: HandlingStorage = Field(default_factory=HandlingStorage)
    disposal: Disposal = Field(default_factory=Disposal)

    @property
    def ingredient_count(self) -> int:
        return len(self.composition.ingredients)
