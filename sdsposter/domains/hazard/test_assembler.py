"""
Tests for the record assembler.
"""

from __future__ import annotations

from .assembler import MISSING_JA, MISSING_OTHER, assemble_record, fill_text
from .models import FirstAidRoute, HazardRecord, MultilingualText

PLACEHOLDER = MultilingualText(ja=MISSING_JA, en=MISSING_OTHER, vi=MISSING_OTHER)


def _complete(label: str) -> dict[str, str]:
    return {"ja": f"{label}-ja", "en": f"{label}-en", "vi": f"{label}-vi"}


def _complete_record() -> HazardRecord:
    return HazardRecord.model_validate(
        {
            "basicInfo": {"productName": _complete("product"), "companyName": _complete("company")},
            "hazards": {
                "ghsClass": _complete("class"),
                "ghsPictograms": ["GHS02", "corrosive"],
                "hazardStatements": _complete("h"),
                "precautionaryStatements": _complete("p"),
            },
            "composition": {
                "ingredients": [
                    {"name": _complete("ethanol"), "concentration": "60%"},
                    {"name": _complete("water"), "concentration": "40%"},
                ]
            },
            "firstAid": {
                "inhaled": _complete("inhaled"),
                "skin": _complete("skin"),
                "eyes": _complete("eyes"),
                "swallowed": _complete("swallowed"),
            },
            "firefighting": {
                "extinguishingMedia": _complete("media"),
                "precautions": _complete("precautions"),
            },
            "handlingStorage": {"handling": _complete("handling"), "storage": _complete("storage")},
            "disposal": {"method": _complete("disposal")},
        }
    )


def test_placeholder_values() -> None:
    """Test the locale-specific placeholder literals."""
    assert MISSING_JA == "記載なし"
    assert MISSING_OTHER == "N/A"


def test_languages_defaulted_independently() -> None:
    """Test ja is kept while en and vi are defaulted."""
    raw = HazardRecord.model_validate(
        {"hazards": {"ghsClass": {"ja": "腐食性", "en": "", "vi": ""}}}
    )
    record = assemble_record(raw)
    assert record.hazards.ghs_class == MultilingualText(ja="腐食性", en="N/A", vi="N/A")


def test_missing_ja_only() -> None:
    """Test a missing ja gets the Japanese placeholder alone."""
    assert fill_text(MultilingualText(en="Toxic", vi="Độc")) == MultilingualText(
        ja="記載なし", en="Toxic", vi="Độc"
    )


def test_absent_field_gets_all_placeholders() -> None:
    """Test missing and null fields become full placeholders."""
    raw = HazardRecord.model_validate({"firstAid": {"eyes": None}})
    record = assemble_record(raw)
    assert record.first_aid.eyes == PLACEHOLDER
    assert record.disposal.method == PLACEHOLDER
    assert fill_text(None) == PLACEHOLDER


def test_none_input_yields_placeholder_record() -> None:
    """Test assembling None is total and fills every field."""
    record = assemble_record(None)
    assert record.basic_info.product_name == PLACEHOLDER
    assert record.basic_info.company_name == PLACEHOLDER
    assert record.hazards.ghs_class == PLACEHOLDER
    assert record.hazards.hazard_statements == PLACEHOLDER
    assert record.hazards.precautionary_statements == PLACEHOLDER
    for route in FirstAidRoute:
        assert record.first_aid.get(route) == PLACEHOLDER
    assert record.firefighting.extinguishing_media == PLACEHOLDER
    assert record.firefighting.precautions == PLACEHOLDER
    assert record.handling_storage.handling == PLACEHOLDER
    assert record.handling_storage.storage == PLACEHOLDER
    assert record.disposal.method == PLACEHOLDER
    assert record.hazards.ghs_pictograms == []
    assert record.composition.ingredients == []


def test_ingredient_names_filled_list_unchanged() -> None:
    """Test each ingredient name is filled without adding or dropping entries."""
    raw = HazardRecord.model_validate(
        {
            "composition": {
                "ingredients": [
                    {"name": {"ja": "エタノール"}, "concentration": "60%"},
                    {"concentration": "40%"},
                ]
            }
        }
    )
    record = assemble_record(raw)
    ingredients = record.composition.ingredients
    assert len(ingredients) == 2
    assert ingredients[0].name == MultilingualText(ja="エタノール", en="N/A", vi="N/A")
    assert ingredients[0].concentration == "60%"
    assert ingredients[1].name == PLACEHOLDER
    assert ingredients[1].concentration == "40%"


def test_pictogram_tokens_pass_through() -> None:
    """Test raw pictogram tokens are not normalized by the assembler."""
    raw = HazardRecord.model_validate({"hazards": {"ghsPictograms": ["炎", "GHS05", "???"]}})
    assert assemble_record(raw).hazards.ghs_pictograms == ["炎", "GHS05", "???"]


def test_complete_record_is_unchanged() -> None:
    """Test assembling a fully populated record returns an equal record."""
    raw = _complete_record()
    assert assemble_record(raw) == raw


def test_assemble_is_idempotent() -> None:
    """Test assembling twice equals assembling once."""
    raw = HazardRecord.model_validate({"basicInfo": {"productName": {"en": "Acetone"}}})
    once = assemble_record(raw)
    assert assemble_record(once) == once


def test_assemble_does_not_mutate_input() -> None:
    """Test the raw record is left as received."""
    raw = HazardRecord.model_validate({"disposal": {"method": {"ja": "焼却"}}})
    assemble_record(raw)
    assert raw.disposal.method == MultilingualText(ja="焼却")
