"""
Tests for the extraction request builder.
"""

from __future__ import annotations

import pytest

from sdsposter.domains.hazard import HazardRecord, PictogramCode

from .builder import (
    HAZARD_RECORD_SCHEMA,
    SYSTEM_INSTRUCTION,
    build_extraction_request,
    response_schema_for,
)

MULTILINGUAL_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "ja": {"type": "STRING"},
        "en": {"type": "STRING"},
        "vi": {"type": "STRING"},
    },
}


def test_request_carries_document_and_mime_type() -> None:
    """Test the payload is passed through untouched."""
    request = build_extraction_request(b"%PDF-1.7 sds", "application/pdf")
    assert request.document == b"%PDF-1.7 sds"
    assert request.mime_type == "application/pdf"
    assert request.document_size == len(b"%PDF-1.7 sds")


def test_request_fixes_low_temperature_and_json_output() -> None:
    """Test decoding is near-deterministic and constrained to JSON."""
    request = build_extraction_request(b"img", "image/png")
    assert request.temperature == pytest.approx(0.1)
    assert request.response_mime_type == "application/json"


def test_request_is_deterministic() -> None:
    """Test the same input builds an identical request."""
    first = build_extraction_request(b"abc", "image/jpeg")
    second = build_extraction_request(b"abc", "image/jpeg")
    assert first == second


def test_request_is_frozen() -> None:
    """Test requests cannot be modified after building."""
    request = build_extraction_request(b"abc", "image/jpeg")
    with pytest.raises(Exception):  # ValidationError for frozen model
        request.mime_type = "application/pdf"  # type: ignore


def test_request_repr_omits_document() -> None:
    """Test document bytes are not dumped into logs via repr."""
    request = build_extraction_request(b"SECRET-CONTENT", "application/pdf")
    assert "SECRET-CONTENT" not in repr(request)


def test_instructions_cover_taxonomy_languages_and_privacy() -> None:
    """Test the instruction text names every code, all languages and the PII rule."""
    for code in PictogramCode:
        assert code.value in SYSTEM_INSTRUCTION
        assert code.label in SYSTEM_INSTRUCTION
    assert "(ja)" in SYSTEM_INSTRUCTION
    assert "(en)" in SYSTEM_INSTRUCTION
    assert "(vi)" in SYSTEM_INSTRUCTION
    assert "電話番号" in SYSTEM_INSTRUCTION


def test_schema_top_level_matches_record() -> None:
    """Test every record section appears under its wire name."""
    assert HAZARD_RECORD_SCHEMA["type"] == "OBJECT"
    assert set(HAZARD_RECORD_SCHEMA["properties"]) == set(HazardRecord().to_wire())


def test_schema_nested_shapes() -> None:
    """Test nested text, list and ingredient shapes."""
    props = HAZARD_RECORD_SCHEMA["properties"]
    hazards = props["hazards"]["properties"]
    assert hazards["ghsClass"] == MULTILINGUAL_SCHEMA
    assert hazards["ghsPictograms"] == {"type": "ARRAY", "items": {"type": "STRING"}}

    ingredients = props["composition"]["properties"]["ingredients"]
    assert ingredients["type"] == "ARRAY"
    assert ingredients["items"]["properties"]["name"] == MULTILINGUAL_SCHEMA
    assert ingredients["items"]["properties"]["concentration"] == {"type": "STRING"}

    first_aid = props["firstAid"]["properties"]
    assert set(first_aid) == {"inhaled", "skin", "eyes", "swallowed"}
    assert props["firefighting"]["properties"]["extinguishingMedia"] == MULTILINGUAL_SCHEMA
    assert props["disposal"]["properties"]["method"] == MULTILINGUAL_SCHEMA


def test_each_request_gets_its_own_schema_copy() -> None:
    """Test mutating one request's schema does not leak into the next."""
    request = build_extraction_request(b"a", "image/png")
    request.response_schema["properties"].clear()
    assert build_extraction_request(b"a", "image/png").response_schema == HAZARD_RECORD_SCHEMA


def test_response_schema_rejects_unsupported_types() -> None:
    """Test schema derivation fails loudly on unknown field types."""
    from pydantic import BaseModel

    class Unsupported(BaseModel):
        count: int = 0

    with pytest.raises(TypeError):
        response_schema_for(Unsupported)
