"""
Tests for GHS pictogram classification and resolution.
"""

from __future__ import annotations

import pytest

from .pictograms import (
    DEFAULT_PICTOGRAM_IMAGES,
    PictogramCode,
    classify_pictogram,
    resolve_pictogram_image,
    resolve_pictograms,
)


# --- Classification Tests ---


@pytest.mark.parametrize("number", range(1, 10))
@pytest.mark.parametrize(
    "template",
    ["{n}", "GHS0{n}", "ghs-0{n} 爆発", "{n}番 corrosive", "Pictogram {n}: flammable gas"],
)
def test_digit_takes_precedence(number: int, template: str) -> None:
    """Test a digit in 1..9 always decides the code, whatever the keywords."""
    raw = template.format(n=number)
    assert classify_pictogram(raw) == PictogramCode(f"GHS-0{number}")


def test_digit_beats_keyword_example() -> None:
    """Test '8番 爆発' is GHS-08, not the explosive pictogram."""
    assert classify_pictogram("8番 爆発") == PictogramCode.GHS_08


def test_unrecognized_token_returns_none() -> None:
    """Test tokens without digits or keywords are not classified."""
    assert classify_pictogram("unknown hazard xyz") is None
    assert classify_pictogram("") is None


def test_out_of_range_number_falls_back_to_keywords() -> None:
    """Test numbers outside 1..9 do not short-circuit keyword matching."""
    assert classify_pictogram("H225 flammable liquid") == PictogramCode.GHS_02
    assert classify_pictogram("GHS-10") is None
    assert classify_pictogram("0") is None


def test_first_digit_run_is_used() -> None:
    """Test only the first digit run is parsed."""
    assert classify_pictogram("12 and 3") is None
    assert classify_pictogram("3 and 12") == PictogramCode.GHS_03
    assert classify_pictogram("GHS007") == PictogramCode.GHS_07


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("爆発物", PictogramCode.GHS_01),
        ("Explosive", PictogramCode.GHS_01),
        ("引火性の物質", PictogramCode.GHS_02),
        ("FLAMMABLE", PictogramCode.GHS_02),
        ("酸化性", PictogramCode.GHS_03),
        ("oxidizing solid", PictogramCode.GHS_03),
        ("高圧ガス", PictogramCode.GHS_04),
        ("compressed gas", PictogramCode.GHS_04),
        ("腐食性", PictogramCode.GHS_05),
        ("corrosive liquid", PictogramCode.GHS_05),
        ("急性毒性", PictogramCode.GHS_06),
        ("toxic", PictogramCode.GHS_06),
        ("皮膚刺激性", PictogramCode.GHS_07),
        ("有害性", PictogramCode.GHS_07),
        ("harmful", PictogramCode.GHS_07),
        ("健康への影響", PictogramCode.GHS_08),
        ("health hazard", PictogramCode.GHS_08),
        ("水生環境", PictogramCode.GHS_09),
        ("environmental", PictogramCode.GHS_09),
    ],
)
def test_keyword_classification(raw: str, expected: PictogramCode) -> None:
    """Test Japanese and English keywords map to their pictogram."""
    assert classify_pictogram(raw) == expected


def test_keyword_order_first_match_wins() -> None:
    """Test earlier hazard classes win when several keywords match."""
    # "flammable gas" matches flam (02) before gas (04)
    assert classify_pictogram("flammable gas") == PictogramCode.GHS_02
    # 健康有害性 contains 有害 (07) which is checked before 健康 (08)
    assert classify_pictogram("健康有害性") == PictogramCode.GHS_07
    assert classify_pictogram("環境有害性") == PictogramCode.GHS_07


def test_pictogram_labels() -> None:
    """Test each code carries its fixed label."""
    assert PictogramCode.GHS_01.label == "Explosive"
    assert PictogramCode.GHS_04.label == "Compressed Gas"
    assert PictogramCode.GHS_07.label == "Harmful / Irritant"
    assert PictogramCode.GHS_09.label == "Environmental"
    assert all(code.label for code in PictogramCode)


# --- Resolution Tests ---


def test_override_wins_over_default() -> None:
    """Test caller overrides shadow the default image."""
    overrides = {"GHS-03": "data:image/png;base64,AAAA"}
    assert resolve_pictogram_image(PictogramCode.GHS_03, overrides) == "data:image/png;base64,AAAA"


def test_default_used_without_override() -> None:
    """Test the default table is used when no override exists."""
    image = resolve_pictogram_image(PictogramCode.GHS_03, {"GHS-01": "custom.png"})
    assert image == DEFAULT_PICTOGRAM_IMAGES[PictogramCode.GHS_03]


def test_empty_override_counts_as_absent() -> None:
    """Test an empty override string does not hide the default."""
    image = resolve_pictogram_image(PictogramCode.GHS_05, {"GHS-05": ""})
    assert image == DEFAULT_PICTOGRAM_IMAGES[PictogramCode.GHS_05]


def test_code_in_neither_table_resolves_to_none() -> None:
    """Test a code missing from both tables has no image."""
    assert resolve_pictogram_image(PictogramCode.GHS_04, {}, defaults={}) is None


def test_resolve_pictograms_drops_unusable_entries() -> None:
    """Test unrecognized tokens and imageless codes are omitted, order kept."""
    defaults = {
        PictogramCode.GHS_02: "flame.png",
        PictogramCode.GHS_05: "acid.png",
    }
    tokens = ["corrosive", "???", "GHS02", "GHS09"]

    resolved = resolve_pictograms(tokens, overrides=None, defaults=defaults)

    assert [p.code for p in resolved] == [PictogramCode.GHS_05, PictogramCode.GHS_02]
    assert [p.image for p in resolved] == ["acid.png", "flame.png"]
    assert resolved[0].label == "Corrosive"
    assert resolved[0].source_token == "corrosive"


def test_resolve_pictograms_uses_overrides() -> None:
    """Test overrides flow through batch resolution."""
    resolved = resolve_pictograms(["GHS-03"], overrides={"GHS-03": "mine.png"})
    assert len(resolved) == 1
    assert resolved[0].image == "mine.png"


def test_resolve_pictograms_empty() -> None:
    """Test no tokens resolve to no pictograms."""
    assert resolve_pictograms([]) == []
