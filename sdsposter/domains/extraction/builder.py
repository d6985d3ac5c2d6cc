"""
Extraction Request Builder - Instructions and output contract for the backend.

Building a request is pure: no I/O, no clock, no randomness.
"""

from __future__ import annotations

import copy
from typing import Any, get_args, get_origin

from pydantic import BaseModel

from sdsposter.domains.hazard import HazardRecord, PictogramCode

from .models import ExtractionRequest

__all__ = [
    "EXTRACTION_PROMPT",
    "EXTRACTION_TEMPERATURE",
    "SYSTEM_INSTRUCTION",
    "HAZARD_RECORD_SCHEMA",
    "build_extraction_request",
    "response_schema_for",
]

# Near-zero randomness: literal extraction, not paraphrase
EXTRACTION_TEMPERATURE = 0.1

_PICTOGRAM_NAMES_JA: dict[PictogramCode, str] = {
    PictogramCode.GHS_01: "爆発物",
    PictogramCode.GHS_02: "引火性",
    PictogramCode.GHS_03: "酸化性",
    PictogramCode.GHS_04: "高圧ガス",
    PictogramCode.GHS_05: "腐食性",
    PictogramCode.GHS_06: "毒性",
    PictogramCode.GHS_07: "有害性・刺激性",
    PictogramCode.GHS_08: "健康有害性",
    PictogramCode.GHS_09: "環境有害性",
}

_PICTOGRAM_LINES = "\n".join(
    f"- {code.value}: {_PICTOGRAM_NAMES_JA[code]} ({code.label})" for code in PictogramCode
)

SYSTEM_INSTRUCTION = f"""あなたは化学物質の安全管理の専門家です。SDS（安全データシート）を読み取り、工場の掲示用に要約してください。

## GHSピクトグラムの特定（最重要）:
「危険有害性の要約」（通常は第2項）に記載されたシンボルと分類を確認し、該当するコードをすべて次の中から選んでください。
{_PICTOGRAM_LINES}

## 出力ルール:
1. すべての項目を日本語(ja)、英語(en)、ベトナム語(vi)の3言語で記述すること。
2. 緊急時に作業者が「何をすべきか」をすぐに理解できる、短く行動中心の文にすること。
3. 電話番号などの個人を特定できる情報は含めないこと。
4. 指定されたJSONスキーマに厳密に従うこと。"""

EXTRACTION_PROMPT = "このSDSを解析して要約してください。GHSピクトグラムのコードを正確に特定してください。"

_SCALAR_TYPES: dict[Any, str] = {str: "STRING"}


def response_schema_for(model: type[BaseModel]) -> dict[str, Any]:
    """
    Derive the backend output schema (OpenAPI subset) from a record model.

    Properties use wire (alias) names so the backend emits exactly what
    HazardRecord validates.
    """
    properties = {
        (field.alias or name): _schema_for(field.annotation)
        for name, field in model.model_fields.items()
    }
    return {"type": "OBJECT", "properties": properties}


def _schema_for(annotation: Any) -> dict[str, Any]:
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return response_schema_for(annotation)
    if get_origin(annotation) is list:
        (item,) = get_args(annotation)
        return {"type": "ARRAY", "items": _schema_for(item)}
    if annotation in _SCALAR_TYPES:
        return {"type": _SCALAR_TYPES[annotation]}
    raise TypeError(f"Unsupported field type in record schema: {annotation!r}")


HAZARD_RECORD_SCHEMA = response_schema_for(HazardRecord)


def build_extraction_request(document: bytes, mime_type: str) -> ExtractionRequest:
    """
    Build the extraction request for one uploaded document.

    Args:
        document: Raw file bytes (image or PDF), read fully by the caller
        mime_type: MIME type reported for the upload

    Returns:
        Request carrying the payload, instructions, schema and temperature
    """
    return ExtractionRequest(
        document=document,
        mime_type=mime_type,
        system_instruction=SYSTEM_INSTRUCTION,
        prompt=EXTRACTION_PROMPT,
        response_schema=copy.deepcopy(HAZARD_RECORD_SCHEMA),
        response_mime_type="application/json",
        temperature=EXTRACTION_TEMPERATURE,
    )
