"""Record types produced by the Wordlist import."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Union

from cldf_wordlist.ingest.cell import CellValue

# Original string key, or a sequential integer when forms are renumbered.
FormKey = Union[str, int]


def _properties_dict(properties: dict[str, CellValue]) -> dict[str, str]:
    return {key: cell.as_str() for key, cell in properties.items()}


def _coordinate(value: float) -> float | None:
    return None if math.isnan(value) else value


@dataclass(frozen=True)
class ImportIssue:
    """A row that was skipped during import, and why."""

    stage: str
    context: str
    cause: str

    def to_dict(self) -> dict[str, Any]:
        return {"stage": self.stage, "context": self.context, "cause": self.cause}


@dataclass(frozen=True)
class FormRecord:
    """A single attested word form."""

    id: FormKey
    language_id: str
    parameter_ids: list[str]
    form: str
    value: str = ""
    comment: str = ""
    orthography: str = ""
    segments: list[str] = field(default_factory=list)
    properties: dict[str, CellValue] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "language_id": self.language_id,
            "parameter_ids": self.parameter_ids,
            "form": self.form,
            "value": self.value,
            "comment": self.comment,
            "orthography": self.orthography,
            "segments": self.segments,
            "properties": _properties_dict(self.properties),
        }


@dataclass(frozen=True)
class LanguageRecord:
    id: str
    iso639p3code: str = ""
    glottocode: str = ""
    name: str = ""
    family: str = ""
    subfamily: str = ""
    latitude: float = math.nan
    longitude: float = math.nan
    properties: dict[str, CellValue] = field(default_factory=dict)

    @property
    def has_coordinates(self) -> bool:
        return not (math.isnan(self.latitude) or math.isnan(self.longitude))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "iso639p3code": self.iso639p3code,
            "glottocode": self.glottocode,
            "name": self.name,
            "family": self.family,
            "subfamily": self.subfamily,
            "latitude": _coordinate(self.latitude),
            "longitude": _coordinate(self.longitude),
            "properties": _properties_dict(self.properties),
        }


@dataclass(frozen=True)
class ParameterRecord:
    """A concept (CLDF parameter)."""

    id: str
    name: str = ""
    concepticon_id: str = ""
    concepticon_gloss: str = ""
    semantic_field: str = ""
    properties: dict[str, CellValue] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "concepticon_id": self.concepticon_id,
            "concepticon_gloss": self.concepticon_gloss,
            "semantic_field": self.semantic_field,
            "properties": _properties_dict(self.properties),
        }


@dataclass(frozen=True)
class CognateJudgementRecord:
    """Assignment of one form to one cognate set."""

    id: str
    form_id: FormKey
    cognateset_id: str
    properties: dict[str, CellValue] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "form_id": self.form_id,
            "cognateset_id": self.cognateset_id,
            "properties": _properties_dict(self.properties),
        }


@dataclass(frozen=True)
class CognateSetRecord:
    id: str
    description: str = ""
    sources: list[str] = field(default_factory=list)
    properties: dict[str, CellValue] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "sources": self.sources,
            "properties": _properties_dict(self.properties),
        }
