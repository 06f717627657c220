"""Pydantic v2 configuration models for the Wordlist importer."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class FormIdMode(str, Enum):
    """How form identifiers are keyed in the imported database."""

    ORIGINAL = "original"
    SEQUENTIAL = "sequential"


class ImportConfig(BaseModel):
    """Top-level import configuration."""

    form_id_mode: FormIdMode = FormIdMode.ORIGINAL
    strict_columns: bool = False
    encoding: str = "utf-8-sig"
    delimiter: str = ","
    required_tables: list[str] = Field(default_factory=lambda: ["FormTable"])
    glottolog_languoids: Path | None = None
    log_level: str = "INFO"
