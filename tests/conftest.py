"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import orjson
import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

WORDLIST = "http://cldf.clld.org/v1.0/terms.rdf#Wordlist"
TERMS = "http://cldf.clld.org/v1.0/terms.rdf#"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def config_path() -> Path:
    return FIXTURES_DIR / "config_test.yaml"


@pytest.fixture
def sample_cldf_dir() -> Path:
    return FIXTURES_DIR / "sample_cldf"


@pytest.fixture
def sample_metadata(sample_cldf_dir: Path) -> Path:
    return sample_cldf_dir / "Wordlist-metadata.json"


@pytest.fixture
def languoids_csv() -> Path:
    return FIXTURES_DIR / "glottolog_languoids.csv"


def _column(name: str, prop: str | None = None, **extra: Any) -> dict[str, Any]:
    col: dict[str, Any] = {"name": name}
    if prop is not None:
        col["propertyUrl"] = TERMS + prop
    col.update(extra)
    return col


@pytest.fixture
def column() -> Callable[..., dict[str, Any]]:
    """Factory for CSVW column descriptions with a CLDF term as propertyUrl."""
    return _column


@pytest.fixture
def write_wordlist(tmp_path: Path) -> Callable[..., Path]:
    """Write a metadata file plus CSV tables and return the metadata path.

    ``tables`` maps a table type (or None) to ``(url, columns, csv_text)``.
    """

    def _write(
        tables: dict[str | None, tuple[str, list[dict[str, Any]], str | None]],
        conforms_to: str = WORDLIST,
    ) -> Path:
        entries = []
        for table_type, (url, columns, text) in tables.items():
            entry: dict[str, Any] = {"url": url, "tableSchema": {"columns": columns}}
            if table_type is not None:
                entry["dc:conformsTo"] = TERMS + table_type
            entries.append(entry)
            if text is not None:
                (tmp_path / url).write_text(text, encoding="utf-8")
        metadata = tmp_path / "Wordlist-metadata.json"
        metadata.write_bytes(
            orjson.dumps({"dc:conformsTo": conforms_to, "tables": entries})
        )
        return metadata

    return _write
