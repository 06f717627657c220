"""Parse and classify a CLDF Wordlist metadata document."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import orjson

from cldf_wordlist.exceptions import (
    MetadataError,
    MissingRequiredTableError,
    UnsupportedModuleError,
)

logger = logging.getLogger(__name__)

CONFORMS_TO = "dc:conformsTo"
WORDLIST_MODULE = "Wordlist"


def conformance_fragment(tag: str) -> str:
    """The part of a conformance URL after ``#``, or "" if there is none."""
    return tag.partition("#")[2]


@dataclass(frozen=True)
class TableDescriptor:
    """Location and column schema of one declared table."""

    table_type: str | None
    url: str
    columns: list[dict[str, Any]] = field(default_factory=list)

    @property
    def label(self) -> str:
        return self.table_type or self.url

    @classmethod
    def from_json(cls, table: dict[str, Any]) -> TableDescriptor:
        tag = table.get(CONFORMS_TO)
        if tag is None:
            table_type = None
        else:
            tag = str(tag)
            # A tag without a CLDF fragment is kept verbatim.
            table_type = conformance_fragment(tag) or tag
        schema = table.get("tableSchema") or {}
        columns = schema.get("columns", []) if isinstance(schema, dict) else []
        return cls(table_type=table_type, url=str(table.get("url", "")), columns=list(columns))


class WordlistMetadata:
    """A validated Wordlist metadata document with its tables classified."""

    def __init__(self, document: dict[str, Any], path: Path | None = None) -> None:
        if not isinstance(document, dict):
            raise MetadataError("Metadata document is not a JSON object")
        tag = document.get(CONFORMS_TO)
        if not isinstance(tag, str):
            raise MetadataError(f"Metadata document has no {CONFORMS_TO!r} string")
        if conformance_fragment(tag) != WORDLIST_MODULE:
            raise UnsupportedModuleError(tag)
        tables = document.get("tables")
        if not isinstance(tables, list):
            raise MetadataError("Metadata document has no 'tables' array")

        self.document = document
        self.path = path
        self.tables: dict[str | None, TableDescriptor] = {}
        for entry in tables:
            if not isinstance(entry, dict):
                raise MetadataError(f"Table entry is not a JSON object: {entry!r}")
            descriptor = TableDescriptor.from_json(entry)
            if descriptor.table_type in self.tables:
                logger.warning(
                    "Table type %s declared more than once, using %s",
                    descriptor.table_type,
                    descriptor.url,
                )
            self.tables[descriptor.table_type] = descriptor
            logger.debug("Classified %s as %s", descriptor.url, descriptor.table_type)

    @classmethod
    def from_bytes(cls, data: bytes, path: Path | None = None) -> WordlistMetadata:
        try:
            document = orjson.loads(data)
        except orjson.JSONDecodeError as exc:
            raise MetadataError(f"Metadata is not valid JSON: {exc}") from exc
        return cls(document, path=path)

    @classmethod
    def from_path(cls, path: Path | str) -> WordlistMetadata:
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise MetadataError(f"Cannot read metadata {path}: {exc}") from exc
        return cls.from_bytes(data, path=path)

    @property
    def base_dir(self) -> Path | None:
        return self.path.parent if self.path is not None else None

    def __contains__(self, table_type: object) -> bool:
        return table_type in self.tables

    def get(self, table_type: str) -> TableDescriptor | None:
        return self.tables.get(table_type)

    def require(self, table_type: str) -> TableDescriptor:
        descriptor = self.tables.get(table_type)
        if descriptor is None:
            raise MissingRequiredTableError(table_type)
        return descriptor
