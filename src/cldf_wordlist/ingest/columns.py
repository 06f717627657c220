"""Resolve a CSVW table schema against an actual CSV header."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from cldf_wordlist.exceptions import DuplicatePropertyError, UnknownColumnError
from cldf_wordlist.ingest.cell import CellValue, ValueKind

logger = logging.getLogger(__name__)

# CSVW datatypes read as floats. Everything else stays a string.
FLOAT_DATATYPES = frozenset({"float", "double", "decimal", "number"})

# A CLDF ontology term written without its namespace, e.g. "languageReference".
BARE_TERM = re.compile(r"^[a-z][A-Za-z0-9]*$")


@dataclass(frozen=True)
class ColumnSpec:
    """Where one property lives in a CSV record and how to read it."""

    name: str
    property: str
    position: int
    kind: ValueKind = ValueKind.SCALAR
    separator: str | None = None

    def read(self, record: Sequence[str]) -> CellValue:
        return CellValue(record[self.position], self.kind, self.separator)


@dataclass
class ColumnSchema:
    """Property name to column mapping for one table."""

    table: str
    columns: dict[str, ColumnSpec] = field(default_factory=dict)

    def __contains__(self, prop: object) -> bool:
        return prop in self.columns

    def __len__(self) -> int:
        return len(self.columns)

    @property
    def properties(self) -> list[str]:
        return list(self.columns)

    def add(self, spec: ColumnSpec) -> None:
        if spec.property in self.columns:
            raise DuplicatePropertyError(self.table, spec.property)
        self.columns[spec.property] = spec

    def materialize(self, record: Sequence[str]) -> dict[str, CellValue]:
        """Map one CSV record to its declared properties."""
        return {prop: spec.read(record) for prop, spec in self.columns.items()}


def property_name(column: dict[str, Any]) -> str:
    """Semantic property name of a column description.

    The fragment of ``propertyUrl`` wins. A ``propertyUrl`` without a
    fragment is taken as is only when it is a bare CLDF term such as
    ``"id"``; any other column is known by its own name.
    """
    name = str(column.get("name", ""))
    url = column.get("propertyUrl")
    if not url:
        return name
    url = str(url)
    if "#" in url:
        fragment = url.rsplit("#", 1)[1]
        return fragment or name
    if BARE_TERM.match(url):
        return url
    return name


def value_kind(column: dict[str, Any]) -> ValueKind:
    datatype = column.get("datatype")
    if isinstance(datatype, dict):
        datatype = datatype.get("base")
    if isinstance(datatype, str) and datatype.lower() in FLOAT_DATATYPES:
        return ValueKind.NUMERIC
    if column.get("separator") is not None:
        return ValueKind.LIST
    return ValueKind.SCALAR


def resolve_column_schema(
    columns: Iterable[dict[str, Any]],
    header: Sequence[str],
    table: str = "",
    strict: bool = False,
) -> ColumnSchema:
    """Build a ColumnSchema for *columns* against the CSV *header*.

    Virtual columns carry no CSV data and are ignored. A declared column
    missing from the header raises UnknownColumnError when *strict*, and is
    skipped otherwise.
    """
    positions = {name: idx for idx, name in reversed(list(enumerate(header)))}
    schema = ColumnSchema(table=table)
    for column in columns:
        if column.get("virtual"):
            continue
        name = str(column.get("name", ""))
        position = positions.get(name)
        if position is None:
            if strict:
                raise UnknownColumnError(table, name)
            logger.warning("%s: column %r not in CSV header, skipping", table, name)
            continue
        kind = value_kind(column)
        separator = column.get("separator")
        schema.add(
            ColumnSpec(
                name=name,
                property=property_name(column),
                position=position,
                kind=kind,
                separator=str(separator) if separator is not None else None,
            )
        )
    logger.debug("%s: resolved %d columns", table, len(schema))
    return schema
