"""Typed wrapper around a single CLDF table cell."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class ValueKind(str, Enum):
    """How a column's cells are interpreted.

    Only the CSVW datatypes seen in CLDF wordlists are distinguished: plain
    strings, separator-delimited lists of strings, and floating-point
    numbers (used for geo-coordinates).
    """

    SCALAR = "scalar"
    LIST = "list"
    NUMERIC = "numeric"


@dataclass(frozen=True)
class CellValue:
    """One raw cell, together with the interpretation its column declares."""

    raw: str
    kind: ValueKind = ValueKind.SCALAR
    separator: str | None = None

    def __str__(self) -> str:
        return self.raw

    def as_str(self) -> str:
        return self.raw

    def as_list(self) -> list[str]:
        """Split on the column separator.

        Without a separator the cell is a one-element list holding the raw
        text verbatim. An empty cell splits to a single empty string.
        """
        if self.separator is None:
            return [self.raw]
        return self.raw.split(self.separator)

    def as_float(self) -> float:
        """Numeric value, or NaN for non-numeric columns and unparsable text."""
        if self.kind is not ValueKind.NUMERIC:
            return math.nan
        try:
            return float(self.raw)
        except ValueError:
            return math.nan
