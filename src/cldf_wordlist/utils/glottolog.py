"""Glottolog languoid table loader for genealogical lookups."""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class Languoid:
    glottocode: str
    name: str
    iso639_3: str = ""
    family_glottocode: str = ""


class GlottologTree:
    """In-memory Glottolog lookup from the languoid CSV."""

    def __init__(self) -> None:
        self._by_glottocode: dict[str, Languoid] = {}

    def __len__(self) -> int:
        return len(self._by_glottocode)

    def add(self, languoid: Languoid) -> None:
        self._by_glottocode[languoid.glottocode] = languoid

    @classmethod
    def from_csv(cls, path: Path) -> GlottologTree:
        """Load from Glottolog's languoids/glottolog_languoid.csv."""
        tree = cls()
        with path.open("r", encoding="utf-8", newline="") as fh:
            for row in csv.DictReader(fh):
                tree.add(
                    Languoid(
                        glottocode=row["id"],
                        name=row.get("name", ""),
                        iso639_3=row.get("iso639P3code", ""),
                        family_glottocode=row.get("family_id", ""),
                    )
                )
        logger.info("Loaded %d languoids from %s", len(tree), path)
        return tree

    def lookup(self, glottocode: str) -> Languoid | None:
        return self._by_glottocode.get(glottocode)

    def family_name(self, glottocode: str) -> str:
        """Name of the top-level family containing *glottocode*.

        A languoid without a family (an isolate, or a family itself) is its
        own top-level group. Unknown glottocodes give "".
        """
        lang = self.lookup(glottocode)
        if lang is None:
            return ""
        if not lang.family_glottocode:
            return lang.name
        family = self.lookup(lang.family_glottocode)
        return family.name if family is not None else ""
