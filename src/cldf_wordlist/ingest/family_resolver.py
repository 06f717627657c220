"""Resolve Glottocodes to genealogical family labels."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from cldf_wordlist.utils.glottolog import GlottologTree

logger = logging.getLogger(__name__)

GLOTTOCODE_PATTERN = re.compile(r"^[a-z0-9]{4}\d{4}$")


class GlottologFamilyResolver:
    """Family lookup backed by a Glottolog languoid table.

    Malformed Glottocodes and codes missing from the tree resolve to "".
    """

    def __init__(self, tree: GlottologTree) -> None:
        self._tree = tree

    @classmethod
    def from_csv(cls, path: Path | str) -> GlottologFamilyResolver:
        return cls(GlottologTree.from_csv(Path(path)))

    def family_for(self, glottocode: str) -> str:
        glottocode = glottocode.strip()
        if not GLOTTOCODE_PATTERN.match(glottocode):
            return ""
        family = self._tree.family_name(glottocode)
        if not family:
            logger.debug("No family found for glottocode %s", glottocode)
        return family
