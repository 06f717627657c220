"""Protocols for the importer's external collaborators."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable

from cldf_wordlist.exceptions import TableUnavailableError


@runtime_checkable
class TableOpener(Protocol):
    """Opens the byte stream behind a table's ``url``."""

    def open(self, url: str) -> BinaryIO:
        """Return a readable binary stream; the caller closes it."""
        ...


@runtime_checkable
class FamilyResolver(Protocol):
    """Genealogical lookup for languages that declare no family."""

    def family_for(self, glottocode: str) -> str:
        """Return a family label, or "" if unknown."""
        ...


class LocalTableOpener:
    """Opens table urls as files relative to the metadata directory."""

    def __init__(self, base_dir: Path | str) -> None:
        self.base_dir = Path(base_dir)

    def open(self, url: str) -> BinaryIO:
        path = self.base_dir / url
        try:
            return path.open("rb")
        except OSError as exc:
            raise TableUnavailableError(f"Cannot open table {path}: {exc}") from exc
