"""Schema-driven importer for CLDF Wordlist datasets."""

from __future__ import annotations

from cldf_wordlist.database import WordlistDatabase
from cldf_wordlist.ingest.importer import WordlistImporter, load_wordlist

__all__ = ["WordlistDatabase", "WordlistImporter", "load_wordlist"]
