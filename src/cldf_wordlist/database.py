"""In-memory Wordlist database produced by one import."""

from __future__ import annotations

import logging
import random
import threading
from collections import defaultdict
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from cldf_wordlist.ingest.models import (
    CognateJudgementRecord,
    CognateSetRecord,
    FormKey,
    FormRecord,
    ImportIssue,
    LanguageRecord,
    ParameterRecord,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class WordlistDatabase:
    """Forms, languages, concepts and cognate data of a CLDF Wordlist.

    The record maps are filled once by the importer and not modified
    afterwards. Derived indices are built on first access and cached; the
    cache is guarded so concurrent readers build each index only once.

    Check ``issues`` after an import: rows skipped for malformed CSV or
    unresolvable references are listed there.
    """

    def __init__(
        self,
        forms: dict[FormKey, FormRecord],
        languages: dict[str, LanguageRecord],
        parameters: dict[str, ParameterRecord],
        cognates: dict[str, CognateJudgementRecord] | None = None,
        cognatesets: dict[str, CognateSetRecord] | None = None,
        issues: list[ImportIssue] | None = None,
        metadata_path: Path | None = None,
    ) -> None:
        self.forms = forms
        self.languages = languages
        self.parameters = parameters
        self.cognates = cognates if cognates is not None else {}
        self.cognatesets = cognatesets if cognatesets is not None else {}
        self.issues = issues if issues is not None else []
        self.metadata_path = metadata_path
        self.language_ids: list[str] = list(languages)

        self._lock = threading.Lock()
        self._cache: dict[str, Any] = {}

    def __repr__(self) -> str:
        return (
            f"<WordlistDatabase forms={len(self.forms)} languages={len(self.languages)} "
            f"parameters={len(self.parameters)} cognates={len(self.cognates)} "
            f"issues={len(self.issues)}>"
        )

    @property
    def is_complete(self) -> bool:
        """True when no row was skipped during import."""
        return not self.issues

    def _cached(self, name: str, build: Callable[[], T]) -> T:
        value = self._cache.get(name)
        if value is None:
            with self._lock:
                value = self._cache.get(name)
                if value is None:
                    value = build()
                    self._cache[name] = value
                    logger.debug("Built index %s", name)
        return value

    # -- derived indices -------------------------------------------------

    @property
    def forms_by_language(self) -> dict[str, list[FormRecord]]:
        def build() -> dict[str, list[FormRecord]]:
            index: dict[str, list[FormRecord]] = defaultdict(list)
            for form in self.forms.values():
                index[form.language_id].append(form)
            return dict(index)

        return self._cached("forms_by_language", build)

    @property
    def forms_by_language_by_parameter(self) -> dict[str, dict[str, list[FormRecord]]]:
        """Parameter id -> language id -> forms expressing that parameter."""

        def build() -> dict[str, dict[str, list[FormRecord]]]:
            index: dict[str, dict[str, list[FormRecord]]] = defaultdict(
                lambda: defaultdict(list)
            )
            for form in self.forms.values():
                for parameter_id in form.parameter_ids:
                    index[parameter_id][form.language_id].append(form)
            return {pid: dict(by_lang) for pid, by_lang in index.items()}

        return self._cached("forms_by_language_by_parameter", build)

    @property
    def cognateset_to_forms(self) -> dict[str, set[FormKey]]:
        """Cognate set id -> ids of its member forms.

        Cognate sets only referenced by judgements are included even when
        no CognatesetTable declares them.
        """

        def build() -> dict[str, set[FormKey]]:
            index: dict[str, set[FormKey]] = defaultdict(set)
            for judgement in self.cognates.values():
                index[judgement.cognateset_id].add(judgement.form_id)
            return dict(index)

        return self._cached("cognateset_to_forms", build)

    # -- lookups -----------------------------------------------------------

    def forms_by_language_for_parameter(self, parameter_id: str) -> dict[str, list[FormRecord]]:
        return self.forms_by_language_by_parameter.get(parameter_id, {})

    def forms_for_parameter(self, parameter_id: str) -> list[FormRecord]:
        by_language = self.forms_by_language_for_parameter(parameter_id)
        return [form for forms in by_language.values() for form in forms]

    def random_form_for_language(
        self, language_id: str, rng: random.Random | None = None
    ) -> FormRecord | None:
        """A uniformly drawn form of *language_id*, or None if it has none."""
        forms = self.forms_by_language.get(language_id)
        if not forms:
            return None
        return (rng or random).choice(forms)

    def form_ids_for_language(self, language_id: str) -> list[FormKey]:
        return [form.id for form in self.forms_by_language.get(language_id, [])]

    def list_language_isos(self) -> list[str]:
        return [lang.iso639p3code for lang in self.languages.values()]

    def language_id_for_iso(self, iso_code: str) -> str | None:
        for lang in self.languages.values():
            if lang.iso639p3code == iso_code:
                return lang.id
        return None
