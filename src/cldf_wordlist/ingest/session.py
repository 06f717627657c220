"""Per-import state shared between the table builders."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from cldf_wordlist.config.schema import FormIdMode
from cldf_wordlist.ingest.models import FormKey, ImportIssue

logger = logging.getLogger(__name__)


class FormIdentifierMap:
    """Translates FormTable ids to the keys forms are stored under.

    In ``ORIGINAL`` mode a form keeps its string id. In ``SEQUENTIAL`` mode
    forms are numbered 0, 1, 2, ... in table order and the original ids are
    kept only here, for resolving cognate judgements.
    """

    def __init__(self, mode: FormIdMode = FormIdMode.ORIGINAL) -> None:
        self.mode = mode
        self._keys: dict[str, FormKey] = {}

    def __contains__(self, original: object) -> bool:
        return original in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def assign(self, original: str) -> FormKey:
        if original in self._keys:
            raise KeyError(original)
        key: FormKey = len(self._keys) if self.mode is FormIdMode.SEQUENTIAL else original
        self._keys[original] = key
        return key

    def resolve(self, original: str) -> FormKey | None:
        return self._keys.get(original)

    def as_dict(self) -> dict[str, FormKey]:
        return dict(self._keys)


@dataclass
class ImportSession:
    """Scratch state for exactly one import call.

    The Form builder fills ``languages_seen``/``parameters_seen`` (insertion
    ordered) and ``form_ids``; later builders read them.
    """

    form_ids: FormIdentifierMap = field(default_factory=FormIdentifierMap)
    issues: list[ImportIssue] = field(default_factory=list)
    languages_seen: dict[str, None] = field(default_factory=dict)
    parameters_seen: dict[str, None] = field(default_factory=dict)

    @classmethod
    def for_mode(cls, mode: FormIdMode) -> ImportSession:
        return cls(form_ids=FormIdentifierMap(mode))

    def note_form_references(self, language_id: str, parameter_ids: list[str]) -> None:
        # Blank references (absent or empty cells) name nothing to synthesize.
        if language_id:
            self.languages_seen.setdefault(language_id)
        for parameter_id in parameter_ids:
            if parameter_id:
                self.parameters_seen.setdefault(parameter_id)

    def record_issue(self, stage: str, context: str, cause: str) -> None:
        logger.warning("%s: skipping row %s: %s", stage, context, cause)
        self.issues.append(ImportIssue(stage=stage, context=context, cause=cause))
