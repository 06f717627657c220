"""Builders turning table rows into Wordlist records.

Each builder pops the properties it understands off a row; whatever is left
over becomes the record's ``properties``, so columns this package does not
model are carried along instead of being dropped.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from typing import Generic, TypeVar

from cldf_wordlist.ingest.base import FamilyResolver
from cldf_wordlist.ingest.models import (
    CognateJudgementRecord,
    CognateSetRecord,
    FormKey,
    FormRecord,
    LanguageRecord,
    ParameterRecord,
)
from cldf_wordlist.ingest.session import ImportSession
from cldf_wordlist.ingest.table_reader import Row

logger = logging.getLogger(__name__)

K = TypeVar("K")
R = TypeVar("R")


class RowRejected(ValueError):
    """A row cannot become a record."""


def take(row: Row, *props: str, default: str = "") -> str:
    """Pop the first of *props* present in *row* as a string."""
    for prop in props:
        cell = row.pop(prop, None)
        if cell is not None:
            return cell.as_str()
    return default


def take_list(row: Row, *props: str) -> list[str]:
    for prop in props:
        cell = row.pop(prop, None)
        if cell is not None:
            return cell.as_list()
    return []


def take_float(row: Row, prop: str) -> float:
    cell = row.pop(prop, None)
    return math.nan if cell is None else cell.as_float()


def take_required(row: Row, prop: str, allow_empty: bool = True) -> str:
    cell = row.pop(prop, None)
    if cell is None:
        raise RowRejected(f"missing {prop}")
    if not allow_empty and not cell.as_str():
        raise RowRejected(f"empty {prop}")
    return cell.as_str()


def describe(row: Row) -> str:
    return ", ".join(f"{prop}={cell.as_str()}" for prop, cell in row.items())


class RecordBuilder(Generic[K, R]):
    """Collects the records of one table, keyed by their identifier."""

    stage = ""

    def __init__(self, session: ImportSession) -> None:
        self.session = session

    def build_record(self, row: Row) -> tuple[K, R]:
        raise NotImplementedError

    def build(self, rows: Iterable[Row]) -> dict[K, R]:
        records: dict[K, R] = {}
        for row in rows:
            context = describe(row)
            try:
                key, record = self.build_record(row)
            except RowRejected as exc:
                self.session.record_issue(self.stage, context, str(exc))
                continue
            if key in records:
                self.session.record_issue(self.stage, context, f"duplicate id {key!r}")
                continue
            records[key] = record
        logger.info("%s: built %d records", self.stage, len(records))
        return records


class FormBuilder(RecordBuilder[FormKey, FormRecord]):
    stage = "FormTable"

    def build_record(self, row: Row) -> tuple[FormKey, FormRecord]:
        original_id = take_required(row, "id", allow_empty=False)
        language_id = take(row, "languageReference")
        parameter_ids = take_list(row, "parameterReference")
        form = take(row, "form")
        if original_id in self.session.form_ids:
            raise RowRejected(f"duplicate id {original_id!r}")

        record = FormRecord(
            id=self.session.form_ids.assign(original_id),
            language_id=language_id,
            parameter_ids=parameter_ids,
            form=form,
            value=take(row, "value"),
            comment=take(row, "comment"),
            orthography=take(row, "orthographic", "orthography"),
            segments=take_list(row, "segments"),
            properties=row,
        )
        self.session.note_form_references(language_id, parameter_ids)
        return record.id, record


class LanguageBuilder(RecordBuilder[str, LanguageRecord]):
    stage = "LanguageTable"

    def __init__(
        self, session: ImportSession, family_resolver: FamilyResolver | None = None
    ) -> None:
        super().__init__(session)
        self.family_resolver = family_resolver

    def build_record(self, row: Row) -> tuple[str, LanguageRecord]:
        language_id = take_required(row, "id", allow_empty=False)
        glottocode = take(row, "glottocode")
        # Family and subfamily are not CLDF terms; datasets use plain columns.
        family = take(row, "family", "Family")
        if not family and glottocode and self.family_resolver is not None:
            family = self.family_resolver.family_for(glottocode)
        record = LanguageRecord(
            id=language_id,
            iso639p3code=take(row, "iso639P3code"),
            glottocode=glottocode,
            name=take(row, "name"),
            family=family,
            subfamily=take(row, "subfamily", "Subfamily", "SubFamily"),
            latitude=take_float(row, "latitude"),
            longitude=take_float(row, "longitude"),
            properties=row,
        )
        return language_id, record

    def synthesize(self) -> dict[str, LanguageRecord]:
        """Minimal records for the languages the FormTable referenced."""
        languages = {lid: LanguageRecord(id=lid) for lid in self.session.languages_seen}
        logger.info("%s: synthesized %d languages from forms", self.stage, len(languages))
        return languages


class ParameterBuilder(RecordBuilder[str, ParameterRecord]):
    stage = "ParameterTable"

    def build_record(self, row: Row) -> tuple[str, ParameterRecord]:
        parameter_id = take_required(row, "id", allow_empty=False)
        name = take(row, "name")
        # Gloss and semantic field fall back to the name when not given.
        gloss = take(row, "concepticonGloss", "Concepticon_Gloss", default=name)
        semantic_field = take(row, "semanticField", "Semantic_Field", default=name)
        record = ParameterRecord(
            id=parameter_id,
            name=name,
            concepticon_id=take(row, "concepticonReference"),
            concepticon_gloss=gloss,
            semantic_field=semantic_field,
            properties=row,
        )
        return parameter_id, record

    def synthesize(self) -> dict[str, ParameterRecord]:
        """Minimal records for the concepts the FormTable referenced."""
        parameters = {pid: ParameterRecord(id=pid) for pid in self.session.parameters_seen}
        logger.info("%s: synthesized %d parameters from forms", self.stage, len(parameters))
        return parameters


class CognateBuilder(RecordBuilder[str, CognateJudgementRecord]):
    stage = "CognateTable"

    def build_record(self, row: Row) -> tuple[str, CognateJudgementRecord]:
        judgement_id = take_required(row, "id", allow_empty=False)
        form_reference = take_required(row, "formReference")
        cognateset_id = take_required(row, "cognatesetReference")
        form_id = self.session.form_ids.resolve(form_reference)
        if form_id is None:
            raise RowRejected(f"unknown form {form_reference!r}")
        record = CognateJudgementRecord(
            id=judgement_id,
            form_id=form_id,
            cognateset_id=cognateset_id,
            properties=row,
        )
        return judgement_id, record


class CognateSetBuilder(RecordBuilder[str, CognateSetRecord]):
    stage = "CognatesetTable"

    def build_record(self, row: Row) -> tuple[str, CognateSetRecord]:
        cognateset_id = take_required(row, "id", allow_empty=False)
        record = CognateSetRecord(
            id=cognateset_id,
            description=take(row, "description"),
            sources=take_list(row, "source"),
            properties=row,
        )
        return cognateset_id, record
