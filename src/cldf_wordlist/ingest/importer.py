"""Import a CLDF Wordlist into a WordlistDatabase."""

from __future__ import annotations

import logging
from pathlib import Path

from cldf_wordlist.config.schema import ImportConfig
from cldf_wordlist.database import WordlistDatabase
from cldf_wordlist.exceptions import TableUnavailableError
from cldf_wordlist.ingest.base import FamilyResolver, LocalTableOpener, TableOpener
from cldf_wordlist.ingest.builders import (
    CognateBuilder,
    CognateSetBuilder,
    FormBuilder,
    LanguageBuilder,
    ParameterBuilder,
    RecordBuilder,
)
from cldf_wordlist.ingest.family_resolver import GlottologFamilyResolver
from cldf_wordlist.ingest.metadata import TableDescriptor, WordlistMetadata
from cldf_wordlist.ingest.session import ImportSession
from cldf_wordlist.ingest.table_reader import read_table

logger = logging.getLogger(__name__)


class WordlistImporter:
    """Reads the tables of one Wordlist in dependency order.

    Fatal problems (wrong module, missing FormTable, unreadable metadata or
    tables) raise a ``CldfImportError``. Skipped rows end up in the returned
    database's ``issues``.
    """

    def __init__(
        self,
        config: ImportConfig | None = None,
        opener: TableOpener | None = None,
        family_resolver: FamilyResolver | None = None,
    ) -> None:
        self.config = config or ImportConfig()
        self.opener = opener
        if family_resolver is None and self.config.glottolog_languoids is not None:
            family_resolver = GlottologFamilyResolver.from_csv(self.config.glottolog_languoids)
        self.family_resolver = family_resolver

    def load(self, metadata_path: Path | str) -> WordlistDatabase:
        """Import the Wordlist described by the metadata JSON at *metadata_path*."""
        metadata = WordlistMetadata.from_path(metadata_path)
        return self.load_metadata(metadata)

    def load_metadata(self, metadata: WordlistMetadata) -> WordlistDatabase:
        for table_type in self.config.required_tables:
            metadata.require(table_type)
        opener = self.opener
        if opener is None:
            opener = LocalTableOpener(metadata.base_dir or Path.cwd())

        session = ImportSession.for_mode(self.config.form_id_mode)
        logger.info("Importing Wordlist %s", metadata.path or "<in-memory>")

        forms = self._read(FormBuilder(session), metadata.require("FormTable"), opener)

        language_builder = LanguageBuilder(session, self.family_resolver)
        language_table = metadata.get("LanguageTable")
        if language_table is not None:
            languages = self._read(language_builder, language_table, opener)
        else:
            languages = language_builder.synthesize()

        parameter_builder = ParameterBuilder(session)
        parameter_table = metadata.get("ParameterTable")
        if parameter_table is not None:
            parameters = self._read(parameter_builder, parameter_table, opener)
        else:
            parameters = parameter_builder.synthesize()

        # Judgements and cognate sets are only read from their own tables.
        cognates: dict = {}
        cognate_table = metadata.get("CognateTable")
        if cognate_table is not None:
            cognates = self._read(CognateBuilder(session), cognate_table, opener)

        cognatesets: dict = {}
        cognateset_table = metadata.get("CognatesetTable")
        if cognateset_table is not None:
            cognatesets = self._read(CognateSetBuilder(session), cognateset_table, opener)

        database = WordlistDatabase(
            forms=forms,
            languages=languages,
            parameters=parameters,
            cognates=cognates,
            cognatesets=cognatesets,
            issues=session.issues,
            metadata_path=metadata.path,
        )
        if session.issues:
            logger.warning("Import finished with %d skipped rows", len(session.issues))
        logger.info("Imported %r", database)
        return database

    def _read(
        self, builder: RecordBuilder, table: TableDescriptor, opener: TableOpener
    ) -> dict:
        logger.info("Reading %s from %s", builder.stage, table.url)
        with opener.open(table.url) as stream:
            rows = read_table(
                stream,
                table.columns,
                builder.session.issues,
                table=builder.stage,
                strict=self.config.strict_columns,
                encoding=self.config.encoding,
                delimiter=self.config.delimiter,
            )
            try:
                return builder.build(rows)
            except UnicodeDecodeError as exc:
                raise TableUnavailableError(
                    f"{builder.stage} at {table.url} is not {self.config.encoding}: {exc}"
                ) from exc


def load_wordlist(
    metadata_path: Path | str,
    config: ImportConfig | None = None,
    opener: TableOpener | None = None,
    family_resolver: FamilyResolver | None = None,
) -> WordlistDatabase:
    """Import a CLDF Wordlist from its metadata file."""
    importer = WordlistImporter(config, opener=opener, family_resolver=family_resolver)
    return importer.load(metadata_path)
