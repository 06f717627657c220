"""Exception hierarchy for the CLDF Wordlist importer.

Everything raised here is fatal: the import aborts and no database is
returned. Row-level problems are collected as ``ImportIssue`` records instead.
"""


class CldfImportError(Exception):
    """Base exception for all import errors."""


class MetadataError(CldfImportError):
    """The metadata document is unreadable, not JSON, or missing required keys."""


class UnsupportedModuleError(CldfImportError):
    """The metadata declares a CLDF module other than Wordlist."""

    def __init__(self, conforms_to: str) -> None:
        super().__init__(f"Expected Wordlist, found {conforms_to!r}")
        self.conforms_to = conforms_to


class MissingRequiredTableError(CldfImportError):
    """A table the import cannot do without is not declared."""

    def __init__(self, table_type: str) -> None:
        super().__init__(f"Wordlist has no {table_type}")
        self.table_type = table_type


class TableUnavailableError(CldfImportError):
    """A declared table's byte stream could not be opened."""


class SchemaError(CldfImportError):
    """A table schema cannot be mapped onto its CSV header."""


class UnknownColumnError(SchemaError):
    """A declared column does not occur in the CSV header."""

    def __init__(self, table: str, column: str) -> None:
        super().__init__(f"{table}: column {column!r} not found in CSV header")
        self.table = table
        self.column = column


class DuplicatePropertyError(SchemaError):
    """Two columns of one table resolve to the same property name."""

    def __init__(self, table: str, prop: str) -> None:
        super().__init__(f"{table}: property {prop!r} declared more than once")
        self.table = table
        self.property = prop
