"""Generic CSV table reader driven by a CSVW column schema."""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Iterator
from typing import Any, BinaryIO

from cldf_wordlist.exceptions import SchemaError
from cldf_wordlist.ingest.cell import CellValue
from cldf_wordlist.ingest.columns import resolve_column_schema
from cldf_wordlist.ingest.models import ImportIssue

logger = logging.getLogger(__name__)

Row = dict[str, CellValue]


def read_table(
    stream: BinaryIO,
    columns: list[dict[str, Any]],
    issues: list[ImportIssue],
    table: str = "",
    strict: bool = False,
    encoding: str = "utf-8-sig",
    delimiter: str = ",",
) -> Iterator[Row]:
    """Yield one property-to-cell mapping per data record of *stream*.

    The header row is consumed to locate the declared *columns*; CSV columns
    the schema does not declare are dropped. A record that cannot be parsed
    or has the wrong number of fields is appended to *issues* and skipped; an
    unparsable header row raises ``SchemaError``. The default encoding drops
    a leading byte order mark.
    """
    text = io.TextIOWrapper(stream, encoding=encoding, newline="")
    reader = csv.reader(text, delimiter=delimiter, strict=True)
    try:
        header = next(reader)
    except StopIteration:
        logger.warning("%s: table is empty", table)
        return
    except csv.Error as exc:
        raise SchemaError(f"{table}: cannot parse CSV header: {exc}") from exc
    schema = resolve_column_schema(columns, header, table=table, strict=strict)
    width = len(header)

    while True:
        try:
            record = next(reader)
        except StopIteration:
            break
        except csv.Error as exc:
            _skip(issues, table, f"line {reader.line_num}", f"CSV parse error: {exc}")
            continue
        if not record:
            continue
        if len(record) != width:
            _skip(
                issues,
                table,
                delimiter.join(record),
                f"expected {width} fields, found {len(record)} (line {reader.line_num})",
            )
            continue
        yield schema.materialize(record)
    text.detach()


def _skip(issues: list[ImportIssue], table: str, context: str, cause: str) -> None:
    logger.warning("%s: skipping record: %s", table, cause)
    issues.append(ImportIssue(stage=table, context=context, cause=cause))
