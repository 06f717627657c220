"""CLI handlers for the summary and dump-forms subcommands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import orjson
import typer

from cldf_wordlist.config.loader import load_config
from cldf_wordlist.config.schema import ImportConfig
from cldf_wordlist.database import WordlistDatabase
from cldf_wordlist.exceptions import CldfImportError
from cldf_wordlist.ingest.importer import load_wordlist
from cldf_wordlist.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _load(metadata: str, config_path: str | None) -> WordlistDatabase:
    cfg = load_config(config_path) if config_path else ImportConfig()
    setup_logging(cfg.log_level)
    try:
        return load_wordlist(metadata, cfg)
    except CldfImportError as exc:
        logger.error("Import failed: %s", exc)
        raise typer.Exit(code=1) from exc


def summarise(db: WordlistDatabase) -> dict:
    return {
        "metadata": str(db.metadata_path) if db.metadata_path else None,
        "forms": len(db.forms),
        "languages": len(db.languages),
        "parameters": len(db.parameters),
        "cognates": len(db.cognates),
        "cognatesets": len(db.cognatesets),
        "cognatesets_referenced": len(db.cognateset_to_forms),
        "complete": db.is_complete,
        "issues": [issue.to_dict() for issue in db.issues],
    }


def run_summary(metadata: str, config_path: str | None, output: str | None = None) -> None:
    db = _load(metadata, config_path)
    data = orjson.dumps(summarise(db), option=orjson.OPT_INDENT_2)
    if output:
        Path(output).write_bytes(data + b"\n")
        logger.info("Wrote summary to %s", output)
    else:
        typer.echo(data.decode())


def run_dump_forms(metadata: str, config_path: str | None, output: str | None) -> None:
    db = _load(metadata, config_path)
    if output:
        out_path = Path(output)
        with out_path.open("wb") as fh:
            for form in db.forms.values():
                fh.write(orjson.dumps(form.to_dict()) + b"\n")
        logger.info("Wrote %d forms to %s", len(db.forms), out_path)
    else:
        for form in db.forms.values():
            sys.stdout.buffer.write(orjson.dumps(form.to_dict()) + b"\n")
        sys.stdout.flush()
