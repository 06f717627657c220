"""Tests for the cldf-wordlist command line."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

import orjson
import pytest
from typer.testing import CliRunner

from cldf_wordlist.cli.main import app
from cldf_wordlist.utils.logging_setup import PACKAGE_LOGGER

runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


class TestSummaryCommand:
    def test_summary(self, sample_metadata: Path, tmp_path: Path):
        out = tmp_path / "summary.json"
        result = runner.invoke(app, ["summary", str(sample_metadata), "-o", str(out)])
        assert result.exit_code == 0, result.output
        summary = orjson.loads(out.read_bytes())
        assert summary["forms"] == 12
        assert summary["languages"] == 3
        assert summary["cognates"] == 10
        assert summary["cognatesets_referenced"] == 5
        assert summary["complete"] is False
        assert summary["issues"][0]["stage"] == "CognateTable"

    def test_summary_with_config(self, sample_metadata: Path, config_path: Path, tmp_path: Path):
        out = tmp_path / "summary.json"
        result = runner.invoke(
            app, ["summary", str(sample_metadata), "--config", str(config_path), "-o", str(out)]
        )
        assert result.exit_code == 0, result.output
        assert orjson.loads(out.read_bytes())["forms"] == 12

    def test_unsupported_module_exits_nonzero(self, tmp_path: Path):
        metadata = tmp_path / "StructureDataset-metadata.json"
        metadata.write_bytes(
            orjson.dumps(
                {
                    "dc:conformsTo": "http://cldf.clld.org/v1.0/terms.rdf#StructureDataset",
                    "tables": [],
                }
            )
        )
        result = runner.invoke(app, ["summary", str(metadata)])
        assert result.exit_code == 1

    def test_unparsable_header_exits_nonzero(self, write_wordlist, column):
        metadata = write_wordlist(
            {"FormTable": ("forms.csv", [column("ID", "id")], '"ID"x\n1\n')}
        )
        result = runner.invoke(app, ["summary", str(metadata)])
        assert result.exit_code == 1
        assert not isinstance(result.exception, csv.Error)


class TestDumpFormsCommand:
    def test_dump_to_file(self, sample_metadata: Path, tmp_path: Path):
        out = tmp_path / "forms.ndjson"
        result = runner.invoke(app, ["dump-forms", str(sample_metadata), "-o", str(out)])
        assert result.exit_code == 0, result.output
        lines = out.read_bytes().splitlines()
        assert len(lines) == 12
        first = orjson.loads(lines[0])
        assert first["id"] == "deu-water"
        assert first["segments"] == ["v", "a", "s", "ɐ"]
        assert first["properties"] == {"source": "kluge2011"}
