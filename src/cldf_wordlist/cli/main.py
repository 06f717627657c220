"""Main Typer application."""

from __future__ import annotations

import typer

app = typer.Typer(
    name="cldf-wordlist",
    help="Import CLDF Wordlist datasets and inspect the result.",
    no_args_is_help=True,
)


@app.command()
def summary(
    metadata: str = typer.Argument(..., help="Path to the Wordlist metadata JSON"),
    config: str = typer.Option(None, "--config", "-c", help="Path to config YAML"),
    output: str = typer.Option(
        None, "--output", "-o", help="Write the JSON summary here instead of stdout"
    ),
) -> None:
    """Print record counts and skipped rows of a Wordlist."""
    from .summary_cmd import run_summary

    run_summary(metadata, config, output)


@app.command()
def dump_forms(
    metadata: str = typer.Argument(..., help="Path to the Wordlist metadata JSON"),
    config: str = typer.Option(None, "--config", "-c", help="Path to config YAML"),
    output: str = typer.Option(
        None, "--output", "-o", help="Write NDJSON here instead of stdout"
    ),
) -> None:
    """Write all forms as newline-delimited JSON."""
    from .summary_cmd import run_dump_forms

    run_dump_forms(metadata, config, output)


if __name__ == "__main__":
    app()
