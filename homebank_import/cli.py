"""CLI for the ``homebank_import`` package.

Typer-based console interface converting one bank export into a HomeBank CSV
file. Options can be bound through the environment (``OUTPUT``, ``FORMAT``),
which is loaded from a local ``.env`` via ``python-dotenv`` first. Business
logic lives in :mod:`homebank_import.api`.
"""

from __future__ import annotations

import sys
from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from .api import convert_file
from .errors import RowError, WriteError
from .logging_setup import configure_logging


class BankFormat(StrEnum):
    postbank = "postbank"
    sparda = "sparda"


app = typer.Typer(
    add_completion=False,
    help="Convert bank CSV exports into HomeBank-compatible CSV files.",
)


@app.command()
def convert_cmd(
    input_path: Annotated[
        Path,
        typer.Argument(
            metavar="INPUT",
            help="Bank export to convert.",
            dir_okay=False,
        ),
    ],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", envvar="OUTPUT", help="HomeBank CSV file to create."),
    ],
    bank_format: Annotated[
        BankFormat,
        typer.Option("--format", "-f", envvar="FORMAT", help="Bank that produced INPUT."),
    ],
    fail_fast: Annotated[
        bool,
        typer.Option("--fail-fast", help="Stop at the first malformed row instead of skipping it."),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Logging level (falls back to HOMEBANK_IMPORT_LOG_LEVEL, then INFO).",
        ),
    ] = None,
) -> None:
    """Convert INPUT into a HomeBank CSV file."""

    try:
        configure_logging(log_level)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e

    try:
        summary = convert_file(input_path, output, bank=bank_format.value, fail_fast=fail_fast)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        raise typer.Exit(1) from e
    except PermissionError as e:
        print(f"Error: Permission denied: {e.filename}", file=sys.stderr)
        raise typer.Exit(1) from e
    except RowError as e:
        print(f"Error: Failed to parse {bank_format.value} export: {e}", file=sys.stderr)
        raise typer.Exit(1) from e
    except WriteError as e:
        print(f"Error: Failed writing {output}: {e}", file=sys.stderr)
        raise typer.Exit(1) from e

    typer.echo(
        f"Wrote {summary.written} record(s) to {output}"
        + (f"; skipped {summary.failed} malformed row(s)" if summary.failed else "")
    )


def main() -> None:
    """Console-script entry point."""

    # .env in CWD; never override variables already set.
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
