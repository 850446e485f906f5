"""Public conversion API for ``homebank_import``.

``convert`` drives the whole pipeline: adapter → normalizer → writer. Row
errors are logged and skipped (or re-raised with ``fail_fast``); write errors
always propagate.
"""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import BinaryIO

from .errors import RowError
from .homebank import writer
from .ingest.adapters import get_adapter
from .logging_setup import get_logger
from .normalizers import normalize

_LOG = get_logger("homebank_import.api")


@dataclass(frozen=True, slots=True)
class ConversionSummary:
    """Outcome of one conversion run."""

    bank: str
    written: int
    failed: int
    errors: tuple[RowError, ...] = ()


def convert(
    source: BinaryIO,
    sink: BinaryIO,
    *,
    bank: str,
    fail_fast: bool = False,
) -> ConversionSummary:
    """Convert a bank export read from ``source`` into HomeBank CSV on ``sink``.

    Parameters
    ----------
    source:
        Open binary stream holding the bank's export.
    sink:
        Open writable binary stream; records are appended and flushed once at
        the end.
    bank:
        Registered adapter name (``"postbank"``, ``"sparda"``).
    fail_fast:
        When true, the first row error is re-raised after flushing what has
        been written so far. Otherwise bad rows are logged and skipped.

    Raises
    ------
    KeyError
        ``bank`` names no registered adapter.
    homebank_import.errors.WriteError
        The output stream failed.
    homebank_import.errors.RowError
        Only with ``fail_fast``.
    """

    adapter = get_adapter(bank)
    out = writer(sink)
    errors: list[RowError] = []

    try:
        for item in normalize(adapter.read(source)):
            if isinstance(item, RowError):
                _LOG.warning("skipping %s row: %s", adapter.name, item)
                errors.append(item)
                if fail_fast:
                    raise item
                continue
            out.write(item)
    finally:
        out.flush()

    _LOG.info(
        "converted %s export: %d record(s) written, %d row(s) skipped",
        adapter.name,
        out.written,
        len(errors),
    )
    return ConversionSummary(
        bank=adapter.name,
        written=out.written,
        failed=len(errors),
        errors=tuple(errors),
    )


def convert_file(
    input_path: str | PathLike[str],
    output_path: str | PathLike[str],
    *,
    bank: str,
    fail_fast: bool = False,
) -> ConversionSummary:
    """Open ``input_path``/``output_path`` and delegate to :func:`convert`."""

    src = Path(input_path)
    dst = Path(output_path)
    with src.open("rb") as fin, dst.open("wb") as fout:
        return convert(fin, fout, bank=bank, fail_fast=fail_fast)


__all__ = ["ConversionSummary", "convert", "convert_file"]
