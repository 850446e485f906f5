"""Shared machinery for per-bank export adapters.

An adapter is a :class:`BankAdapter` subclass that fixes a bank's dialect
(encoding, delimiter, head/tail boilerplate, header marker) and names the
pydantic :class:`BankRow` model its lines map onto. Adding a bank means adding
one subclass; the reading loop here stays untouched.

Result contract
---------------
:meth:`BankAdapter.read` returns a lazy, single-pass iterator whose items are
either a parsed row or a :class:`~homebank_import.errors.RowError` describing
why that line could not be parsed. Errors are yielded in place of the row and
never raised, so the remaining lines are still produced.
"""

from __future__ import annotations

import csv
from collections.abc import Iterator, Sequence
from typing import BinaryIO, ClassVar, Self, TypeAlias

from pydantic import BaseModel, ConfigDict, ValidationError

from ...errors import ColumnShapeError, DecodeError, InputReadError, RowError
from ...logging_setup import get_logger
from ..utils import SourceLine, drop_last, iter_lines, split_cells

_LOG = get_logger("homebank_import.ingest.adapters")


class BankRow(BaseModel):
    """Base for bank-specific intermediate rows.

    Subclasses declare one field per export column, listed in file order in
    ``columns``. ``error_kinds`` maps a field to the :class:`RowError`
    subclass reported when that field fails validation; fields without an
    entry report :class:`ColumnShapeError`.
    """

    model_config = ConfigDict(frozen=True)

    columns: ClassVar[tuple[str, ...]] = ()
    error_kinds: ClassVar[dict[str, type[RowError]]] = {}

    line_no: int
    # Trailing cells beyond ``columns``; some exports pad rows inconsistently.
    extra: tuple[str, ...] = ()

    @classmethod
    def from_cells(cls, cells: Sequence[str], *, line_no: int, line: str | None = None) -> Self:
        """Build a row from raw cells, raising a :class:`RowError` subclass."""

        if len(cells) < len(cls.columns):
            raise ColumnShapeError(
                f"expected {len(cls.columns)} columns, got {len(cells)}",
                line_no=line_no,
                line=line,
            )
        values = dict(zip(cls.columns, cells, strict=False))
        try:
            return cls(line_no=line_no, extra=tuple(cells[len(cls.columns) :]), **values)
        except ValidationError as exc:
            raise cls._row_error(exc, line_no=line_no, line=line) from exc

    @classmethod
    def _row_error(cls, exc: ValidationError, *, line_no: int, line: str | None) -> RowError:
        first = exc.errors()[0]
        loc = first.get("loc") or ()
        field = str(loc[0]) if loc else ""
        kind = cls.error_kinds.get(field, ColumnShapeError)
        msg = str(first.get("msg", "invalid value")).removeprefix("Value error, ")
        return kind(f"{field}: {msg}" if field else msg, line_no=line_no, line=line)


RowResult: TypeAlias = BankRow | RowError


class BankAdapter:
    """Reads one bank's export dialect into :class:`BankRow` results."""

    name: ClassVar[str]
    row_model: ClassVar[type[BankRow]]
    encoding: ClassVar[str] = "utf-8"
    # Codec error handler used when decoding lines.
    decode_errors: ClassVar[str] = "strict"
    delimiter: ClassVar[str] = ";"
    # Physical lines dropped unconditionally at the top of the file.
    skip_head: ClassVar[int] = 0
    # Data lines (after blank/header filtering) dropped at the end of the file.
    skip_tail: ClassVar[int] = 0
    # First cell of the bank's column header line, treated as boilerplate.
    header: ClassVar[str | None] = None

    def read(self, stream: BinaryIO) -> Iterator[RowResult]:
        """Yield a row or a row-scoped error for every data line of ``stream``."""

        _LOG.debug(
            "reading %s export (encoding=%s, skip_head=%d, skip_tail=%d)",
            self.name,
            self.encoding,
            self.skip_head,
            self.skip_tail,
        )
        lines = iter_lines(
            stream,
            encoding=self.encoding,
            errors=self.decode_errors,
            skip_head=self.skip_head,
        )
        data = (ln for ln in lines if not self.is_boilerplate(ln))
        last_line_no = self.skip_head
        try:
            for ln in drop_last(data, self.skip_tail):
                last_line_no = ln.line_no
                yield self.parse_line(ln)
        except OSError as exc:
            yield InputReadError(
                f"failed reading {self.name} input after line {last_line_no}: {exc}",
                line_no=last_line_no + 1,
            )

    def is_boilerplate(self, ln: SourceLine) -> bool:
        if ln.text is None:
            return False
        if ln.is_blank:
            return True
        if self.header is None:
            return False
        first = ln.text.split(self.delimiter, 1)[0].strip().strip('"')
        return first == self.header

    def parse_line(self, ln: SourceLine) -> RowResult:
        text = ln.text
        if text is None:
            return ln.error or DecodeError("line could not be decoded", line_no=ln.line_no)
        try:
            cells = split_cells(text, self.delimiter)
        except csv.Error as exc:
            # Stray CR inside a field, or a field beyond the csv size limit
            return ColumnShapeError(f"cannot split line: {exc}", line_no=ln.line_no, line=text)
        try:
            return self.row_model.from_cells(cells, line_no=ln.line_no, line=text)
        except RowError as err:
            return err

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


__all__ = ["BankRow", "BankAdapter", "RowResult"]
