"""Ingest utilities shared by the bank adapters.

Bank exports are not valid CSV files as a whole: they open with account
metadata, may close with a balance footer, and never quote their fields. The
helpers here turn a binary stream into numbered, decoded lines, discard the
fixed head/tail boilerplate and split a line into raw cells.
"""

from __future__ import annotations

import codecs
import csv
from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date, datetime
from itertools import islice
from typing import BinaryIO, TypeVar

from ..errors import DecodeError

# Windows-1252 as browsers (and encoding_rs) read it: the five bytes Python's
# cp1252 leaves undefined (0x81, 0x8D, 0x8F, 0x90, 0x9D) map to the C1 controls.
C1_CONTROLS = "homebank_import.c1controls"


def _c1_controls(exc: UnicodeError) -> tuple[str, int]:
    if not isinstance(exc, UnicodeDecodeError):
        raise exc
    undecoded = exc.object[exc.start : exc.end]
    return "".join(chr(b) for b in undecoded), exc.end


codecs.register_error(C1_CONTROLS, _c1_controls)


@dataclass(frozen=True, slots=True)
class SourceLine:
    """One physical input line: decoded ``text`` or a ``DecodeError``."""

    line_no: int
    text: str | None
    error: DecodeError | None = None

    @property
    def is_blank(self) -> bool:
        return self.text is not None and not self.text.strip()


def iter_lines(
    stream: BinaryIO,
    *,
    encoding: str,
    errors: str = "strict",
    skip_head: int = 0,
) -> Iterator[SourceLine]:
    """Yield decoded lines of ``stream`` after dropping ``skip_head`` lines.

    Line endings are stripped. ``errors`` is the codec error handler (e.g.
    :data:`C1_CONTROLS`). Undecodable lines are yielded with ``error`` set
    instead of ``text``. ``OSError`` from the stream propagates.
    """

    raw_lines = iter(stream.readline, b"")
    for line_no, raw in enumerate(islice(raw_lines, skip_head, None), start=skip_head + 1):
        try:
            text = raw.decode(encoding, errors)
        except UnicodeDecodeError as exc:
            yield SourceLine(
                line_no,
                None,
                DecodeError(f"not valid {encoding}: {exc.reason}", line_no=line_no),
            )
            continue
        yield SourceLine(line_no, text.rstrip("\r\n"))


T = TypeVar("T")


def drop_last(items: Iterable[T], n: int = 1) -> Iterator[T]:
    """Yield all but the last ``n`` items, buffering exactly ``n`` ahead."""

    it = iter(items)
    if n <= 0:
        yield from it
        return
    pending: deque[T] = deque(islice(it, n), maxlen=n)
    for item in it:
        yield pending.popleft()
        pending.append(item)


def split_cells(text: str, delimiter: str) -> list[str]:
    """Split one line into cells; quote characters are kept literally."""

    reader = csv.reader((text,), delimiter=delimiter, quoting=csv.QUOTE_NONE)
    return next(reader, [])


def parse_date(text: str, fmt: str) -> date:
    """Parse ``text`` with ``strptime`` pattern ``fmt``; raises ``ValueError``."""

    s = text.strip()
    try:
        return datetime.strptime(s, fmt).date()
    except ValueError as exc:
        raise ValueError(f"date {text!r} does not match {fmt!r}") from exc


__all__ = ["C1_CONTROLS", "SourceLine", "iter_lines", "drop_last", "split_cells", "parse_date"]
