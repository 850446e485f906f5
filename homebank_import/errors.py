"""Exception hierarchy for ``homebank_import``.

Two families exist:

- :class:`RowError` and its subclasses describe a problem with a single input
  line. Adapters and the normalizer *yield* these as items of their result
  sequences instead of raising them, so one bad line never aborts the rest of
  the file. Callers decide whether to skip or stop.
- :class:`WriteError` describes a failure on the output stream. It is always
  raised; a broken output cannot usefully continue.
"""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for all errors raised or yielded by this package."""


class RowError(ConversionError):
    """A failure attributed to one input line.

    ``line_no`` is the 1-based physical line number in the input stream (when
    known) and ``line`` the decoded text of that line (or ``None`` when the
    line could not be decoded).
    """

    def __init__(self, message: str, *, line_no: int | None = None, line: str | None = None):
        super().__init__(message)
        self.message = message
        self.line_no = line_no
        self.line = line

    def __str__(self) -> str:
        if self.line_no is None:
            return self.message
        return f"line {self.line_no}: {self.message}"


class DecodeError(RowError):
    """Input bytes are not valid in the adapter's encoding."""


class ColumnShapeError(RowError):
    """A line has fewer columns than the bank's layout declares."""


class DateParseError(RowError):
    """A date column does not match the bank's date pattern."""


class CurrencyParseError(RowError):
    """A monetary column does not match the bank's number notation."""


class CurrencyMismatchError(RowError):
    """A value is denominated in a currency the destination cannot carry."""


class InputReadError(RowError):
    """The input stream failed while fetching the next line."""


class WriteError(ConversionError):
    """Serializing a record to the output stream failed."""


__all__ = [
    "ConversionError",
    "RowError",
    "DecodeError",
    "ColumnShapeError",
    "DateParseError",
    "CurrencyParseError",
    "CurrencyMismatchError",
    "InputReadError",
    "WriteError",
]
