"""HomeBank CSV transaction format: canonical record and writer.

Column contract (see http://homebank.free.fr/help/misc-csvformat.html#txn),
``;``-delimited, no header row, exact order:

    date ; payment ; info ; payee ; memo ; amount ; category ; tags

- ``date``: ``YYYY-MM-DD``
- ``payment``: integer code 0..11 (:class:`Payment`)
- ``amount``: locale text of the amount without currency symbol/code
- ``tags``: space-separated tokens
"""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from datetime import date
from enum import IntEnum
from typing import BinaryIO

from .errors import CurrencyMismatchError, WriteError
from .logging_setup import get_logger
from .money import EUR, Currency, Money

_LOG = get_logger("homebank_import.homebank")


class Payment(IntEnum):
    """HomeBank payment method codes.

    The integer value is what goes on the wire; :attr:`label` is the display
    name. Both derive from this one table.
    """

    NONE = 0
    CREDIT_CARD = 1
    CHECK = 2
    CASH = 3
    # CSV cannot reference a second account, so HomeBank imports this as 4.
    BANK_TRANSFER = 4
    INTERNAL_TRANSFER = 5
    DEBIT_CARD = 6
    STANDING_ORDER = 7
    ELECTRONIC_PAYMENT = 8
    DEPOSIT = 9
    FINANCIAL_INSTITUTION_FEE = 10
    DIRECT_DEBIT = 11

    @property
    def label(self) -> str:
        if self is Payment.FINANCIAL_INSTITUTION_FEE:
            return "institution-fee"
        return self.name.lower().replace("_", "-")

    @classmethod
    def from_label(cls, label: str) -> Payment:
        key = label.strip().lower()
        for member in cls:
            if member.label == key:
                return member
        raise ValueError(f"unknown payment method: {label!r}")


@dataclass(frozen=True, slots=True)
class Record:
    """A single HomeBank transaction in canonical form."""

    date: date
    payment: Payment
    info: str
    payee: str
    memo: str
    amount: Money
    category: str = ""
    tags: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.payment, Payment):
            raise ValueError(f"payment must be a Payment, got {self.payment!r}")
        for tag in self.tags:
            # Tags are space-separated on the wire.
            if not tag or any(ch.isspace() for ch in tag):
                raise ValueError(f"tag must be a non-empty token without whitespace: {tag!r}")

    def to_row(self) -> list[str]:
        """Return the record's fields as destination-format text, in order."""

        return [
            self.date.strftime("%Y-%m-%d"),
            str(int(self.payment)),
            self.info,
            self.payee,
            self.memo,
            str(self.amount),
            self.category,
            " ".join(self.tags),
        ]


class _Utf8Sink:
    """Text facade over a binary stream for :func:`csv.writer`."""

    def __init__(self, stream: BinaryIO):
        self._stream = stream

    def write(self, text: str) -> int:
        return self._stream.write(text.encode("utf-8"))


class RecordWriter:
    """Stateful serializer appending HomeBank lines to a binary stream.

    ``write`` does not flush; call :meth:`flush` once done. Output already
    handed to the stream is never rolled back on a later failure.
    """

    def __init__(self, stream: BinaryIO, *, currency: Currency = EUR):
        self._stream = stream
        self._csv = csv.writer(
            _Utf8Sink(stream),
            delimiter=";",
            quoting=csv.QUOTE_MINIMAL,
            lineterminator="\n",
        )
        self.currency = currency
        self.written = 0

    def write(self, record: Record) -> None:
        if record.amount.currency != self.currency:
            raise CurrencyMismatchError(
                f"amount {record.amount} is in {record.amount.currency.code}; "
                f"output is {self.currency.code} only"
            )
        try:
            self._csv.writerow(record.to_row())
        except (OSError, csv.Error, UnicodeEncodeError) as exc:
            raise WriteError(f"failed serializing record dated {record.date}: {exc}") from exc
        self.written += 1

    def flush(self) -> None:
        try:
            self._stream.flush()
        except OSError as exc:
            raise WriteError(f"failed flushing output: {exc}") from exc
        _LOG.debug("flushed %d record(s)", self.written)


def writer(stream: BinaryIO, *, currency: Currency = EUR) -> RecordWriter:
    """Return a :class:`RecordWriter` over an open writable binary stream."""

    return RecordWriter(stream, currency=currency)


__all__ = ["Payment", "Record", "RecordWriter", "writer"]
