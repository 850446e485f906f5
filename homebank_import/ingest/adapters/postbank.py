"""Adapter for Postbank "Umsätze" CSV exports.

Layout
------
- UTF-8, ``;``-delimited, fields never quoted.
- 7 lines of account metadata, then the column header line, then one line per
  booking, then a closing balance line (``Kontostand``) that is not a booking.
- Dates are ``D.M.YYYY`` (day/month may lack zero padding, e.g. ``7.3.2024``).
- Amounts use a decimal comma, no thousands grouping, leading ``-`` for debits
  (``-25,88``); everything is EUR.

Columns (exact order):
``Buchungstag, Wert, Umsatzart, Begünstigter / Auftraggeber,
Verwendungszweck, IBAN / Kontonummer, BIC, Kundenreferenz,
Mandatsreferenz, Gläubiger ID, Fremde Gebühren, Betrag,
Abweichender Empfänger, Anzahl der Aufträge, Anzahl der Schecks, Soll,
Haben, Währung``
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date
from typing import BinaryIO, ClassVar

from pydantic import InstanceOf, field_validator

from ...errors import CurrencyMismatchError, CurrencyParseError, DateParseError, RowError
from ...money import EUR, Money
from ..utils import parse_date
from .base import BankAdapter, BankRow, RowResult

DATE_FORMAT = "%d.%m.%Y"


class PostbankRow(BankRow):
    columns: ClassVar[tuple[str, ...]] = (
        "buchungstag",
        "wert",
        "umsatzart",
        "auftraggeber",
        "verwendungszweck",
        "iban",
        "bic",
        "kundenreferenz",
        "mandatsreferenz",
        "glaeubiger_id",
        "fremde_gebuehren",
        "betrag",
        "abweichender_empfaenger",
        "anzahl_auftraege",
        "anzahl_schecks",
        "soll",
        "haben",
        "waehrung",
    )
    error_kinds: ClassVar[dict[str, type[RowError]]] = {
        "buchungstag": DateParseError,
        "wert": DateParseError,
        "betrag": CurrencyParseError,
        "waehrung": CurrencyMismatchError,
    }

    # Mapped onto the HomeBank record
    buchungstag: date
    auftraggeber: str
    verwendungszweck: str
    kundenreferenz: str
    betrag: InstanceOf[Money]

    # Retained for completeness/debugging only
    wert: date
    umsatzart: str
    iban: str
    bic: str
    mandatsreferenz: str
    glaeubiger_id: str
    fremde_gebuehren: str
    abweichender_empfaenger: str
    anzahl_auftraege: str
    anzahl_schecks: str
    soll: str
    haben: str
    waehrung: str

    @field_validator("buchungstag", "wert", mode="before")
    @classmethod
    def _parse_date(cls, v: str) -> date:
        return parse_date(v, DATE_FORMAT)

    @field_validator("betrag", mode="before")
    @classmethod
    def _parse_amount(cls, v: str) -> Money:
        return Money.parse(v, EUR, grouping=False)

    @field_validator("waehrung")
    @classmethod
    def _check_currency(cls, v: str) -> str:
        code = v.strip()
        if code and code != EUR.code:
            raise ValueError(f"{code} bookings cannot be converted; only {EUR.code} is supported")
        return code


class PostbankAdapter(BankAdapter):
    name = "postbank"
    row_model = PostbankRow
    encoding = "utf-8"
    delimiter = ";"
    skip_head = 7
    skip_tail = 1
    header = "Buchungstag"


def read_postbank(stream: BinaryIO) -> Iterator[RowResult]:
    """Read a Postbank export from an open binary stream."""

    return PostbankAdapter().read(stream)


__all__ = ["PostbankRow", "PostbankAdapter", "read_postbank"]
