"""Adapter for Sparda-Bank CSV exports.

Sparda's export tool predates Unicode: files are Windows-1252, ``;``-delimited
and unquoted, with 10 lines of preamble before the first booking and no
footer. The five bytes cp1252 leaves undefined decode to the matching C1
control characters instead of failing the line. Dates are ISO
(``YYYY-MM-DD``); amounts are EUR with a decimal comma and optional ``.``
thousands grouping, occasionally wrapped in literal double quotes.

Columns (exact order):
``Buchungstag, Wertstellungstag, Gegen-IBAN, Name Gegenkonto,
Verwendungszweck, Umsatz, Währung``
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date
from typing import BinaryIO, ClassVar

from pydantic import InstanceOf, field_validator

from ...errors import CurrencyMismatchError, CurrencyParseError, DateParseError, RowError
from ...money import EUR, Money
from ..utils import C1_CONTROLS, parse_date
from .base import BankAdapter, BankRow, RowResult

DATE_FORMAT = "%Y-%m-%d"


class SpardaRow(BankRow):
    columns: ClassVar[tuple[str, ...]] = (
        "buchungstag",
        "wertstellungstag",
        "gegeniban",
        "name_gegenkonto",
        "verwendungszweck",
        "umsatz",
        "waehrung",
    )
    error_kinds: ClassVar[dict[str, type[RowError]]] = {
        "buchungstag": DateParseError,
        "wertstellungstag": DateParseError,
        "umsatz": CurrencyParseError,
        "waehrung": CurrencyMismatchError,
    }

    buchungstag: date
    gegeniban: str
    name_gegenkonto: str
    verwendungszweck: str
    umsatz: InstanceOf[Money]

    wertstellungstag: date
    waehrung: str

    @field_validator("buchungstag", "wertstellungstag", mode="before")
    @classmethod
    def _parse_date(cls, v: str) -> date:
        return parse_date(v, DATE_FORMAT)

    @field_validator("umsatz", mode="before")
    @classmethod
    def _parse_amount(cls, v: str) -> Money:
        return Money.parse(v.strip().strip('"'), EUR)

    @field_validator("waehrung")
    @classmethod
    def _check_currency(cls, v: str) -> str:
        code = v.strip().strip('"')
        if code and code != EUR.code:
            raise ValueError(f"{code} bookings cannot be converted; only {EUR.code} is supported")
        return code


class SpardaAdapter(BankAdapter):
    name = "sparda"
    row_model = SpardaRow
    encoding = "cp1252"
    decode_errors = C1_CONTROLS
    delimiter = ";"
    skip_head = 10
    skip_tail = 0
    header = "Buchungstag"


def read_sparda(stream: BinaryIO) -> Iterator[RowResult]:
    """Read a Sparda export from an open binary stream."""

    return SpardaAdapter().read(stream)


__all__ = ["SpardaRow", "SpardaAdapter", "read_sparda"]
