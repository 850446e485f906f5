"""Monetary values bound to a currency, with locale-style parsing/rendering.

Bank exports write amounts the way the account's locale does (``-1.234,56``
for EUR) and HomeBank expects the same notation back. Amounts are held as
:class:`~decimal.Decimal` to avoid binary floating point drift.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation


@dataclass(frozen=True, slots=True)
class Currency:
    """Notation of a currency: ISO code, minor units and separators."""

    code: str
    minor_units: int
    decimal_mark: str
    thousands_separator: str

    def __str__(self) -> str:
        return self.code


EUR = Currency(code="EUR", minor_units=2, decimal_mark=",", thousands_separator=".")

CURRENCIES: dict[str, Currency] = {EUR.code: EUR}


def _amount_pattern(currency: Currency, *, grouping: bool) -> re.Pattern[str]:
    dec = re.escape(currency.decimal_mark)
    if grouping:
        sep = re.escape(currency.thousands_separator)
        whole = rf"\d{{1,3}}(?:{sep}\d{{3}})+|\d+"
    else:
        whole = r"\d+"
    return re.compile(rf"(?P<sign>[+-])?(?P<whole>{whole})(?:{dec}(?P<frac>\d+))?")


@dataclass(frozen=True, slots=True)
class Money:
    """A signed amount in a single currency. Negative means debit."""

    amount: Decimal
    currency: Currency

    @classmethod
    def parse(cls, text: str, currency: Currency, *, grouping: bool = True) -> Money:
        """Parse locale-formatted ``text`` (e.g. ``"-25,88"``) in ``currency``.

        Thousands separators are accepted only when ``grouping`` is true and
        only in groups of three, so a dot-decimal value such as ``"25.88"`` is
        rejected for EUR rather than misread as 2588.

        Raises ``ValueError`` when the text does not match the notation.
        """

        s = text.strip()
        m = _amount_pattern(currency, grouping=grouping).fullmatch(s)
        if m is None:
            raise ValueError(f"invalid {currency.code} amount: {text!r}")
        number = m["whole"].replace(currency.thousands_separator, "")
        if m["frac"]:
            number = f"{number}.{m['frac']}"
        try:
            value = Decimal(number)
        except InvalidOperation as exc:  # pragma: no cover - guarded by the pattern
            raise ValueError(f"invalid {currency.code} amount: {text!r}") from exc
        return cls(-value if m["sign"] == "-" else value, currency)

    @property
    def is_negative(self) -> bool:
        return self.amount < 0

    def __str__(self) -> str:
        # Locale rendering without symbol or code: "-1.234,50"
        c = self.currency
        q = self.amount.quantize(Decimal(1).scaleb(-c.minor_units), rounding=ROUND_HALF_UP)
        sign = "-" if q < 0 else ""
        whole, _, frac = f"{abs(q):f}".partition(".")
        grouped = f"{int(whole):,}".replace(",", c.thousands_separator)
        return f"{sign}{grouped}{c.decimal_mark}{frac}" if frac else f"{sign}{grouped}"


__all__ = ["Currency", "Money", "EUR", "CURRENCIES"]
