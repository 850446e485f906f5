"""Bank row → HomeBank :class:`~homebank_import.homebank.Record` normalizers.

Each supported bank has one fixed field-to-field mapping. Bank exports carry
no usable payment-method or category information, so every record is tagged
``ELECTRONIC_PAYMENT`` with an empty category and no tags.

Out of scope: categorization, payee clean-up, and deriving ``info`` from
anything other than the bank's reference/IBAN column.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any, TypeAlias

from .errors import RowError
from .homebank import Payment, Record
from .ingest.adapters import PostbankRow, RowResult, SpardaRow

RecordResult: TypeAlias = Record | RowError


def _normalize_postbank(row: PostbankRow) -> Record:
    return Record(
        date=row.buchungstag,
        payment=Payment.ELECTRONIC_PAYMENT,
        info=row.kundenreferenz,
        payee=row.auftraggeber,
        memo=row.verwendungszweck,
        amount=row.betrag,
        category="",
        tags=(),
    )


def _normalize_sparda(row: SpardaRow) -> Record:
    return Record(
        date=row.buchungstag,
        payment=Payment.ELECTRONIC_PAYMENT,
        info=row.gegeniban,
        payee=row.name_gegenkonto,
        memo=row.verwendungszweck,
        amount=row.umsatz,
        category="",
        tags=(),
    )


_NORMALIZERS: dict[type, Callable[[Any], Record]] = {
    PostbankRow: _normalize_postbank,
    SpardaRow: _normalize_sparda,
}


def to_record(row: Any) -> Record:
    """Map a parsed bank row onto a HomeBank record."""

    try:
        fn = _NORMALIZERS[type(row)]
    except KeyError:
        raise TypeError(f"no normalizer for {type(row).__name__}") from None
    return fn(row)


def normalize(results: Iterable[RowResult]) -> Iterator[RecordResult]:
    """Map each row to a record; row errors pass through unchanged, in order."""

    for item in results:
        if isinstance(item, RowError):
            yield item
        else:
            yield to_record(item)


__all__ = ["RecordResult", "normalize", "to_record"]
