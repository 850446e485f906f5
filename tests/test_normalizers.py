# ruff: noqa: E501
from datetime import date
from decimal import Decimal

import pytest

from homebank_import import EUR, DateParseError, Money, Payment, Record, normalize, to_record
from homebank_import.ingest.adapters import PostbankRow, SpardaRow

POSTBANK_CELLS = "7.3.2024;7.3.2024;SEPA Lastschrift;Woopsie;Doopsie;DE123;;ABCD;EFG;DE123;;-25,88;;;;-25,88;;EUR".split(";")
SPARDA_CELLS = "2024-03-01;2024-03-01;DE02120300000000202051;Stadtwerke München;Abschlag März;-89,00;EUR".split(";")


def test_postbank_row_to_record():
    row = PostbankRow.from_cells(POSTBANK_CELLS, line_no=8)

    assert to_record(row) == Record(
        date=date(2024, 3, 7),
        payment=Payment.ELECTRONIC_PAYMENT,
        info="ABCD",
        payee="Woopsie",
        memo="Doopsie",
        amount=Money(Decimal("-25.88"), EUR),
        category="",
        tags=(),
    )


def test_sparda_row_to_record():
    row = SpardaRow.from_cells(SPARDA_CELLS, line_no=11)

    assert to_record(row) == Record(
        date=date(2024, 3, 1),
        payment=Payment.ELECTRONIC_PAYMENT,
        info="DE02120300000000202051",
        payee="Stadtwerke München",
        memo="Abschlag März",
        amount=Money(Decimal("-89.00"), EUR),
        category="",
        tags=(),
    )


def test_normalize_passes_errors_through_in_order():
    err = DateParseError("buchungstag: bad", line_no=9)
    rows = [
        PostbankRow.from_cells(POSTBANK_CELLS, line_no=8),
        err,
        SpardaRow.from_cells(SPARDA_CELLS, line_no=10),
    ]

    out = list(normalize(rows))

    assert isinstance(out[0], Record)
    assert out[1] is err
    assert isinstance(out[2], Record)
    assert out[2].payee == "Stadtwerke München"


def test_unknown_row_type_is_a_programming_error():
    with pytest.raises(TypeError, match="no normalizer for dict"):
        to_record({"buchungstag": "7.3.2024"})
