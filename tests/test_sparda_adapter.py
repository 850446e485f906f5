import io
from datetime import date
from decimal import Decimal

from homebank_import import InputReadError, read_sparda
from homebank_import.ingest.adapters import SpardaRow

PREAMBLE_LINES = [
    "Sparda-Bank",
    "Umsatzanzeige",
    "",
    "Kontoinhaber:;Max Mustermann",
    "IBAN:;DE12500905000001234567",
    "Kontoname:;Girokonto",
    "",
    "Zeitraum:;01.03.2024 - 31.03.2024",
    "",
    "Buchungstag;Wertstellungstag;Gegen-IBAN;Name Gegenkonto;Verwendungszweck;Umsatz;Währung",
]
ROWS = [
    "2024-03-01;2024-03-01;DE02120300000000202051;Stadtwerke München;Abschlag März;-89,00;EUR",
    '2024-03-04;2024-03-04;DE89370400440532013000;Arbeitgeber GmbH;Gehalt 03/2024;"2.450,00";EUR',
]


def _export(rows: list[str]) -> bytes:
    # Sparda writes Windows-1252 with CRLF line endings
    return "\r\n".join(PREAMBLE_LINES + rows).encode("cp1252") + b"\r\n"


def test_parses_cp1252_export_after_preamble():
    rows = list(read_sparda(io.BytesIO(_export(ROWS))))

    assert len(rows) == 2
    first, second = rows
    assert isinstance(first, SpardaRow)
    assert first.buchungstag == date(2024, 3, 1)
    assert first.name_gegenkonto == "Stadtwerke München"
    assert first.verwendungszweck == "Abschlag März"
    assert first.gegeniban == "DE02120300000000202051"
    assert first.umsatz.amount == Decimal("-89.00")
    assert first.line_no == 11
    assert second.umsatz.amount == Decimal("2450.00")
    assert second.waehrung == "EUR"


def test_no_trailing_line_is_dropped():
    rows = list(read_sparda(io.BytesIO(_export(ROWS[:1]))))

    assert len(rows) == 1
    assert isinstance(rows[0], SpardaRow)


def test_short_input_yields_nothing():
    data = "\r\n".join(PREAMBLE_LINES[:4]).encode("cp1252")

    assert list(read_sparda(io.BytesIO(data))) == []


def test_bytes_undefined_in_cp1252_decode_as_c1_controls():
    bad = b"2024-03-05;2024-03-05;DE1;Bad \x81 Byte;x;-1,00;EUR\r\n"
    data = _export(ROWS[:1]) + bad + ROWS[1].encode("cp1252") + b"\r\n"

    rows = list(read_sparda(io.BytesIO(data)))

    assert [type(r) for r in rows] == [SpardaRow, SpardaRow, SpardaRow]
    assert rows[1].line_no == 12
    assert rows[1].name_gegenkonto == "Bad \x81 Byte"


def test_read_failure_ends_the_sequence_with_an_error():
    class FlakyStream(io.BytesIO):
        def __init__(self, data: bytes, fail_after: int):
            super().__init__(data)
            self._calls = 0
            self._fail_after = fail_after

        def readline(self, size: int | None = -1) -> bytes:
            self._calls += 1
            if self._calls > self._fail_after:
                raise OSError("device unplugged")
            return super().readline(size)

    extra = "2024-03-06;2024-03-06;DE3;Dritter;x;-2,00;EUR"
    stream = FlakyStream(_export(ROWS + [extra]), fail_after=len(PREAMBLE_LINES) + 2)

    rows = list(read_sparda(stream))

    assert [type(r) for r in rows] == [SpardaRow, SpardaRow, InputReadError]
    assert rows[2].line_no == 13
    assert "device unplugged" in str(rows[2])
