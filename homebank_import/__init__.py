"""Public interface for the ``homebank_import`` package.

Re-exports the conversion API, the HomeBank record model and writer, and the
per-bank adapter entry points. There is no runtime logic here.
"""

from .api import ConversionSummary, convert, convert_file
from .errors import (
    ColumnShapeError,
    ConversionError,
    CurrencyMismatchError,
    CurrencyParseError,
    DateParseError,
    DecodeError,
    InputReadError,
    RowError,
    WriteError,
)
from .homebank import Payment, Record, RecordWriter, writer
from .ingest.adapters import ADAPTERS, get_adapter, read_postbank, read_sparda
from .money import EUR, Currency, Money
from .normalizers import normalize, to_record

__all__ = [
    # API
    "convert",
    "convert_file",
    "ConversionSummary",
    # Adapters
    "ADAPTERS",
    "get_adapter",
    "read_postbank",
    "read_sparda",
    "normalize",
    "to_record",
    # HomeBank format
    "Payment",
    "Record",
    "RecordWriter",
    "writer",
    "Currency",
    "Money",
    "EUR",
    # Errors
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
