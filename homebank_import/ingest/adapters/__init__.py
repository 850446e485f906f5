"""Per-bank export adapters and the name → adapter registry."""

from __future__ import annotations

from .base import BankAdapter, BankRow, RowResult
from .postbank import PostbankAdapter, PostbankRow, read_postbank
from .sparda import SpardaAdapter, SpardaRow, read_sparda

ADAPTERS: dict[str, BankAdapter] = {
    PostbankAdapter.name: PostbankAdapter(),
    SpardaAdapter.name: SpardaAdapter(),
}


def get_adapter(name: str) -> BankAdapter:
    """Return the adapter registered under ``name`` (case-insensitive)."""

    key = name.strip().lower()
    try:
        return ADAPTERS[key]
    except KeyError:
        known = ", ".join(sorted(ADAPTERS))
        raise KeyError(f"unknown bank format: {name!r} (known: {known})") from None


__all__ = [
    "ADAPTERS",
    "BankAdapter",
    "BankRow",
    "RowResult",
    "PostbankAdapter",
    "PostbankRow",
    "SpardaAdapter",
    "SpardaRow",
    "get_adapter",
    "read_postbank",
    "read_sparda",
]
