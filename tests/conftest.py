"""Pytest configuration for test isolation.

The CLI binds ``OUTPUT``/``FORMAT``/``HOMEBANK_IMPORT_LOG_LEVEL`` from the
environment and configures the package logger once per process. Both would
leak between tests (a developer's shell may export ``FORMAT`` for unrelated
reasons, and a handler bound to a finished ``CliRunner`` stream breaks later
log calls), so every test starts from a clean slate.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from homebank_import.logging_setup import reset_logging


@pytest.fixture(autouse=True)
def _isolate_env_and_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for var in ("OUTPUT", "FORMAT", "HOMEBANK_IMPORT_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    reset_logging()
    yield
    reset_logging()
