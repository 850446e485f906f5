"""Logging for the converter.

Everything logs below the ``homebank_import`` logger. Row errors skipped by
:func:`homebank_import.api.convert` are reported there as warnings, and the
adapters and writer add debug detail. The console script installs one stderr
handler through :func:`configure_logging`. An embedding application that never
calls it sees nothing, because :func:`get_logger` parks a ``NullHandler`` on
the package logger.

The level is taken from the ``level`` argument, else from
``HOMEBANK_IMPORT_LOG_LEVEL``, else ``INFO``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "homebank_import"
_LEVEL_ENV = "HOMEBANK_IMPORT_LOG_LEVEL"
_DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"
_CONFIGURED = False


def _parse_level(level: int | str | None) -> int:
    if level is None:
        env_val = os.getenv(_LEVEL_ENV)
        return _parse_level(env_val) if env_val else logging.INFO
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelNamesMapping().get(name)
    if numeric is None:
        raise ValueError(f"unknown log level: {level!r}")
    return numeric


def _package_logger() -> logging.Logger:
    return logging.getLogger(_PKG_LOGGER_NAME)


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Send converter log records to ``stream`` (stderr by default).

    Only the first call has an effect; :func:`reset_logging` undoes it. A
    level name that :mod:`logging` does not know raises ``ValueError``.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    resolved = _parse_level(level)
    logger = _package_logger()
    for h in [h for h in logger.handlers if isinstance(h, logging.NullHandler)]:
        logger.removeHandler(h)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(resolved)
    # Warnings go to our handler only, not again through the root logger.
    logger.propagate = False

    _CONFIGURED = True


def reset_logging() -> None:
    """Return the package logger to its unconfigured state."""

    global _CONFIGURED
    logger = _package_logger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    _CONFIGURED = False


def get_logger(name: str) -> logging.Logger:
    if not _CONFIGURED and not _package_logger().handlers:
        _package_logger().addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "reset_logging"]
