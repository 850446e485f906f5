import io
import logging

import pytest

from homebank_import.logging_setup import configure_logging, get_logger, reset_logging


def test_unconfigured_package_logger_is_silent():
    get_logger("homebank_import.api")

    handlers = logging.getLogger("homebank_import").handlers
    assert [type(h) for h in handlers] == [logging.NullHandler]


def test_configure_writes_to_stream_once():
    first, second = io.StringIO(), io.StringIO()
    configure_logging("warning", stream=first)
    configure_logging("debug", stream=second)

    log = get_logger("homebank_import.api")
    log.info("hidden")
    log.warning("line 9: bad amount")

    assert first.getvalue() == "WARNING homebank_import.api: line 9: bad amount\n"
    assert second.getvalue() == ""
    assert not any(
        isinstance(h, logging.NullHandler) for h in logging.getLogger("homebank_import").handlers
    )


def test_level_falls_back_to_environment(monkeypatch):
    monkeypatch.setenv("HOMEBANK_IMPORT_LOG_LEVEL", "10")
    buf = io.StringIO()
    configure_logging(stream=buf)

    get_logger("homebank_import.homebank").debug("flushed 2 record(s)")

    assert "flushed 2 record(s)" in buf.getvalue()


def test_unknown_level_name_is_rejected():
    with pytest.raises(ValueError, match="unknown log level"):
        configure_logging("chatty", stream=io.StringIO())


def test_reset_restores_propagation():
    configure_logging(stream=io.StringIO())
    reset_logging()

    logger = logging.getLogger("homebank_import")
    assert logger.handlers == []
    assert logger.propagate is True
