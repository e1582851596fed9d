from __future__ import annotations

import io
import logging

import pytest

from tfguardian.logging_setup import PACKAGE_LOGGER, LoggingConfig, configure_logging, parse_level


def _our_handlers():
    logger = logging.getLogger(PACKAGE_LOGGER)
    return [handler for handler in logger.handlers if getattr(handler, "_tfguardian_handler", False)]


def test_configure_logging_writes_package_records_to_stream():
    stream = io.StringIO()
    configure_logging(LoggingConfig(level="DEBUG"), stream=stream)

    logging.getLogger("tfguardian.walker").debug("found %s", "envs/dev")

    assert "DEBUG | tfguardian.walker | found envs/dev" in stream.getvalue()


def test_configure_logging_is_idempotent():
    configure_logging(LoggingConfig(), stream=io.StringIO())
    configure_logging(LoggingConfig(), stream=io.StringIO())
    assert len(_our_handlers()) == 1


def test_force_replaces_handler_and_level():
    first = io.StringIO()
    second = io.StringIO()
    configure_logging(LoggingConfig(level="ERROR"), stream=first)
    logger = configure_logging(LoggingConfig(level="INFO"), stream=second, force=True)

    logging.getLogger("tfguardian.modules").info("rebuilt")

    assert len(_our_handlers()) == 1
    assert logger.level == logging.INFO
    assert first.getvalue() == ""
    assert "rebuilt" in second.getvalue()


def test_level_filters_records():
    stream = io.StringIO()
    configure_logging(LoggingConfig(level="WARNING"), stream=stream)
    logging.getLogger("tfguardian.parser").info("quiet")
    logging.getLogger("tfguardian.parser").warning("loud")
    assert "quiet" not in stream.getvalue()
    assert "loud" in stream.getvalue()


@pytest.mark.parametrize("value, expected", [("debug", logging.DEBUG), ("WARN", logging.WARNING)])
def test_parse_level(value, expected):
    assert parse_level(value) == expected


def test_parse_level_rejects_unknown():
    with pytest.raises(ValueError, match="invalid log level"):
        parse_level("chatty")
