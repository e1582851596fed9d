"""Logging configuration for the tfguardian CLI.

Library modules log through ``logging.getLogger(__name__)`` and never configure
handlers themselves. The CLI calls :func:`configure_logging` once per
invocation, which attaches a single stderr handler to the package logger so
stdout stays reserved for command output.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Dict, Optional, TextIO

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_HANDLER_TAG = "_tfguardian_handler"
PACKAGE_LOGGER = "tfguardian"


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "WARNING"
    console_fmt: str = "%(levelname)s | %(name)s | %(message)s"


def parse_level(value: str) -> int:
    level = _LEVEL_MAP.get((value or "").strip().upper())
    if level is None:
        raise ValueError(
            f"invalid log level: {value} (supported levels are: {', '.join(sorted(_LEVEL_MAP))})"
        )
    return level


def configure_logging(
    cfg: LoggingConfig,
    *,
    stream: Optional[TextIO] = None,
    force: bool = False,
) -> logging.Logger:
    """Attach the stderr handler to the package logger.

    Repeated calls are no-ops unless ``force`` is set, in which case any handler
    previously installed by this function is replaced.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    ours = [handler for handler in logger.handlers if getattr(handler, _HANDLER_TAG, False)]
    if ours and not force:
        return logger
    for handler in ours:
        logger.removeHandler(handler)

    level = parse_level(cfg.level)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(cfg.console_fmt))
    setattr(handler, _HANDLER_TAG, True)

    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
