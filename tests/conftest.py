"""Global pytest configuration for tfguardian tests."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
_SRC_ROOT = _REPO_ROOT / "src"

# Allow running the suite from a checkout without an editable install.
if str(_SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(_SRC_ROOT))

from tfguardian.logging_setup import PACKAGE_LOGGER  # noqa: E402

FIXTURES_DIR = _REPO_ROOT / "tests" / "fixtures" / "terraform"

_GUARDIAN_ENV = (
    "GUARDIAN_DIR",
    "GUARDIAN_MAX_DEPTH",
    "GUARDIAN_FORMAT",
    "GUARDIAN_SOURCE_REF",
    "GUARDIAN_DEST_REF",
    "GUARDIAN_REPORTER",
    "GUARDIAN_FAIL_UNRESOLVABLE_MODULES",
    "GUARDIAN_LENIENT_PARSE",
    "GUARDIAN_LOG_LEVEL",
    "GUARDIAN_MODIFIER_CONTENT",
)


@pytest.fixture(autouse=True)
def _isolated_guardian_env(monkeypatch):
    """Keep CI-provided GUARDIAN_* variables from leaking into tests."""

    for name in _GUARDIAN_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers the CLI attached during a test.

    CliRunner swaps stderr for a buffer that is closed once the invocation
    returns, so a handler left behind would write to a closed stream.
    """

    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_tfguardian_handler", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def real_tmp_path(tmp_path) -> Path:
    """``tmp_path`` with symlinks resolved, matching the paths discovery returns."""

    return Path(os.path.realpath(tmp_path))
