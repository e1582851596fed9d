from __future__ import annotations

import os
from typing import Optional

from tfguardian.constants import (
    ENV_FAIL_UNRESOLVABLE_MODULES,
    ENV_LENIENT_PARSE,
    ENV_LOG_LEVEL,
)

_TRUTHY = {"1", "true", "yes", "on"}


def env_truthy(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _TRUTHY


def _env_override(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None


def fail_unresolvable_modules_default() -> bool:
    """Return True when unresolvable module sources should abort graph builds."""

    return env_truthy(_env_override(ENV_FAIL_UNRESOLVABLE_MODULES))


def is_lenient_parse() -> bool:
    return env_truthy(_env_override(ENV_LENIENT_PARSE))


def log_level_default() -> str:
    value = _env_override(ENV_LOG_LEVEL)
    if value is None:
        return "WARNING"
    return value.upper()
