"""Output rendering for the entrypoints command."""

from __future__ import annotations

import json
from typing import List, Sequence

from tfguardian.constants import FORMAT_JSON, FORMAT_TEXT, SUPPORTED_FORMATS
from tfguardian.errors import InvalidFormatError


def validate_format(value: str) -> str:
    """Return the normalized output format or raise :class:`InvalidFormatError`."""

    normalized = (value or "").strip().lower()
    if normalized not in SUPPORTED_FORMATS:
        raise InvalidFormatError(value, SUPPORTED_FORMATS)
    return normalized


def render_directories(dirs: Sequence[str], fmt: str) -> str:
    """Render ``dirs`` as a JSON array or as one path per line."""

    normalized = validate_format(fmt)
    if normalized == FORMAT_JSON:
        return json.dumps(list(dirs))
    if normalized == FORMAT_TEXT:
        return "\n".join(dirs)
    raise InvalidFormatError(fmt, SUPPORTED_FORMATS)


def render_entrypoints_summary(
    message: str,
    modified_dirs: Sequence[str],
    abandoned_dirs: Sequence[str],
    destroy_dirs: Sequence[str] = (),
) -> str:
    lines: List[str] = [f"**{message}**", ""]
    if not modified_dirs:
        lines.append("No entrypoint directories to run.")
    for directory in modified_dirs:
        lines.append(f"- {directory}")

    if destroy_dirs:
        lines.append("")
        lines.append("**Destroy directories:**")
        lines.append("")
        for directory in destroy_dirs:
            lines.append(f"- {directory}")

    if abandoned_dirs:
        lines.append("")
        lines.append("**Removed directories (no run scheduled):**")
        lines.append("")
        for directory in abandoned_dirs:
            lines.append(f"- {directory}")
    return "\n".join(lines)
