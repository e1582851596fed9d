"""Reporters receive the entrypoints summary after the command writes its output."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, TextIO

from tfguardian.constants import REPORTER_LOCAL, REPORTER_NONE, SUPPORTED_REPORTERS
from tfguardian.errors import InvalidReporterError
from tfguardian.renderer import render_entrypoints_summary


@dataclass
class EntrypointsSummary:
    message: str
    modified_dirs: List[str] = field(default_factory=list)
    destroy_dirs: List[str] = field(default_factory=list)
    abandoned_dirs: List[str] = field(default_factory=list)


class Reporter(Protocol):
    def entrypoints_summary(self, summary: EntrypointsSummary) -> None: ...


class NoopReporter:
    """Discards every report."""

    def entrypoints_summary(self, summary: EntrypointsSummary) -> None:
        return


class LocalReporter:
    """Writes a markdown summary to a text stream (stderr by default)."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream

    def entrypoints_summary(self, summary: EntrypointsSummary) -> None:
        stream = self.stream or sys.stderr
        text = render_entrypoints_summary(
            summary.message,
            summary.modified_dirs,
            summary.abandoned_dirs,
            destroy_dirs=summary.destroy_dirs,
        )
        stream.write(f"{text}\n")
        stream.flush()


def new_reporter(kind: str, stream: Optional[TextIO] = None) -> Reporter:
    normalized = (kind or "").strip().lower()
    if normalized == REPORTER_LOCAL:
        return LocalReporter(stream)
    if normalized == REPORTER_NONE:
        return NoopReporter()
    raise InvalidReporterError(kind, SUPPORTED_REPORTERS)
