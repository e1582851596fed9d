from __future__ import annotations

import io

import pytest

from tfguardian.errors import InvalidReporterError
from tfguardian.reporter import EntrypointsSummary, LocalReporter, NoopReporter, new_reporter


def _summary():
    return EntrypointsSummary(message="Guardian will run", modified_dirs=["a"], abandoned_dirs=["gone"])


def test_new_reporter_types():
    assert isinstance(new_reporter("none"), NoopReporter)
    assert isinstance(new_reporter("LOCAL"), LocalReporter)


def test_unknown_reporter_type():
    with pytest.raises(InvalidReporterError, match="supported types are: local, none"):
        new_reporter("github")


def test_local_reporter_writes_markdown():
    stream = io.StringIO()
    new_reporter("local", stream).entrypoints_summary(_summary())
    output = stream.getvalue()
    assert output.startswith("**Guardian will run**")
    assert "- a\n" in output
    assert "- gone\n" in output


def test_local_reporter_defaults_to_stderr(capsys):
    LocalReporter().entrypoints_summary(_summary())
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Guardian will run" in captured.err


def test_noop_reporter_is_silent(capsys):
    NoopReporter().entrypoints_summary(_summary())
    captured = capsys.readouterr()
    assert captured.out == "" and captured.err == ""


def test_local_reporter_includes_destroy_dirs():
    stream = io.StringIO()
    summary = EntrypointsSummary(message="Guardian will run", modified_dirs=[], destroy_dirs=["envs/tmp"])
    LocalReporter(stream).entrypoints_summary(summary)
    output = stream.getvalue()
    assert "No entrypoint directories to run." in output
    assert "**Destroy directories:**\n\n- envs/tmp\n" in output
