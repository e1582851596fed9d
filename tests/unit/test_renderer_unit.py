from __future__ import annotations

import json

import pytest

from tfguardian.errors import InvalidFormatError
from tfguardian.renderer import render_directories, render_entrypoints_summary, validate_format


def test_render_text_one_directory_per_line():
    assert render_directories(["envs/dev", "envs/prod"], "text") == "envs/dev\nenvs/prod"


def test_render_json_array():
    rendered = render_directories(["envs/dev", "."], "json")
    assert json.loads(rendered) == ["envs/dev", "."]


def test_render_empty_list():
    assert render_directories([], "text") == ""
    assert render_directories([], "json") == "[]"


@pytest.mark.parametrize("value, expected", [("JSON", "json"), (" text ", "text")])
def test_validate_format_normalizes(value, expected):
    assert validate_format(value) == expected


@pytest.mark.parametrize("value", ["yaml", "", "jsonl"])
def test_invalid_format_enumerates_supported(value):
    with pytest.raises(InvalidFormatError) as excinfo:
        render_directories(["a"], value)
    assert "invalid format" in str(excinfo.value)
    assert "json, text" in str(excinfo.value)
    assert excinfo.value.exit_code == 2


def test_summary_lists_modified_and_removed():
    text = render_entrypoints_summary("Guardian will run", ["envs/dev"], ["envs/old"])
    assert text.splitlines() == [
        "**Guardian will run**",
        "",
        "- envs/dev",
        "",
        "**Removed directories (no run scheduled):**",
        "",
        "- envs/old",
    ]


def test_summary_without_directories():
    text = render_entrypoints_summary("Guardian will run", [], [])
    assert "No entrypoint directories to run." in text
    assert "Removed directories" not in text


def test_summary_lists_destroy_directories_before_removed():
    text = render_entrypoints_summary(
        "Guardian will run", ["envs/dev"], ["envs/old"], destroy_dirs=["envs/tmp"]
    )
    assert text.splitlines() == [
        "**Guardian will run**",
        "",
        "- envs/dev",
        "",
        "**Destroy directories:**",
        "",
        "- envs/tmp",
        "",
        "**Removed directories (no run scheduled):**",
        "",
        "- envs/old",
    ]
