from __future__ import annotations

import pytest

from tfguardian.modifiers import destroy_values, parse_body_meta_values


@pytest.mark.parametrize(
    "contents, expected",
    [
        ("GUARDIAN_DESTROY=test-destroy", {"GUARDIAN_DESTROY": ["test-destroy"]}),
        (
            "GUARDIAN_DESTROY=test-destroy1\n"
            "GUARDIAN_DESTROY=test-destroy2\r\n"
            "GUARDIAN_DESTROY=test-destroy3",
            {"GUARDIAN_DESTROY": ["test-destroy1", "test-destroy2", "test-destroy3"]},
        ),
        (
            "this is a body of text\nGUARDIAN_VALUE=test-value1\nthat contains\nGUARDIAN_VALUE=test-value2\n",
            {"GUARDIAN_VALUE": ["test-value1", "test-value2"]},
        ),
        ("this is a body of text\nthat contains\nno kv pairs\n", {}),
        ("", {}),
    ],
)
def test_parse_body_meta_values(contents, expected):
    assert parse_body_meta_values(contents) == expected


@pytest.mark.parametrize(
    "line",
    [
        " GUARDIAN_DESTROY=indented",
        "guardian_destroy=lowercase",
        "OTHER_DESTROY=wrong-prefix",
        "prefix GUARDIAN_DESTROY=mid-line",
    ],
)
def test_non_modifier_lines_are_ignored(line):
    assert parse_body_meta_values(line) == {}


def test_empty_value_is_kept():
    assert parse_body_meta_values("GUARDIAN_DESTROY=") == {"GUARDIAN_DESTROY": [""]}


def test_destroy_values():
    meta = parse_body_meta_values("GUARDIAN_DESTROY=a\nGUARDIAN_OTHER=b\nGUARDIAN_DESTROY=c")
    assert destroy_values(meta) == ["a", "c"]
    assert destroy_values({}) == []
