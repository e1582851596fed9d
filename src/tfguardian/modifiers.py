"""Meta modifiers embedded in change-request text.

A modifier is a line of the form ``GUARDIAN_<NAME>=<value>``. Lines that do not
match are ignored and a key may repeat, so values are collected per key in the
order they appear. ``GUARDIAN_DESTROY=<dir>`` marks an entrypoint directory
(relative to the working directory) for destruction.
"""

from __future__ import annotations

import re
from typing import Dict, List

from tfguardian.constants import META_KEY_DESTROY

MetaValues = Dict[str, List[str]]

_NEWLINE = re.compile(r"\r?\n")
_META_VALUE_KV = re.compile(r"^(GUARDIAN_[A-Z0-9_]+)=(.*)$")


def parse_body_meta_values(contents: str) -> MetaValues:
    """Return every ``GUARDIAN_*`` key found in ``contents`` with its values."""

    meta_values: MetaValues = {}
    for line in _NEWLINE.split(contents or ""):
        match = _META_VALUE_KV.match(line)
        if match is None:
            continue
        meta_values.setdefault(match.group(1), []).append(match.group(2))
    return meta_values


def destroy_values(meta_values: MetaValues) -> List[str]:
    return list(meta_values.get(META_KEY_DESTROY, []))


__all__ = ["MetaValues", "parse_body_meta_values", "destroy_values"]
