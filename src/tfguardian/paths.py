"""Filesystem path helpers shared by the walker, grapher and CLI output."""

from __future__ import annotations

import os
from pathlib import Path

from tfguardian.errors import NotAChildPathError, PathNotFoundError


def path_eval_abs(path: str) -> str:
    """Return the absolute path of ``path`` after evaluating symlinks.

    Raises :class:`PathNotFoundError` when the path (or a symlink target) does not exist.
    """

    if not os.path.exists(path):
        raise PathNotFoundError(path)
    return os.path.realpath(os.path.abspath(path))


def child_path(base: str, target: str) -> str:
    """Return ``target`` relative to ``base``.

    ``base`` itself is rendered as ``"."``. A target outside ``base`` raises
    :class:`NotAChildPathError`.
    """

    abs_base = Path(os.path.abspath(base))
    abs_target = Path(os.path.abspath(target))
    try:
        relative = abs_target.relative_to(abs_base)
    except ValueError as exc:
        raise NotAChildPathError(str(abs_target), str(abs_base)) from exc
    text = relative.as_posix()
    return text or "."
