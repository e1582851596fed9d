"""Directory walking and Terraform entrypoint discovery."""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from tfguardian.constants import TERRAFORM_FILE_EXTENSION, UNLIMITED_DEPTH
from tfguardian.errors import GuardianError, PathNotFoundError, WalkCancelledError
from tfguardian.parser import has_backend_config
from tfguardian.paths import path_eval_abs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TerraformEntrypoint:
    """A directory holding a root Terraform configuration."""

    path: str
    backend_file: str


def normalize_max_depth(max_depth: Optional[int]) -> Optional[int]:
    if max_depth is None or max_depth == UNLIMITED_DEPTH:
        return None
    if max_depth < 0:
        raise GuardianError(f"invalid max depth: {max_depth}")
    return max_depth


def walk_terraform_files(
    root_dir: str,
    max_depth: Optional[int] = None,
    cancel: Optional[threading.Event] = None,
) -> Iterator[str]:
    """Yield every ``.tf`` file under ``root_dir`` in sorted order.

    Directories deeper than ``max_depth`` levels below ``root_dir`` are not
    descended into; ``0`` restricts the walk to files directly in ``root_dir``.
    Directory symlinks are not followed.
    """

    depth_limit = normalize_max_depth(max_depth)
    if not os.path.exists(root_dir):
        raise PathNotFoundError(root_dir, f"failed to walk directory: no such file or directory: {root_dir}")
    if not os.path.isdir(root_dir):
        raise GuardianError(f"failed to walk directory: not a directory: {root_dir}")

    root = os.path.normpath(root_dir)

    def _on_error(exc: OSError) -> None:
        if isinstance(exc, FileNotFoundError):
            raise PathNotFoundError(exc.filename or root, f"failed to walk directory: {exc}") from exc
        raise GuardianError(f"failed to walk directory {exc.filename or root}: {exc}") from exc

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        dirnames.sort()
        if depth_limit is not None and _depth(root, dirpath) + 1 > depth_limit:
            dirnames[:] = []

        for name in sorted(filenames):
            if os.path.splitext(name)[1] != TERRAFORM_FILE_EXTENSION:
                continue
            if cancel is not None and cancel.is_set():
                raise WalkCancelledError(f"walk of {root_dir} cancelled")
            yield os.path.join(dirpath, name)


def get_entrypoint_directories(
    root_dir: str,
    max_depth: Optional[int] = None,
    cancel: Optional[threading.Event] = None,
    *,
    lenient: bool = False,
) -> List[TerraformEntrypoint]:
    """Return the directories under ``root_dir`` that declare a Terraform backend.

    Results are keyed by directory and sorted by path. When several files in the
    same directory declare a backend, the lexicographically first file is kept
    as ``backend_file``.
    """

    matches: Dict[str, TerraformEntrypoint] = {}
    try:
        for path in walk_terraform_files(root_dir, max_depth, cancel):
            found, diagnostics = has_backend_config(path, lenient=lenient)
            for diagnostic in diagnostics:
                logger.debug("backend detection diagnostic: %s", diagnostic)
            if found:
                _record(matches, path_eval_abs(path))
    except GuardianError as exc:
        raise exc.annotate("failed to find terraform backend config") from exc

    entrypoints = sorted(matches.values(), key=lambda entrypoint: entrypoint.path)
    logger.debug("terraform entrypoint directories: %s", [e.path for e in entrypoints])
    return entrypoints


def _record(matches: Dict[str, TerraformEntrypoint], abs_path: str) -> None:
    directory = os.path.dirname(abs_path)
    if directory in matches:
        logger.debug(
            "Ignoring additional backend file %s; %s already recorded for %s",
            abs_path,
            matches[directory].backend_file,
            directory,
        )
        return
    matches[directory] = TerraformEntrypoint(path=directory, backend_file=abs_path)


def _depth(root: str, dirpath: str) -> int:
    relative = os.path.relpath(dirpath, root)
    if relative == os.curdir:
        return 0
    return relative.count(os.sep) + 1
