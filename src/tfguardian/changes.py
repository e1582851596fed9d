"""Translate changed directories into the entrypoints that need a new plan."""

from __future__ import annotations

import logging
import os
from typing import Iterable, List, Set

from tfguardian.errors import GuardianError
from tfguardian.modules import ModuleUsageGraph

logger = logging.getLogger(__name__)


def resolve_modified_entrypoints(changed_dirs: Iterable[str], graph: ModuleUsageGraph) -> List[str]:
    """Return the sorted entrypoints affected by ``changed_dirs``.

    A changed module selects every entrypoint that uses it at any depth; a
    changed entrypoint directory selects itself. Directories that match
    neither are ignored.
    """

    modified: Set[str] = set()
    for changed in changed_dirs:
        users = graph.modules_to_entrypoints.get(changed)
        if users:
            modified.update(users)
        if changed in graph.entrypoint_to_modules:
            modified.add(changed)

    result = sorted(modified)
    logger.debug("modified entrypoints: %s", result)
    return result


def find_removed_dirs(dirs: Iterable[str]) -> List[str]:
    """Return the directories from ``dirs`` that no longer exist on disk."""

    removed: List[str] = []
    for directory in dirs:
        try:
            os.stat(directory)
        except FileNotFoundError:
            removed.append(directory)
        except OSError as exc:
            raise GuardianError(f"failed to check if dir exists: {directory}: {exc}") from exc
    return removed
