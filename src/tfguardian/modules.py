"""Module usage graph between Terraform entrypoints and local modules.

The graph is built in two passes over the same tree:

1. ``modules()`` parses every ``.tf`` file and records, per directory, the
   absolute directories of the modules it references directly.
2. ``module_usage()`` discovers entrypoints, follows those references
   transitively from each entrypoint, and inverts the result.

A module source is resolved by joining it to the declaring file's directory and
canonicalizing the result. Sources that do not resolve to an existing directory
(registry addresses, URLs, typos) are skipped with a debug log or, when
``skip_unresolvable_modules`` is false, abort the build with
:class:`UnresolvableModuleError`.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from tfguardian.errors import GuardianError, UnresolvableModuleError
from tfguardian.parser import Modules, extract_modules
from tfguardian.paths import path_eval_abs
from tfguardian.walker import get_entrypoint_directories, walk_terraform_files

logger = logging.getLogger(__name__)


@dataclass
class ModuleUsageGraph:
    """Bidirectional index between entrypoints and the modules they use at any depth."""

    entrypoint_to_modules: Dict[str, Set[str]] = field(default_factory=dict)
    modules_to_entrypoints: Dict[str, Set[str]] = field(default_factory=dict)


def modules(
    root_dir: str,
    skip_unresolvable_modules: bool = True,
    cancel: Optional[threading.Event] = None,
    *,
    lenient: bool = False,
) -> Dict[str, Modules]:
    """Map every directory holding ``.tf`` files to the module directories it references."""

    matches: Dict[str, Modules] = {}
    for path in walk_terraform_files(root_dir, None, cancel):
        abs_path = path_eval_abs(path)
        directory = os.path.dirname(abs_path)
        usage = matches.setdefault(directory, Modules())

        try:
            declared, diagnostics = extract_modules(path, lenient=lenient)
        except GuardianError as exc:
            raise exc.annotate("failed to extract modules") from exc
        for diagnostic in diagnostics:
            logger.debug("module extraction diagnostic: %s", diagnostic)

        for source in sorted(declared.module_paths):
            resolved = _resolve_module_dir(directory, source)
            if resolved is None:
                if skip_unresolvable_modules:
                    logger.debug(
                        "Skipping unresolvable module %s used in %s",
                        os.path.join(directory, source),
                        abs_path,
                    )
                    continue
                raise UnresolvableModuleError(source, abs_path)
            if resolved == directory:
                continue
            usage.module_paths.add(resolved)

    return matches


def module_usage(
    root_dir: str,
    max_depth: Optional[int] = None,
    skip_unresolvable_modules: bool = True,
    cancel: Optional[threading.Event] = None,
    *,
    lenient: bool = False,
) -> ModuleUsageGraph:
    """Build the entrypoint/module closure for ``root_dir``.

    ``max_depth`` limits which entrypoints are discovered; module chains are
    followed to any depth.
    """

    try:
        entrypoints = get_entrypoint_directories(root_dir, max_depth, cancel, lenient=lenient)
    except GuardianError as exc:
        raise exc.annotate("failed to get entrypoints") from exc
    try:
        usages = modules(root_dir, skip_unresolvable_modules, cancel, lenient=lenient)
    except GuardianError as exc:
        raise exc.annotate("failed to get module usages") from exc

    entrypoint_to_modules: Dict[str, Set[str]] = {}
    for entrypoint in entrypoints:
        entrypoint_to_modules[entrypoint.path] = _reachable_modules(entrypoint.path, usages)

    modules_to_entrypoints: Dict[str, Set[str]] = {}
    for entrypoint_path, module_paths in entrypoint_to_modules.items():
        for module_path in module_paths:
            modules_to_entrypoints.setdefault(module_path, set()).add(entrypoint_path)

    return ModuleUsageGraph(
        entrypoint_to_modules=entrypoint_to_modules,
        modules_to_entrypoints=modules_to_entrypoints,
    )


def _reachable_modules(start: str, usages: Dict[str, Modules]) -> Set[str]:
    reached: Set[str] = set()
    visited: Set[str] = {start}
    stack: List[str] = [start]
    while stack:
        current = stack.pop()
        usage = usages.get(current)
        if usage is None:
            continue
        for module_path in usage.module_paths:
            if module_path in visited:
                continue
            visited.add(module_path)
            reached.add(module_path)
            stack.append(module_path)
    return reached


def _resolve_module_dir(directory: str, source: str) -> Optional[str]:
    # Sources are always joined onto the declaring directory, even when absolute.
    candidate = os.path.normpath(directory + os.sep + source)
    if not os.path.isdir(candidate):
        return None
    return os.path.realpath(candidate)
