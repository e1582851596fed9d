"""Orchestration for the ``entrypoints`` command.

Two modes are supported:

- all entrypoints: every directory under the target directories that declares
  a Terraform backend;
- detect changes: only the entrypoints affected by a git diff between two refs,
  either because their own directory changed or because a module they use (at
  any depth) changed.

Output directories are rendered relative to the working directory. After the
output is produced, an :class:`EntrypointsSummary` is handed to the reporter;
in detect-changes mode it also lists changed directories that were removed.

Change-request text passed as ``modifier_content`` may carry
``GUARDIAN_DESTROY=<dir>`` lines; matching directories move from the output
to the summary's destroy list.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from tfguardian.changes import find_removed_dirs, resolve_modified_entrypoints
from tfguardian.constants import (
    DEFAULT_FORMAT,
    ENTRYPOINTS_SUMMARY_MESSAGE,
    EXIT_INVALID_INPUT,
)
from tfguardian.errors import GuardianError, NotAChildPathError
from tfguardian.git import GitClient
from tfguardian.modifiers import MetaValues, destroy_values, parse_body_meta_values
from tfguardian.modules import module_usage
from tfguardian.paths import child_path, path_eval_abs
from tfguardian.renderer import render_directories, validate_format
from tfguardian.reporter import EntrypointsSummary, NoopReporter, Reporter
from tfguardian.walker import get_entrypoint_directories, normalize_max_depth

logger = logging.getLogger(__name__)

GitFactory = Callable[[str], GitClient]


@dataclass
class EntrypointsOptions:
    directories: List[str] = field(default_factory=list)
    max_depth: Optional[int] = None
    detect_changes: bool = False
    source_ref: str = ""
    dest_ref: str = ""
    fail_unresolvable_modules: bool = False
    lenient_parse: bool = False
    output_format: str = DEFAULT_FORMAT
    modifier_content: str = ""

    def validate(self) -> None:
        if self.detect_changes and (not self.source_ref or not self.dest_ref):
            raise GuardianError(
                "invalid flag: source-ref and dest-ref are required to detect changes, "
                "to ignore changes unset the detect-changes flag",
                EXIT_INVALID_INPUT,
            )
        try:
            normalize_max_depth(self.max_depth)
        except GuardianError as exc:
            raise GuardianError(str(exc), EXIT_INVALID_INPUT) from exc
        validate_format(self.output_format)


@dataclass
class EntrypointsResult:
    entrypoints: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)


def _default_git_factory(directory: str) -> GitClient:
    return GitClient(working_dir=directory)


def find_entrypoint_dirs(
    directory: str,
    options: EntrypointsOptions,
    *,
    git_factory: GitFactory = _default_git_factory,
    cancel: Optional[threading.Event] = None,
) -> Tuple[List[str], List[str]]:
    """Return ``(entrypoint_dirs, removed_dirs)`` for one absolute directory."""

    logger.debug("finding entrypoint directories in %s", directory)
    try:
        entrypoints = get_entrypoint_directories(
            directory, options.max_depth, cancel, lenient=options.lenient_parse
        )
    except GuardianError as exc:
        raise exc.annotate("failed to find terraform directories") from exc
    entrypoint_dirs = [entrypoint.path for entrypoint in entrypoints]
    logger.debug("terraform entrypoint directories: %s", entrypoint_dirs)

    if not options.detect_changes:
        return entrypoint_dirs, []

    try:
        diff_dirs = git_factory(directory).diff_dirs_abs(options.source_ref, options.dest_ref)
    except GuardianError as exc:
        raise exc.annotate("failed to find git diff directories") from exc
    logger.debug("git diff directories: %s", diff_dirs)

    removed_dirs = find_removed_dirs(diff_dirs)
    logger.debug("removed directories: %s", removed_dirs)

    try:
        graph = module_usage(
            directory,
            options.max_depth,
            not options.fail_unresolvable_modules,
            cancel,
            lenient=options.lenient_parse,
        )
    except GuardianError as exc:
        raise exc.annotate(f"failed to get module usage for {directory}") from exc

    return resolve_modified_entrypoints(diff_dirs, graph), removed_dirs


def collect_entrypoints(
    options: EntrypointsOptions,
    *,
    cwd: Optional[str] = None,
    git_factory: GitFactory = _default_git_factory,
    cancel: Optional[threading.Event] = None,
) -> EntrypointsResult:
    """Run discovery for every target directory and merge the results."""

    base = cwd or os.getcwd()
    targets = options.directories or [base]
    entrypoints = set()
    removed = set()
    for target in targets:
        candidate = target if os.path.isabs(target) else os.path.join(base, target)
        try:
            directory = path_eval_abs(candidate)
        except GuardianError as exc:
            raise exc.annotate("failed to get absolute path for directory") from exc
        found, gone = find_entrypoint_dirs(directory, options, git_factory=git_factory, cancel=cancel)
        entrypoints.update(found)
        removed.update(gone)

    return EntrypointsResult(entrypoints=sorted(entrypoints), removed=sorted(removed))


def relative_dirs(base: str, dirs: Sequence[str]) -> List[str]:
    """Convert absolute directories to child paths of ``base``."""

    results: List[str] = []
    for directory in dirs:
        try:
            results.append(child_path(base, directory))
        except GuardianError as exc:
            raise exc.annotate(f"failed to get child path for [{directory}]") from exc
    return results


def process_destroy_meta_values(base: str, dirs: Sequence[str], meta_values: MetaValues) -> List[str]:
    """Return the directories from ``dirs`` that a ``GUARDIAN_DESTROY`` modifier names.

    Modifier values are relative to ``base``; values that match none of ``dirs``
    are dropped.
    """

    requested = {os.path.normpath(os.path.join(base, value.strip())) for value in destroy_values(meta_values)}
    return sorted(directory for directory in set(dirs) if directory in requested)


def _reported_dirs(base: str, dirs: Sequence[str]) -> List[str]:
    # Removed directories may sit outside the working directory; report them as-is then.
    reported = []
    for directory in dirs:
        try:
            reported.append(child_path(base, directory))
        except NotAChildPathError:
            reported.append(directory)
    return reported


def run_entrypoints(
    options: EntrypointsOptions,
    *,
    write: Callable[[str], None],
    cwd: Optional[str] = None,
    git_factory: GitFactory = _default_git_factory,
    reporter: Optional[Reporter] = None,
    cancel: Optional[threading.Event] = None,
) -> List[str]:
    """Validate ``options``, write the selected directories and report a summary.

    Directories named by a ``GUARDIAN_DESTROY`` modifier are left out of the
    written output and the abandoned list, and reported as destroy directories
    instead. Returns the directories as written, relative to the working
    directory.
    """

    options.validate()
    base = path_eval_abs(cwd or os.getcwd())
    result = collect_entrypoints(options, cwd=base, git_factory=git_factory, cancel=cancel)
    logger.debug(
        "calculated entrypoints %s and removed dirs %s",
        result.entrypoints,
        result.removed,
    )

    meta_values = parse_body_meta_values(options.modifier_content)
    logger.debug("parsed body meta values: %s", meta_values)
    destroy = process_destroy_meta_values(base, result.entrypoints + result.removed, meta_values)
    logger.debug("found destroy dirs from meta values: %s", destroy)

    modified_abs = [directory for directory in result.entrypoints if directory not in destroy]
    abandoned_abs = [directory for directory in result.removed if directory not in destroy]
    logger.debug("found abandoned dirs: %s", abandoned_abs)

    modified = relative_dirs(base, modified_abs)
    write(render_directories(modified, options.output_format))

    (reporter or NoopReporter()).entrypoints_summary(
        EntrypointsSummary(
            message=ENTRYPOINTS_SUMMARY_MESSAGE,
            modified_dirs=modified,
            destroy_dirs=_reported_dirs(base, destroy),
            abandoned_dirs=_reported_dirs(base, abandoned_abs),
        )
    )
    return modified
