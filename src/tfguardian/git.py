"""Git diff collaborator used to detect changed directories."""

from __future__ import annotations

import logging
import os
import subprocess
from typing import List, Optional

from tfguardian.errors import GitError

logger = logging.getLogger(__name__)


class GitClient:
    def __init__(self, *, working_dir: str) -> None:
        self.working_dir = working_dir

    def diff_dirs_abs(self, source_ref: str, dest_ref: str) -> List[str]:
        """Return the sorted absolute directories changed between two refs.

        Directories that no longer exist are kept so callers can detect removals.
        """

        out = self._git(["diff", f"{source_ref}..{dest_ref}", "--name-only"])
        logger.debug("git diff output for %s: %s", self.working_dir, out)
        return parse_sorted_diff_dirs_abs(out, base=self.toplevel())

    def toplevel(self) -> str:
        return self._git(["rev-parse", "--show-toplevel"]).strip()

    def _git(self, args: List[str]) -> str:
        try:
            proc = subprocess.run(
                ["git", *args],
                cwd=self.working_dir,
                text=True,
                capture_output=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise GitError(f"failed to run git {args[0]}: git executable not found") from exc
        if proc.returncode != 0:
            stderr = (proc.stderr or "").strip()
            raise GitError(f"failed to run git {args[0]} command (exit {proc.returncode}): {stderr}")
        return proc.stdout


def parse_sorted_diff_dirs_abs(stdout: str, *, base: Optional[str] = None) -> List[str]:
    """Split ``git diff --name-only`` output into sorted unique absolute directories."""

    root = base or os.getcwd()
    matches = set()
    for line in stdout.splitlines():
        line = line.strip()
        if not line:
            continue
        directory = os.path.dirname(line)
        matches.add(os.path.realpath(os.path.join(root, directory)))

    dirs = sorted(matches)
    logger.debug("parsed diff dirs: %s", dirs)
    return dirs
