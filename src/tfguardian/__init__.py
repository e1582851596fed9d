"""tfguardian: Terraform entrypoint discovery for pull-request driven plan/apply.

The package finds Terraform root modules ("entrypoints", directories that
declare a state backend), builds the graph of local modules they use, and maps
a git diff onto the minimal set of entrypoints that need a new plan.

Main entry points:

- :func:`tfguardian.walker.get_entrypoint_directories`
- :func:`tfguardian.modules.module_usage`
- :func:`tfguardian.changes.resolve_modified_entrypoints`
- the ``tfguardian entrypoints`` command (:mod:`tfguardian.cli`)
"""

from __future__ import annotations

from tfguardian.constants import TOOL_VERSION

__all__ = ["__version__"]

__version__ = TOOL_VERSION
