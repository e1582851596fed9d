"""Error taxonomy for entrypoint discovery and the CLI boundary."""

from __future__ import annotations

from typing import Sequence

from tfguardian.constants import (
    EXIT_DISCOVERY_ERROR,
    EXIT_GIT_ERROR,
    EXIT_INVALID_INPUT,
)


class GuardianError(RuntimeError):
    """Base error carrying the process exit code used at the CLI boundary."""

    exit_code = EXIT_DISCOVERY_ERROR

    def __init__(self, message: str, exit_code: int | None = None) -> None:
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code

    def annotate(self, prefix: str) -> "GuardianError":
        """Return a copy of this error whose message is prefixed with ``prefix``."""

        cls = self.__class__
        # OSError subclasses must be allocated by OSError, whose instance layout differs.
        allocate = OSError.__new__ if issubclass(cls, OSError) else cls.__new__
        clone = allocate(cls)
        clone.__dict__.update(self.__dict__)
        clone.args = (f"{prefix}: {self}",)
        return clone


class PathNotFoundError(GuardianError, FileNotFoundError):
    """Raised when a root directory or file does not exist at walk time."""

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"no such file or directory: {path}")


class TerraformParseError(GuardianError):
    """Raised when a Terraform file is not valid HCL."""

    def __init__(self, path: str, diagnostics: Sequence[str] = ()) -> None:
        self.path = path
        self.diagnostics = list(diagnostics)
        detail = "; ".join(self.diagnostics) or "invalid HCL"
        super().__init__(f"failed to parse {path}: {detail}")


class UnresolvableModuleError(GuardianError):
    """Raised in strict mode when a local module source does not resolve."""

    def __init__(self, source: str, declared_in: str) -> None:
        self.source = source
        self.declared_in = declared_in
        super().__init__(
            f"failed to resolve module source {source!r} declared in {declared_in}"
        )


class NotAChildPathError(GuardianError, ValueError):
    """Raised when an output directory lies outside the base directory."""

    def __init__(self, target: str, base: str) -> None:
        self.target = target
        self.base = base
        super().__init__(f"{target} is not a child of {base}")


class InvalidFormatError(GuardianError, ValueError):
    exit_code = EXIT_INVALID_INPUT

    def __init__(self, value: str, supported: Sequence[str]) -> None:
        self.value = value
        self.supported = tuple(supported)
        super().__init__(
            f"invalid format: {value} (supported formats are: {', '.join(self.supported)})"
        )


class InvalidReporterError(GuardianError, ValueError):
    exit_code = EXIT_INVALID_INPUT

    def __init__(self, value: str, supported: Sequence[str]) -> None:
        self.value = value
        self.supported = tuple(supported)
        super().__init__(
            f"unknown reporter type: {value} (supported types are: {', '.join(self.supported)})"
        )


class WalkCancelledError(GuardianError):
    """Raised when a caller-supplied cancellation event fires mid-walk."""


class GitError(GuardianError):
    exit_code = EXIT_GIT_ERROR


__all__ = [
    "GuardianError",
    "PathNotFoundError",
    "TerraformParseError",
    "UnresolvableModuleError",
    "NotAChildPathError",
    "InvalidFormatError",
    "InvalidReporterError",
    "WalkCancelledError",
    "GitError",
]
