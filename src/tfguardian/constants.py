"""Shared constants for the tfguardian CLI."""

from __future__ import annotations

TOOL_NAME = "tfguardian"
TOOL_VERSION = "0.1.0"

TERRAFORM_FILE_EXTENSION = ".tf"

# Sentinel accepted by --max-depth meaning "no limit".
UNLIMITED_DEPTH = -1

FORMAT_JSON = "json"
FORMAT_TEXT = "text"
SUPPORTED_FORMATS = (FORMAT_JSON, FORMAT_TEXT)
DEFAULT_FORMAT = FORMAT_TEXT

REPORTER_NONE = "none"
REPORTER_LOCAL = "local"
SUPPORTED_REPORTERS = (REPORTER_LOCAL, REPORTER_NONE)

ENTRYPOINTS_SUMMARY_MESSAGE = "Guardian will run for the following directories"

ENV_DIR = "GUARDIAN_DIR"
ENV_MAX_DEPTH = "GUARDIAN_MAX_DEPTH"
ENV_FORMAT = "GUARDIAN_FORMAT"
ENV_SOURCE_REF = "GUARDIAN_SOURCE_REF"
ENV_DEST_REF = "GUARDIAN_DEST_REF"
ENV_REPORTER = "GUARDIAN_REPORTER"
ENV_FAIL_UNRESOLVABLE_MODULES = "GUARDIAN_FAIL_UNRESOLVABLE_MODULES"
ENV_LENIENT_PARSE = "GUARDIAN_LENIENT_PARSE"
ENV_LOG_LEVEL = "GUARDIAN_LOG_LEVEL"
ENV_MODIFIER_CONTENT = "GUARDIAN_MODIFIER_CONTENT"

# Modifier key in change-request text marking a directory for destruction.
META_KEY_DESTROY = "GUARDIAN_DESTROY"

EXIT_SUCCESS = 0
EXIT_INVALID_INPUT = 2
EXIT_DISCOVERY_ERROR = 3
EXIT_GIT_ERROR = 4

__all__ = [
    "TOOL_NAME",
    "TOOL_VERSION",
    "TERRAFORM_FILE_EXTENSION",
    "UNLIMITED_DEPTH",
    "FORMAT_JSON",
    "FORMAT_TEXT",
    "SUPPORTED_FORMATS",
    "DEFAULT_FORMAT",
    "REPORTER_NONE",
    "REPORTER_LOCAL",
    "SUPPORTED_REPORTERS",
    "ENTRYPOINTS_SUMMARY_MESSAGE",
    "ENV_DIR",
    "ENV_MAX_DEPTH",
    "ENV_FORMAT",
    "ENV_SOURCE_REF",
    "ENV_DEST_REF",
    "ENV_REPORTER",
    "ENV_FAIL_UNRESOLVABLE_MODULES",
    "ENV_LENIENT_PARSE",
    "ENV_LOG_LEVEL",
    "ENV_MODIFIER_CONTENT",
    "META_KEY_DESTROY",
    "EXIT_SUCCESS",
    "EXIT_INVALID_INPUT",
    "EXIT_DISCOVERY_ERROR",
    "EXIT_GIT_ERROR",
]
