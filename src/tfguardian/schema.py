"""Terraform block shapes understood by the entrypoint parser."""

from __future__ import annotations

from tfguardian.constants import TERRAFORM_FILE_EXTENSION

# Top-level blocks the parser keeps; every other block type is ignored.
TERRAFORM_BLOCK = "terraform"
MODULE_BLOCK = "module"

# Nested inside a terraform block.
BACKEND_BLOCK = "backend"

MODULE_ATTRIBUTES = ("source", "version", "providers")

# Backend type -> (bucket attribute, prefix attribute) decoded by extract_backend_config.
REMOTE_STATE_BACKENDS = {
    "gcs": ("bucket", "prefix"),
    "s3": ("bucket", "key"),
}

__all__ = [
    "TERRAFORM_BLOCK",
    "MODULE_BLOCK",
    "BACKEND_BLOCK",
    "MODULE_ATTRIBUTES",
    "REMOTE_STATE_BACKENDS",
    "TERRAFORM_FILE_EXTENSION",
]
