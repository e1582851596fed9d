"""HCL parsing helpers for Terraform backend and module detection.

Files are parsed with python-hcl2 and reduced to three record shapes:

- ``TerraformBlock``: a top-level ``terraform {}`` block and the backends it declares.
- ``BackendBlock``: one ``backend "<type>" {}`` block with its literal attributes.
- ``ModuleBlock``: one ``module "<name>" {}`` block with its literal attributes.

Everything else in a file is ignored. Diagnostics are plain strings describing
shapes that were skipped (for example a module block without a string ``source``);
they never abort parsing. Syntax errors raise :class:`TerraformParseError` unless
``lenient`` is set, in which case the file is treated as empty.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

import hcl2

from tfguardian.errors import GuardianError, PathNotFoundError, TerraformParseError
from tfguardian.schema import (
    BACKEND_BLOCK,
    MODULE_ATTRIBUTES,
    MODULE_BLOCK,
    REMOTE_STATE_BACKENDS,
    TERRAFORM_BLOCK,
)

logger = logging.getLogger(__name__)

Diagnostics = List[str]


@dataclass(frozen=True)
class BackendBlock:
    type: str
    attributes: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TerraformBlock:
    backends: Tuple[BackendBlock, ...] = ()


@dataclass(frozen=True)
class ModuleBlock:
    name: str
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def source(self) -> Optional[str]:
        value = self.attributes.get("source")
        return value if isinstance(value, str) else None


@dataclass(frozen=True)
class ParsedFile:
    path: str
    terraform_blocks: Tuple[TerraformBlock, ...] = ()
    module_blocks: Tuple[ModuleBlock, ...] = ()
    diagnostics: Tuple[str, ...] = ()

    def blocks_of_type(self, block_type: str) -> Tuple[Any, ...]:
        if block_type == TERRAFORM_BLOCK:
            return self.terraform_blocks
        if block_type == MODULE_BLOCK:
            return self.module_blocks
        return ()


@dataclass
class BackendConfig:
    """Decoded remote-state parameters from a backend block."""

    type: str
    bucket: Optional[str] = None
    prefix: Optional[str] = None


@dataclass
class Modules:
    """Module sources used by one file (raw) or one directory (resolved)."""

    module_paths: Set[str] = field(default_factory=set)


def parse_terraform_file(path: str, *, lenient: bool = False) -> ParsedFile:
    """Parse ``path`` and return the terraform and module blocks it declares."""

    text = _read_file(path)
    try:
        raw = hcl2.loads(text)
    except Exception as exc:
        message = " ".join(str(exc).split()) or exc.__class__.__name__
        if lenient:
            logger.warning("Skipping unparseable Terraform file %s: %s", path, message)
            return ParsedFile(path=path, diagnostics=(message,))
        raise TerraformParseError(path, [message]) from exc

    diagnostics: Diagnostics = []
    terraform_blocks = tuple(_terraform_blocks(raw.get(TERRAFORM_BLOCK), path, diagnostics))
    module_blocks = tuple(_module_blocks(raw.get(MODULE_BLOCK), path, diagnostics))
    return ParsedFile(
        path=path,
        terraform_blocks=terraform_blocks,
        module_blocks=module_blocks,
        diagnostics=tuple(diagnostics),
    )


def has_backend_config(path: str, *, lenient: bool = False) -> Tuple[bool, Diagnostics]:
    """Return whether ``path`` declares a backend block inside a terraform block."""

    parsed = parse_terraform_file(path, lenient=lenient)
    found = any(block.backends for block in parsed.blocks_of_type(TERRAFORM_BLOCK))
    return found, list(parsed.diagnostics)


def extract_backend_config(
    path: str, *, lenient: bool = False
) -> Tuple[Optional[BackendConfig], Diagnostics]:
    """Decode the first backend block in ``path``.

    Returns ``None`` when the file declares no backend. Known remote-state
    backends have their bucket and prefix decoded; other backend types return a
    config with both fields unset.
    """

    parsed = parse_terraform_file(path, lenient=lenient)
    diagnostics = list(parsed.diagnostics)
    for block in parsed.blocks_of_type(TERRAFORM_BLOCK):
        if not block.backends:
            continue
        backend = block.backends[0]
        config = BackendConfig(type=backend.type)
        names = REMOTE_STATE_BACKENDS.get(backend.type)
        if names is None:
            return config, diagnostics
        bucket_attr, prefix_attr = names
        config.bucket = _string_attribute(backend, bucket_attr, path, diagnostics)
        config.prefix = _string_attribute(backend, prefix_attr, path, diagnostics)
        return config, diagnostics
    return None, diagnostics


def extract_modules(path: str, *, lenient: bool = False) -> Tuple[Modules, Diagnostics]:
    """Return the set of raw ``source`` strings of every module block in ``path``."""

    parsed = parse_terraform_file(path, lenient=lenient)
    diagnostics = list(parsed.diagnostics)
    sources: Set[str] = set()
    for block in parsed.blocks_of_type(MODULE_BLOCK):
        source = block.source
        if source is None:
            diagnostics.append(f"{path}: module {block.name!r} has no literal source")
            continue
        sources.add(source)
    return Modules(module_paths=sources), diagnostics


def _read_file(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as handle:
            return handle.read()
    except FileNotFoundError as exc:
        raise PathNotFoundError(path, f"failed to read file: no such file or directory: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise GuardianError(f"failed to read file {path}: {exc}") from exc


def _terraform_blocks(value: Any, path: str, diagnostics: Diagnostics) -> Iterable[TerraformBlock]:
    for body in _as_block_list(value):
        backends: List[BackendBlock] = []
        nested = _labelled(body.get(BACKEND_BLOCK), path, BACKEND_BLOCK, diagnostics)
        for backend_type, backend_body in nested:
            backends.append(BackendBlock(type=backend_type, attributes=_literal_attributes(backend_body)))
        yield TerraformBlock(backends=tuple(backends))


def _module_blocks(value: Any, path: str, diagnostics: Diagnostics) -> Iterable[ModuleBlock]:
    for name, body in _labelled(value, path, MODULE_BLOCK, diagnostics):
        attributes = {
            key: attr
            for key, attr in _literal_attributes(body).items()
            if key in MODULE_ATTRIBUTES
        }
        yield ModuleBlock(name=name, attributes=attributes)


def _as_block_list(value: Any) -> List[Dict[str, Any]]:
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    return [item for item in value if isinstance(item, dict)]


def _labelled(
    value: Any, path: str, block_type: str, diagnostics: Diagnostics
) -> Iterable[Tuple[str, Dict[str, Any]]]:
    for entry in _as_block_list(value):
        labels = [key for key in entry if not _is_meta_key(key)]
        if not labels:
            diagnostics.append(f"{path}: {block_type} block without a label")
            continue
        for label in labels:
            body = entry[label]
            if isinstance(body, list):
                body = body[0] if body and isinstance(body[0], dict) else {}
            if not isinstance(body, dict):
                body = {}
            yield _unquote(label), body


def _literal_attributes(body: Dict[str, Any]) -> Dict[str, Any]:
    attributes: Dict[str, Any] = {}
    for key, value in body.items():
        if _is_meta_key(key):
            continue
        attributes[key] = _unquote(value) if isinstance(value, str) else value
    return attributes


def _string_attribute(
    backend: BackendBlock, name: str, path: str, diagnostics: Diagnostics
) -> Optional[str]:
    value = backend.attributes.get(name)
    if value is None:
        return None
    if not isinstance(value, str) or "${" in value:
        diagnostics.append(f"{path}: backend {backend.type!r} attribute {name!r} is not a literal string")
        return None
    return value


def _unquote(value: str) -> str:
    # Newer python-hcl2 releases keep the surrounding quotes on string literals.
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


def _is_meta_key(key: str) -> bool:
    return key.startswith("__") and key.endswith("__")
