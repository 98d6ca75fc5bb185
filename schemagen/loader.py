"""Load the OpenAPI document handed to the generator.

Accepts a single file or a directory of YAML files. A file gets merged with
a sibling shared_models.yml / shared_models.yaml when one exists.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
import yaml

from .errors import DocumentError

log = structlog.get_logger(__name__)


class _DocumentLoader(yaml.SafeLoader):
    """SafeLoader that keeps dates and timestamps as the text written."""


# unquoted dates such as 2024-01-01 stay strings
_DocumentLoader.add_constructor("tag:yaml.org,2002:timestamp", _DocumentLoader.construct_yaml_str)

_SHARED_MODEL_FILES = ("shared_models.yml", "shared_models.yaml")
_YAML_SUFFIXES = (".yml", ".yaml")


def load_spec(path: Path) -> dict[str, Any]:
    """Load and merge the API document(s) at path."""
    path = Path(path)
    if not path.exists():
        raise DocumentError(f"OpenAPI file(s) not found: {path}")

    if path.is_dir():
        files = find_files(path)
        if not files:
            raise DocumentError(f"No YAML files found in {path}")
        log.info("Merging OpenAPI documents", count=len(files))
        spec = merge_documents(_read(f) for f in files)
    else:
        spec = _read(path)
        for shared_name in _SHARED_MODEL_FILES:
            shared = path.parent / shared_name
            if shared.is_file() and shared != path:
                log.info("Merging with shared models document", file=shared_name)
                spec = merge_documents([spec, _read(shared)])
                break

    log.info("Parsing OpenAPI document")
    _check(spec)
    return spec


def find_files(directory: Path) -> list[Path]:
    """All YAML files below directory, sorted for a stable merge order."""
    files = sorted(p for p in Path(directory).rglob("*") if p.is_file() and p.suffix in _YAML_SUFFIXES)
    for f in files:
        log.debug("Found file", path=str(f))
    return files


def merge_documents(documents) -> dict[str, Any]:
    """Deep-merge documents left to right; later scalars and lists win."""
    merged: dict[str, Any] = {}
    for doc in documents:
        log.debug("Merging document", keys=sorted(doc))
        _merge_into(merged, doc)
    return merged


def _merge_into(target: dict[str, Any], source: dict[str, Any]) -> None:
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _merge_into(target[key], value)
        else:
            target[key] = value


def _read(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            doc = yaml.load(f, Loader=_DocumentLoader)
    except yaml.YAMLError as exc:
        raise DocumentError(f"{path}: {exc}") from exc
    if doc is None:
        return {}
    if not isinstance(doc, dict):
        raise DocumentError(f"{path}: top level must be a mapping")
    return doc


def _check(spec: dict[str, Any]) -> None:
    if not isinstance(spec.get("paths"), dict):
        raise DocumentError("OpenAPI file not valid: missing 'paths'")
    components = spec.get("components", {})
    if components is not None and not isinstance(components, dict):
        raise DocumentError("OpenAPI file not valid: 'components' must be a mapping")


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the document."""
    return spec.get("paths") or {}


def get_schemas(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract component schemas from the document."""
    return (spec.get("components") or {}).get("schemas") or {}


def resolve_ref(spec: dict[str, Any], ref: str) -> dict[str, Any]:
    """Resolve a local $ref pointer (parameters, request bodies, responses)."""
    if not ref.startswith("#/"):
        raise DocumentError(f"Only local references are supported: {ref!r}")
    node: Any = spec
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(node, dict) or part not in node:
            raise DocumentError(f"Reference {ref!r} does not resolve")
        node = node[part]
    return node


def deref(spec: dict[str, Any], node: dict[str, Any]) -> dict[str, Any]:
    """Follow $ref on a non-schema object until a concrete mapping remains."""
    seen: list[str] = []
    while isinstance(node, dict) and "$ref" in node:
        ref = node["$ref"]
        if ref in seen:
            raise DocumentError("Reference cycle: " + " -> ".join([*seen, ref]))
        seen.append(ref)
        node = resolve_ref(spec, ref)
    return node
