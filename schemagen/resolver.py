"""Resolve schema references against the component registry.

Refs may chain (a component that is itself a $ref). The names expanded on
the current path are tracked; seeing one again is a cycle.
"""

from __future__ import annotations

from typing import Any, NamedTuple

from .errors import CycleDetected, ReferenceNotFound

_SCHEMA_PREFIX = "#/components/schemas/"


class Resolved(NamedTuple):
    """A concrete schema and the reference names walked to reach it."""

    name: str
    schema: dict[str, Any]
    path: tuple[str, ...]


def ref_name(ref: str) -> str:
    """'#/components/schemas/Pet' -> 'Pet'; bare names pass through."""
    if ref.startswith(_SCHEMA_PREFIX):
        return ref[len(_SCHEMA_PREFIX):]
    return ref.rsplit("/", 1)[-1]


def resolve(
    ref: str,
    registry: dict[str, Any],
    visiting: tuple[str, ...] = (),
) -> Resolved:
    """Follow ref (and any chained refs) to a concrete schema.

    visiting holds the reference names already being expanded by the caller.
    Raises ReferenceNotFound or CycleDetected.
    """
    path = tuple(visiting)
    name = ref_name(ref)
    while True:
        if name in path:
            raise CycleDetected((*path, name))
        if name not in registry:
            raise ReferenceNotFound(ref)
        path = (*path, name)
        schema = registry[name]
        if isinstance(schema, dict) and "$ref" in schema:
            ref = schema["$ref"]
            name = ref_name(ref)
            continue
        return Resolved(name, schema, path)
