"""Extract every object/array model from a tree, and merge across endpoints.

Both operations keep first-seen order and drop exact structural duplicates.
Dedup is keyed by DataStructure.fingerprint(), so it stays linear in size.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import DataStructure, TemplateData, extend_unique


def flatten(root: DataStructure) -> list[DataStructure]:
    """Pre-order list of the distinct Object/Array nodes under root.

    root comes first when it is itself an Object or Array. Scalar leaves are
    never listed on their own.
    """
    out: list[DataStructure] = []
    seen: set[tuple] = set()
    _collect(root, out, seen)
    return out


def _collect(node: DataStructure, out: list[DataStructure], seen: set[tuple]) -> None:
    if node.is_scalar:
        return
    key = node.fingerprint()
    if key in seen:
        # an equal subtree was already walked
        return
    seen.add(key)
    out.append(node)
    for child in node.properties:
        _collect(child, out, seen)


def combine(
    lists: Iterable[Iterable[DataStructure]],
    *,
    ignore_names: bool = False,
) -> list[DataStructure]:
    """Concatenate lists in order, keeping only structurally novel entries."""
    merged: list[DataStructure] = []
    for structures in lists:
        extend_unique(merged, structures, ignore_names=ignore_names)
    return merged


def flatten_template_data(data: TemplateData, *, ignore_names: bool = False) -> TemplateData:
    """Fill every endpoint's flat lists, then the global requests/responses."""
    for endpoint in data.endpoints:
        endpoint.flat_request = flatten(endpoint.request) if endpoint.request else []
        endpoint.flat_response = flatten(endpoint.response) if endpoint.response else []
    data.combine_requests(ignore_names=ignore_names)
    data.combine_responses(ignore_names=ignore_names)
    return data
