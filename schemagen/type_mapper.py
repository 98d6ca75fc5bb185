"""Map DataStructure nodes to target-language type strings.

Lookup key is the node's object_name when set, else its property_type.
With a format the key's format table is used, otherwise its default.
Arrays wrap the mapped element type with config.array_layout.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .config import TYPE_PLACEHOLDER, Config
from .errors import ExtendedKeyError, MissingTypeMapping
from .models import DataStructure, PropertyType


def as_structure(value: DataStructure | Mapping[str, Any]) -> DataStructure:
    """Accept a DataStructure or its dict form (as templates may pass)."""
    if isinstance(value, DataStructure):
        return value
    if isinstance(value, Mapping):
        return DataStructure.from_dict(dict(value))
    raise TypeError(f"Expected a DataStructure, got {type(value).__name__}")


def lookup_key(node: DataStructure) -> str:
    return node.object_name if node.object_name else node.property_type.value


def map_type(node: DataStructure | Mapping[str, Any], config: Config) -> str:
    """Target type string for node. Raises MissingTypeMapping."""
    node = as_structure(node)
    key = lookup_key(node)
    mapping = config.types.get(key)

    if node.format is not None:
        formats = mapping.format if mapping is not None else None
        if not formats or node.format not in formats:
            raise MissingTypeMapping(key, node.format)
        resulting = formats[node.format]
    else:
        if mapping is None:
            raise MissingTypeMapping(key)
        resulting = mapping.default

    if node.property_type == PropertyType.ARRAY:
        return config.array_layout.replace(TYPE_PLACEHOLDER, resulting)
    return resulting


def map_json(node: DataStructure | Mapping[str, Any], config: Config) -> Any:
    """Value tree shaped like node with every leaf replaced by its mapped type."""
    node = as_structure(node)
    if node.is_object:
        return {child.name: map_json(child, config) for child in node.properties}
    if node.is_array:
        return [map_json(child, config) for child in node.properties[:1]]
    return map_type(node, config)


def extended(key: str, config: Config) -> str:
    """Value of key in config.extended. Raises ExtendedKeyError."""
    try:
        return config.extended[key]
    except KeyError:
        raise ExtendedKeyError(key) from None


def exists(key: str, config: Config) -> bool:
    return key in config.extended
