"""Required flags, array object names, and identifier case helpers.

finalize() runs once, top-down, over a fully built tree:
  - Array nodes take their item's object_name (or the item's property_type
    when it has none), so "array of Foo" maps like "Foo".
  - Every child's required flag is set from its parent's required names.

The case helpers are registered as template filters:
  snake_case("petId")     -> pet_id
  camel_case("pet_id")    -> petId
  pascal_case("pet-tag")  -> PetTag
  kebab_case("PetTag")    -> pet-tag
  constant_case("petId")  -> PET_ID
"""

from __future__ import annotations

import re

from .models import DataStructure


def finalize(node: DataStructure) -> DataStructure:
    """Set required flags and array object names in place; returns node."""
    item = node.item
    if item is not None:
        node.object_name = item.object_name or item.property_type.value
    elif node.is_array:
        node.object_name = node.property_type.value

    required = set(node.required_properties)
    for child in node.properties:
        child.required = child.name in required
        finalize(child)
    return node


def _words(name: str) -> list[str]:
    """Split an identifier into lowercase words."""
    s1 = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    s2 = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", s1)
    return [w for w in re.split(r"[^A-Za-z0-9]+", s2.lower()) if w]


def snake_case(name: str) -> str:
    """Convert camelCase, PascalCase or kebab-case to snake_case."""
    return "_".join(_words(name))


def kebab_case(name: str) -> str:
    return "-".join(_words(name))


def constant_case(name: str) -> str:
    return "_".join(_words(name)).upper()


def pascal_case(name: str) -> str:
    return "".join(w.capitalize() for w in _words(name))


def camel_case(name: str) -> str:
    words = _words(name)
    if not words:
        return ""
    return words[0] + "".join(w.capitalize() for w in words[1:])


FILTERS = {
    "snake_case": snake_case,
    "kebab_case": kebab_case,
    "constant_case": constant_case,
    "pascal_case": pascal_case,
    "camel_case": camel_case,
}
