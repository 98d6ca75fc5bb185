"""Synthesize sample JSON values from a DataStructure.

Leaves become sentinel tokens that mock.expand() turns into concrete values:

    String  Date -> "@Date"      DateTime -> "@DateTime"
            Byte -> "byte data"  Binary   -> "binary data"
            anything else        -> "@Sentence"
    Boolean                      -> "@Bool"
    Integer                      -> "@Number|{min}~{max}"
    Number                       -> "@Float|{min}~{max}"

Bounds are the node's declared min/max, else the width of its format.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Any

from .models import DataStructure, Number, PropertyType
from .schema_parser import numeric_bounds

_STRING_TOKENS: dict[str, str] = {
    "Date": "@Date",
    "DateTime": "@DateTime",
    "Byte": "byte data",
    "Binary": "binary data",
}
SENTENCE = "@Sentence"
BOOL = "@Bool"


class SampleMode(str, Enum):
    """Full keeps optional fields at random; Minimal keeps only required ones."""

    FULL = "full"
    MINIMAL = "minimal"

    @classmethod
    def _missing_(cls, value):
        # "Full" and "FULL" name the same mode
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return None


def synthesize(
    root: DataStructure,
    mode: SampleMode | str = SampleMode.FULL,
    probability: float = 0.5,
    rng: random.Random | None = None,
) -> Any:
    """Sentinel value tree for root.

    Required fields are always present. In full mode each optional field is
    included independently with the given probability.
    """
    mode = SampleMode(mode)
    if not 0.0 <= probability <= 1.0:
        raise ValueError("probability must be between 0 and 1")
    return _value(root, mode, probability, rng or random.Random())


def _value(node: DataStructure, mode: SampleMode, probability: float, rng: random.Random) -> Any:
    if node.is_object:
        out: dict[str, Any] = {}
        for child in node.properties:
            if _include(child, mode, probability, rng):
                out[child.name] = _value(child, mode, probability, rng)
        return out
    if node.is_array:
        return [_value(item, mode, probability, rng) for item in node.properties[:1]]
    return leaf_token(node)


def _include(child: DataStructure, mode: SampleMode, probability: float, rng: random.Random) -> bool:
    if child.required:
        return True
    if mode == SampleMode.MINIMAL:
        return False
    return rng.random() < probability


def leaf_token(node: DataStructure) -> str:
    """Sentinel token for a scalar node."""
    if node.property_type == PropertyType.STRING:
        return _STRING_TOKENS.get(node.format or "", SENTENCE)
    if node.property_type == PropertyType.BOOLEAN:
        return BOOL
    if node.property_type == PropertyType.INTEGER:
        lo, hi = numeric_bounds(node)
        return f"@Number|{format_bound(lo)}~{format_bound(hi)}"
    if node.property_type == PropertyType.NUMBER:
        lo, hi = numeric_bounds(node)
        return f"@Float|{format_bound(lo)}~{format_bound(hi)}"
    raise ValueError(f"{node.property_type} is not a scalar type")


def format_bound(value: Number) -> str:
    """Plain decimal text for a bound (no exponent, integral floats kept short)."""
    if isinstance(value, bool):
        value = int(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
