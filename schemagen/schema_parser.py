"""Convert OpenAPI schemas into DataStructure trees.

Handles:
- String/Number/Integer/Boolean leaves with format and constraints
- Objects (declared properties, required names)
- Arrays (exactly one item schema)
- $ref resolution through the component registry, with cycle detection
- OpenAPI 3.1 nullable type lists ([T, "null"])

oneOf/anyOf/allOf/not and untyped schemas are rejected, never guessed at.
Required flags and array object names are set later by naming.finalize.
"""

from __future__ import annotations

from typing import Any

from .errors import UnsupportedSchemaConstruct
from .models import DataStructure, Number, PropertyType
from .resolver import resolve

_COMBINATORS = ("oneOf", "anyOf", "allOf", "not")

_TYPES: dict[str, PropertyType] = {
    "string": PropertyType.STRING,
    "number": PropertyType.NUMBER,
    "integer": PropertyType.INTEGER,
    "boolean": PropertyType.BOOLEAN,
    "object": PropertyType.OBJECT,
    "array": PropertyType.ARRAY,
}

# OpenAPI format keyword -> canonical format name; unknown formats pass through
_FORMATS: dict[str, str] = {
    "date": "Date",
    "date-time": "DateTime",
    "password": "Password",
    "byte": "Byte",
    "binary": "Binary",
    "float": "Float",
    "double": "Double",
    "int32": "Int32",
    "int64": "Int64",
}

INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1
FLOAT32_MAX = 3.4028234663852886e38


def translate_format(fmt: str | None) -> str | None:
    """Map an OpenAPI format keyword onto the canonical format names."""
    if fmt is None or fmt == "":
        return None
    return _FORMATS.get(fmt, fmt)


def numeric_bounds(node: DataStructure) -> tuple[Number, Number]:
    """Declared min/max of a numeric node, falling back to its format's width.

    Integer: Int64 uses int64, anything else int32.
    Number: Double uses the int64 range, anything else float32 widened.
    """
    if node.property_type == PropertyType.INTEGER:
        if node.format == "Int64":
            lo, hi = INT64_MIN, INT64_MAX
        else:
            lo, hi = INT32_MIN, INT32_MAX
    elif node.property_type == PropertyType.NUMBER:
        if node.format == "Double":
            lo, hi = INT64_MIN, INT64_MAX
        else:
            lo, hi = -FLOAT32_MAX, FLOAT32_MAX
    else:
        raise ValueError(f"{node.property_type} has no numeric bounds")
    return (
        node.min if node.min is not None else lo,
        node.max if node.max is not None else hi,
    )


def build(
    schema: dict[str, Any],
    registry: dict[str, Any],
    name: str = "",
    is_array_context: bool = False,
    visiting: tuple[str, ...] = (),
) -> DataStructure:
    """Build the DataStructure tree for schema.

    registry is the components/schemas mapping and is never modified.
    visiting is the chain of reference names currently being expanded.
    """
    if not isinstance(schema, dict):
        raise UnsupportedSchemaConstruct(name, type(schema).__name__)

    if "$ref" in schema:
        resolved = resolve(schema["$ref"], registry, visiting)
        return build(resolved.schema, registry, resolved.name, is_array_context, resolved.path)

    for key in _COMBINATORS:
        if key in schema:
            raise UnsupportedSchemaConstruct(name, key)

    property_type = _schema_type(schema, name)
    if property_type == PropertyType.OBJECT:
        return _build_object(schema, registry, name, is_array_context, visiting)
    if property_type == PropertyType.ARRAY:
        return _build_array(schema, registry, name, visiting)
    return _build_scalar(schema, name, property_type)


def _schema_type(schema: dict[str, Any], name: str) -> PropertyType:
    """Determine the property type of a non-reference schema."""
    schema_type = schema.get("type")

    if isinstance(schema_type, list):
        concrete = [t for t in schema_type if t != "null"]
        if len(concrete) != 1:
            raise UnsupportedSchemaConstruct(name, f"type {schema_type!r}")
        schema_type = concrete[0]

    if schema_type is None:
        if "properties" in schema:
            return PropertyType.OBJECT
        if "items" in schema:
            return PropertyType.ARRAY
        raise UnsupportedSchemaConstruct(name, "untyped schema")

    try:
        return _TYPES[schema_type]
    except (KeyError, TypeError):
        raise UnsupportedSchemaConstruct(name, f"type {schema_type!r}") from None


def _build_scalar(schema: dict[str, Any], name: str, property_type: PropertyType) -> DataStructure:
    fmt = None if property_type == PropertyType.BOOLEAN else translate_format(schema.get("format"))
    return DataStructure(
        name=name,
        property_type=property_type,
        description=schema.get("description"),
        format=fmt,
        pattern=schema.get("pattern"),
        min=schema.get("minimum"),
        max=schema.get("maximum"),
        min_length=schema.get("minLength"),
        max_length=schema.get("maxLength"),
    )


def _build_object(
    schema: dict[str, Any],
    registry: dict[str, Any],
    name: str,
    is_array_context: bool,
    visiting: tuple[str, ...],
) -> DataStructure:
    node = DataStructure(
        name=name,
        property_type=PropertyType.ARRAY if is_array_context else PropertyType.OBJECT,
        description=schema.get("description"),
        required_properties=list(schema.get("required") or []),
        object_name=f"{name}Object",
    )
    for prop_name, prop_schema in (schema.get("properties") or {}).items():
        child = build(prop_schema, registry, prop_name, False, visiting)
        # A $ref child is built under the component name; the wire name wins here
        child.name = prop_name
        node.properties.append(child)
    return node


def _build_array(
    schema: dict[str, Any],
    registry: dict[str, Any],
    name: str,
    visiting: tuple[str, ...],
) -> DataStructure:
    items = schema.get("items")
    if not isinstance(items, dict):
        raise UnsupportedSchemaConstruct(name, "array without items")

    item_name = "" if "$ref" in items else f"{name}Item"
    item = build(items, registry, item_name, False, visiting)
    return DataStructure(
        name=name,
        property_type=PropertyType.ARRAY,
        description=schema.get("description"),
        properties=[item],
    )
