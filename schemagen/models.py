"""Intermediate model handed from the schema parser to the templates.

DataStructure is the canonical, language-agnostic node for one schema
property or body root. Trees are built by schema_parser, flagged and named
once by naming.finalize, then only read.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

Number = Union[int, float]


class PropertyType(str, Enum):
    """Closed set of property types a DataStructure can carry."""

    STRING = "String"
    NUMBER = "Number"
    INTEGER = "Integer"
    BOOLEAN = "Boolean"
    OBJECT = "Object"
    ARRAY = "Array"

    def __str__(self) -> str:
        return self.value


SCALAR_TYPES = frozenset(
    {PropertyType.STRING, PropertyType.NUMBER, PropertyType.INTEGER, PropertyType.BOOLEAN}
)
CONTAINER_TYPES = frozenset({PropertyType.OBJECT, PropertyType.ARRAY})


@dataclass
class DataStructure:
    """One schema property, or the root of a request/response body."""

    name: str
    property_type: PropertyType
    description: str | None = None
    format: str | None = None
    required: bool = False
    properties: list[DataStructure] = field(default_factory=list)
    required_properties: list[str] = field(default_factory=list)
    pattern: str | None = None
    min: Number | None = None
    max: Number | None = None
    min_length: int | None = None
    max_length: int | None = None
    object_name: str | None = None
    is_root: bool = False

    @property
    def is_object(self) -> bool:
        return self.property_type == PropertyType.OBJECT

    @property
    def is_array(self) -> bool:
        return self.property_type == PropertyType.ARRAY

    @property
    def is_scalar(self) -> bool:
        return self.property_type in SCALAR_TYPES

    @property
    def item(self) -> DataStructure | None:
        """The element schema of an Array node."""
        if self.is_array and self.properties:
            return self.properties[0]
        return None

    def fingerprint(self, *, ignore_name: bool = False) -> tuple:
        """Hashable form of the whole subtree.

        Two nodes have equal fingerprints iff they are structurally equal.
        With ignore_name the top-level name is left out, children keep theirs.
        """
        return (
            None if ignore_name else self.name,
            self.description,
            self.property_type.value,
            self.format,
            self.required,
            tuple(child.fingerprint() for child in self.properties),
            tuple(self.required_properties),
            self.pattern,
            self.min,
            self.max,
            self.min_length,
            self.max_length,
            self.object_name,
            self.is_root,
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible form, field names unchanged."""
        return {
            "name": self.name,
            "description": self.description,
            "property_type": self.property_type.value,
            "format": self.format,
            "required": self.required,
            "properties": [child.to_dict() for child in self.properties],
            "required_properties": list(self.required_properties),
            "pattern": self.pattern,
            "min": self.min,
            "max": self.max,
            "min_length": self.min_length,
            "max_length": self.max_length,
            "object_name": self.object_name,
            "is_root": self.is_root,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DataStructure:
        return cls(
            name=data.get("name", ""),
            property_type=PropertyType(data["property_type"]),
            description=data.get("description"),
            format=data.get("format"),
            required=bool(data.get("required", False)),
            properties=[cls.from_dict(child) for child in data.get("properties", [])],
            required_properties=list(data.get("required_properties", [])),
            pattern=data.get("pattern"),
            min=data.get("min"),
            max=data.get("max"),
            min_length=data.get("min_length"),
            max_length=data.get("max_length"),
            object_name=data.get("object_name"),
            is_root=bool(data.get("is_root", False)),
        )


@dataclass
class EndpointExtracted:
    """One (path, method) operation with its request/response models."""

    path: str
    method: str
    description: str | None = None
    summary: str | None = None
    operation_id: str | None = None
    tags: list[str] = field(default_factory=list)
    parameters: list[dict[str, Any]] = field(default_factory=list)
    request: DataStructure | None = None
    response: DataStructure | None = None
    flat_request: list[DataStructure] = field(default_factory=list)
    flat_response: list[DataStructure] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "method": self.method,
            "description": self.description,
            "summary": self.summary,
            "operation_id": self.operation_id,
            "tags": list(self.tags),
            "parameters": self.parameters,
            "request": self.request.to_dict() if self.request else None,
            "response": self.response.to_dict() if self.response else None,
            "flat_request": [s.to_dict() for s in self.flat_request],
            "flat_response": [s.to_dict() for s in self.flat_response],
        }


@dataclass
class TemplateData:
    """Everything a whole-context template sees."""

    endpoints: list[EndpointExtracted] = field(default_factory=list)
    requests: list[DataStructure] = field(default_factory=list)
    responses: list[DataStructure] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "endpoints": [e.to_dict() for e in self.endpoints],
            "requests": [s.to_dict() for s in self.requests],
            "responses": [s.to_dict() for s in self.responses],
        }

    def combine_requests(self, *, ignore_names: bool = False) -> None:
        """Merge every endpoint's flat_request into requests, first seen wins."""
        extend_unique(
            self.requests,
            (s for e in self.endpoints for s in e.flat_request),
            ignore_names=ignore_names,
        )

    def combine_responses(self, *, ignore_names: bool = False) -> None:
        """Merge every endpoint's flat_response into responses, first seen wins."""
        extend_unique(
            self.responses,
            (s for e in self.endpoints for s in e.flat_response),
            ignore_names=ignore_names,
        )


def extend_unique(
    target: list[DataStructure],
    items: Iterable[DataStructure],
    *,
    ignore_names: bool = False,
) -> list[DataStructure]:
    """Append each item not structurally equal to one already in target."""
    seen = {s.fingerprint(ignore_name=ignore_names) for s in target}
    for item in items:
        key = item.fingerprint(ignore_name=ignore_names)
        if key in seen:
            continue
        seen.add(key)
        target.append(item)
    return target
