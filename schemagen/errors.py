"""Error types raised by the generation pipeline.

Every failure is structural (bad document, bad config, unsupported schema)
so nothing here is retried. Callers catch SchemaGenError at the edge.
"""

from __future__ import annotations


class SchemaGenError(Exception):
    """Base class for all schemagen errors."""


class DocumentError(SchemaGenError):
    """The API document could not be read or is not a usable OpenAPI document."""


class ReferenceNotFound(SchemaGenError):
    """A $ref points at a schema missing from the component registry."""

    def __init__(self, ref: str) -> None:
        super().__init__(f"Reference {ref!r} not found in component schemas")
        self.ref = ref


class CycleDetected(SchemaGenError):
    """A reference reappears while it is still being expanded."""

    def __init__(self, path: tuple[str, ...]) -> None:
        super().__init__("Reference cycle detected: " + " -> ".join(path))
        self.path = path


class UnsupportedSchemaConstruct(SchemaGenError):
    """Combinator forms (oneOf/anyOf/allOf/not) or shapes with no model mapping."""

    def __init__(self, name: str, construct: str) -> None:
        label = name or "<root>"
        super().__init__(f"Unsupported schema construct {construct!r} at {label!r}")
        self.name = name
        self.construct = construct


class MissingTypeMapping(SchemaGenError):
    """No entry in config.types for a lookup key (and format)."""

    def __init__(self, key: str, format: str | None = None) -> None:
        if format is None:
            msg = f"No type mapping for {key!r}"
        else:
            msg = f"No type mapping for {key!r} with format {format!r}"
        super().__init__(msg)
        self.key = key
        self.format = format


class ExtendedKeyError(SchemaGenError):
    """Lookup of an unknown key in config.extended."""

    def __init__(self, key: str) -> None:
        super().__init__(f"No extended value for {key!r}")
        self.key = key


class ConfigValidation(SchemaGenError, ValueError):
    """The configuration is malformed."""


class ConfigNotFound(SchemaGenError):
    """No configuration file was given or discovered."""


class MissingRequiredContent(SchemaGenError):
    """A request or response has no JSON media type, or no schema under it."""

    def __init__(self, path: str, method: str, kind: str, reason: str = "has no JSON content") -> None:
        super().__init__(f"{method.upper()} {path}: {kind} {reason}")
        self.path = path
        self.method = method
        self.kind = kind
        self.reason = reason


class TemplateFunctionError(SchemaGenError):
    """A template called one of the generator functions with a bad argument."""

    def __init__(self, function: str, error: Exception) -> None:
        super().__init__(f"{function}(): {error}")
        self.function = function
