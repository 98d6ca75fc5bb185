"""Build the template context from a loaded OpenAPI document.

Walks every (path, method) operation, builds the request and response
models, flattens them per endpoint, and merges them across the document
into TemplateData.
"""

from __future__ import annotations

from typing import Any

import structlog

from .config import Config
from .errors import (
    CycleDetected,
    MissingRequiredContent,
    ReferenceNotFound,
    UnsupportedSchemaConstruct,
)
from .flatten import flatten_template_data
from .loader import deref, get_paths, get_schemas
from .models import DataStructure, EndpointExtracted, TemplateData
from .naming import finalize
from .schema_parser import build

log = structlog.get_logger(__name__)

_HTTP_METHODS = frozenset({"get", "put", "post", "delete", "options", "head", "patch", "trace"})

# Preferred JSON media types, in order; any other "+json" type comes after
_JSON_MEDIA_TYPES = ("application/json", "text/json")

_BUILD_ERRORS = (ReferenceNotFound, CycleDetected, UnsupportedSchemaConstruct)


def json_media(content: dict[str, Any] | None) -> dict[str, Any] | None:
    """Media object of the JSON media type in a content map, or None."""
    if not content:
        return None
    # "application/json; charset=utf-8" counts as application/json
    by_type = {media_type.split(";")[0].strip().lower(): media for media_type, media in content.items()}
    for media_type in _JSON_MEDIA_TYPES:
        if media_type in by_type:
            return by_type[media_type] or {}
    for media_type, media in by_type.items():
        if media_type.endswith("+json"):
            return media or {}
    return None


def json_schema(content: dict[str, Any] | None) -> dict[str, Any] | None:
    """Schema of the JSON media type in a content map, or None."""
    media = json_media(content)
    if media is None:
        return None
    return media.get("schema")


def success_response(operation: dict[str, Any]) -> dict[str, Any] | None:
    """The 200 response, else the first 2xx one, else None."""
    responses = {str(code): resp for code, resp in (operation.get("responses") or {}).items()}
    if "200" in responses:
        return responses["200"]
    for code, response in responses.items():
        if code.startswith("2"):
            return response
    return None


def _merge_parameters(
    spec: dict[str, Any],
    shared: list[dict[str, Any]],
    own: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Path-level parameters overridden by operation ones with the same name/location."""
    merged: dict[tuple[str, str], dict[str, Any]] = {}
    for param in [*shared, *own]:
        param = deref(spec, param)
        merged[(param.get("name", ""), param.get("in", "query"))] = param
    return list(merged.values())


class _Extractor:
    """Holds the document, registry and error policies for one run."""

    def __init__(self, spec: dict[str, Any], config: Config | None) -> None:
        self.spec = spec
        self.registry = get_schemas(spec)
        self.missing_content = config.missing_content if config else "warn"
        self.partial_output = config.partial_output if config else False

    def endpoint(self, path: str, method: str, operation: dict[str, Any], shared_params: list) -> EndpointExtracted:
        log.debug("Extracting endpoint", method=method, path=path)
        endpoint = EndpointExtracted(
            path=path,
            method=method,
            description=operation.get("description"),
            summary=operation.get("summary"),
            operation_id=operation.get("operationId"),
            tags=list(operation.get("tags") or []),
            parameters=_merge_parameters(self.spec, shared_params, operation.get("parameters") or []),
        )

        request_body = operation.get("requestBody")
        if request_body:
            request_body = deref(self.spec, request_body)
            endpoint.request = self.body(path, method, "request", request_body.get("content"))

        response = success_response(operation)
        if response:
            response = deref(self.spec, response)
            endpoint.response = self.body(path, method, "response", response.get("content"))

        return endpoint

    def body(self, path: str, method: str, kind: str, content: dict[str, Any] | None) -> DataStructure | None:
        if not content:
            return None

        media = json_media(content)
        schema = None if media is None else media.get("schema")
        if schema is None:
            reason = "has no JSON content" if media is None else "has JSON content without a schema"
            if self.missing_content == "fail":
                raise MissingRequiredContent(path, method, kind, reason)
            log.warning("Skipping body with no usable schema", reason=reason, kind=kind, method=method, path=path)
            return None

        try:
            root = build(schema, self.registry)
        except _BUILD_ERRORS as exc:
            if not self.partial_output:
                raise
            log.warning("Skipping body", kind=kind, method=method, path=path, error=str(exc))
            return None

        finalize(root)
        root.is_root = True
        return root


def extract_endpoints(spec: dict[str, Any], config: Config | None = None) -> list[EndpointExtracted]:
    """One EndpointExtracted per operation, in document order."""
    extractor = _Extractor(spec, config)
    endpoints: list[EndpointExtracted] = []

    for path, path_item in get_paths(spec).items():
        path_item = deref(spec, path_item or {})
        shared_params = path_item.get("parameters") or []
        for method, operation in path_item.items():
            if method.lower() not in _HTTP_METHODS or not isinstance(operation, dict):
                continue
            endpoints.append(extractor.endpoint(path, method.lower(), operation, shared_params))

    return endpoints


def build_context(spec: dict[str, Any], config: Config | None = None) -> TemplateData:
    """Build the full template context from the OpenAPI spec."""
    log.info("Extracting models")
    data = TemplateData(endpoints=extract_endpoints(spec, config))
    ignore_names = config.dedupe_ignore_names if config else False
    flatten_template_data(data, ignore_names=ignore_names)
    log.info(
        "Models extracted",
        endpoints=len(data.endpoints),
        requests=len(data.requests),
        responses=len(data.responses),
    )
    return data
