"""Render templates and write generated output.

Every file under the template directory is rendered, by name prefix:
  model.*           once per object model (requests, then responses)
  model-endpoint.*  once per endpoint request/response model list
  anything else     once, with the whole TemplateData as context
Files starting with "_" are partials for {% include %} and are not rendered.
"""

from __future__ import annotations

import functools
import random
from collections.abc import Callable
from dataclasses import fields
from pathlib import Path
from typing import Any

import jinja2
import structlog

from .config import Config
from .errors import SchemaGenError, TemplateFunctionError
from .mock import expand
from .models import DataStructure, EndpointExtracted, TemplateData
from .naming import FILTERS
from .samples import SampleMode, synthesize
from .type_mapper import as_structure, exists, extended, map_json, map_type

log = structlog.get_logger(__name__)

TEMPLATE_DIR = Path("templates")

_MODEL_PREFIX = "model."
_ENDPOINT_MODEL_PREFIX = "model-endpoint."


def _checked(name: str, func: Callable[..., Any]) -> Callable[..., Any]:
    """Report bad template arguments as TemplateFunctionError."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SchemaGenError:
            raise
        except (TypeError, ValueError, KeyError) as exc:
            raise TemplateFunctionError(name, exc) from exc

    return wrapper


def template_functions(config: Config, rng: random.Random | None = None) -> dict[str, Callable[..., Any]]:
    """The named operations templates may call."""
    rng = rng or random.Random()

    def sample(structure, mode: str = SampleMode.FULL.value):
        return synthesize(as_structure(structure), mode, rng=rng)

    def sample_json(structure):
        return expand(sample(structure, SampleMode.FULL.value), rng)

    def sample_json_required(structure):
        return expand(sample(structure, SampleMode.MINIMAL.value), rng)

    functions = {
        "map_type": lambda structure: map_type(structure, config),
        "map_json": lambda structure: map_json(structure, config),
        "extended": lambda key: extended(key, config),
        "exists": lambda key: exists(key, config),
        "sample": sample,
        "sample_json": sample_json,
        "sample_json_required": sample_json_required,
    }
    return {name: _checked(name, func) for name, func in functions.items()}


def build_environment(
    template_dir: Path,
    config: Config,
    rng: random.Random | None = None,
) -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(template_dir)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters.update(FILTERS)
    env.globals.update(template_functions(config, rng))
    return env


def find_templates(template_dir: Path) -> list[str]:
    """Template names (posix, relative to template_dir), partials excluded."""
    template_dir = Path(template_dir)
    if not template_dir.is_dir():
        return []
    names = []
    for path in sorted(template_dir.rglob("*")):
        if path.is_file() and not path.name.startswith("_"):
            names.append(path.relative_to(template_dir).as_posix())
    return names


def structure_context(structure: DataStructure) -> dict[str, Any]:
    """A model's own fields as top-level template variables."""
    context = {f.name: getattr(structure, f.name) for f in fields(structure)}
    context["structure"] = structure
    return context


class Renderer:
    """Renders one template directory against one TemplateData."""

    def __init__(
        self,
        template_dir: Path,
        config: Config,
        rng: random.Random | None = None,
    ) -> None:
        self.template_dir = Path(template_dir)
        self.config = config
        self.env = build_environment(self.template_dir, config, rng)

    def render_all(self, data: TemplateData, output_dir: Path) -> dict[Path, str]:
        """Render every template; returns output path -> content."""
        output_dir = Path(output_dir)
        files: dict[Path, str] = {}
        for name in find_templates(self.template_dir):
            base = name.rsplit("/", 1)[-1]
            if base.startswith(_ENDPOINT_MODEL_PREFIX):
                log.info("Rendering endpoint model files", template=name)
                _merge(files, self._render_endpoint_models(name, data, output_dir), name)
            elif base.startswith(_MODEL_PREFIX):
                log.info("Rendering model files", template=name)
                _merge(files, self._render_models(name, data, output_dir), name)
            else:
                log.info("Rendering file", template=name)
                _store(files, output_dir / name, self._render_full(name, data), name)
        return files

    def _render_full(self, name: str, data: TemplateData) -> str:
        context = {
            "endpoints": data.endpoints,
            "requests": data.requests,
            "responses": data.responses,
            "file_name": name.rsplit("/", 1)[-1],
        }
        return self.env.get_template(name).render(**context)

    def _output_name(self, structure: DataStructure) -> str:
        return self.env.from_string(self.config.model_file_name).render(**structure_context(structure))

    def _render_models(self, name: str, data: TemplateData, output_dir: Path) -> dict[Path, str]:
        if not self.config.model_file_name:
            log.warning("model_file_name is not set in config", template=name)
            return {}

        files: dict[Path, str] = {}
        template = self.env.get_template(name)
        for structure in [*data.requests, *data.responses]:
            if not structure.is_object:
                continue
            file_name = self._output_name(structure)
            log.debug("Generated file name", file_name=file_name)
            context = structure_context(structure)
            context["file_name"] = file_name
            _store(files, output_dir / file_name, template.render(**context), name)
        return files

    def _render_endpoint_models(self, name: str, data: TemplateData, output_dir: Path) -> dict[Path, str]:
        if not self.config.model_file_name:
            log.warning("model_file_name is not set in config", template=name)
            return {}

        files: dict[Path, str] = {}
        template = self.env.get_template(name)
        for endpoint in data.endpoints:
            for models in (endpoint.flat_request, endpoint.flat_response):
                rendered = self._render_endpoint_model(template, endpoint, models)
                if rendered is not None:
                    file_name, content = rendered
                    _store(files, output_dir / file_name, content, name)
        return files

    def _render_endpoint_model(
        self,
        template: jinja2.Template,
        endpoint: EndpointExtracted,
        models: list[DataStructure],
    ) -> tuple[str, str] | None:
        root = next((m for m in models if m.is_root), None)
        if root is None:
            return None
        # arrays of scalars have no model to write
        if root.is_array and (root.item is None or not root.item.is_object):
            return None
        file_name = self._output_name(root)
        log.debug("Generated file name", file_name=file_name)
        content = template.render(file_name=file_name, models=models, endpoint=endpoint)
        return file_name, content


def _store(files: dict[Path, str], path: Path, content: str, template: str) -> None:
    """Add one rendered file; a different earlier render of the same path is replaced."""
    if path in files and files[path] != content:
        log.warning("Output file rendered more than once, keeping the last", path=str(path), template=template)
    files[path] = content


def _merge(files: dict[Path, str], rendered: dict[Path, str], template: str) -> None:
    for path, content in rendered.items():
        _store(files, path, content, template)


def write_files(files: dict[Path, str]) -> None:
    """Write rendered files, creating parent directories."""
    for path, content in files.items():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def generate(
    data: TemplateData,
    config: Config,
    output_dir: Path,
    template_dir: Path = TEMPLATE_DIR,
) -> list[Path]:
    """Render the template directory and write the results to output_dir."""
    files = Renderer(template_dir, config).render_all(data, output_dir)
    write_files(files)
    log.info("Generated files", count=len(files), output=str(output_dir))
    return sorted(files)
