"""CLI entry point for schemagen."""

from __future__ import annotations

import json
from pathlib import Path

import click
import jinja2
import structlog

from . import codegen
from .config import Config, load_config
from .context_builder import build_context
from .errors import ConfigNotFound, SchemaGenError
from .loader import load_spec
from .log import setup_logging
from .scaffold import init as init_scaffold

log = structlog.get_logger(__name__)

_api_option = click.option(
    "-a", "--api", required=True,
    type=click.Path(exists=True, path_type=Path),
    help="OpenAPI file to generate from, or a folder of YAML files.",
)
_config_option = click.option(
    "-c", "--config", "config_path", default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: config.json/.yml/.yaml in the working directory).",
)
_verbose_option = click.option("-v", "--verbose", is_flag=True, help="Show debug output.")
_quiet_option = click.option("-q", "--quiet", is_flag=True, help="Only show warnings and errors.")


def _setup(quiet: bool, verbose: bool) -> None:
    if quiet and verbose:
        raise click.UsageError("Cannot be quiet and verbose at the same time")
    setup_logging(quiet=quiet, verbose=verbose)


def _fail(exc: Exception, verbose: bool) -> click.ClickException:
    if verbose:
        log.exception("Generation failed")
    return click.ClickException(str(exc))


@click.group()
def main():
    """Generate code from OpenAPI documents with Jinja2 templates."""
    pass


@main.command()
@_api_option
@click.option(
    "-o", "--output", required=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory for generated files.",
)
@_config_option
@click.option(
    "-t", "--templates", "template_dir", default=str(codegen.TEMPLATE_DIR), show_default=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Template directory.",
)
@_verbose_option
@_quiet_option
def generate(api: Path, output: Path, config_path: Path | None, template_dir: Path, verbose: bool, quiet: bool):
    """Generate files from the templates."""
    _setup(quiet, verbose)
    try:
        spec = load_spec(api)
        config = load_config(config_path)
        data = build_context(spec, config)
        written = codegen.generate(data, config, output, template_dir)
    except (SchemaGenError, jinja2.TemplateError) as exc:
        raise _fail(exc, verbose) from exc

    click.echo(f"Generated {len(written)} files in {output}")


@main.command()
@_api_option
@_config_option
@click.option(
    "-o", "--output", default="context.json", show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Where to write the context JSON.",
)
@_verbose_option
@_quiet_option
def context(api: Path, config_path: Path | None, output: Path, verbose: bool, quiet: bool):
    """Write the template context as JSON."""
    _setup(quiet, verbose)
    try:
        spec = load_spec(api)
        config = _optional_config(config_path)
        data = build_context(spec, config)
    except SchemaGenError as exc:
        raise _fail(exc, verbose) from exc

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(data.to_dict(), indent=2, default=str) + "\n", encoding="utf-8")
    click.echo(f"Context written to {output}")


def _optional_config(config_path: Path | None) -> Config | None:
    """The config when one is given or discoverable; defaults otherwise."""
    if config_path is not None:
        return load_config(config_path)
    try:
        return load_config()
    except ConfigNotFound:
        log.debug("No config file found, using default policies")
        return None


@main.command()
@_verbose_option
def init(verbose: bool):
    """Initialize a new project (config.yaml and templates/)."""
    _setup(False, verbose)
    created = init_scaffold()
    click.echo(f"Created {len(created)} files")
