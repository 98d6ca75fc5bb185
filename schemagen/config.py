"""Generator configuration: type table, extended lookups, output layout.

Read from config.json / config.yml / config.yaml (or an explicit path) and
validated once, before any template is rendered.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

import structlog
import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigNotFound, ConfigValidation

log = structlog.get_logger(__name__)

TYPE_PLACEHOLDER = "{type}"

# Searched in the working directory when no config path is given
_DEFAULT_CONFIG_FILES = ("config.json", "config.yml", "config.yaml")


class TypeMapping(BaseModel):
    """Target type for one lookup key, with optional per-format overrides."""

    default: str
    format: dict[str, str] | None = None


class Config(BaseModel):
    """Validated generator configuration."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    types: dict[str, TypeMapping]
    extended: dict[str, str] = Field(default_factory=dict)
    array_layout: str
    model_file_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("model_file_name", "modelFileName"),
    )
    missing_content: Literal["warn", "fail"] = "warn"
    partial_output: bool = False
    dedupe_ignore_names: bool = False

    @field_validator("array_layout")
    @classmethod
    def _layout_has_placeholder(cls, value: str) -> str:
        if TYPE_PLACEHOLDER not in value:
            raise ValueError(f"array_layout must contain the {TYPE_PLACEHOLDER} placeholder")
        return value


def parse_config(data: Any) -> Config:
    """Validate a raw mapping into a Config, raising ConfigValidation."""
    if not isinstance(data, dict):
        raise ConfigValidation("Config must be a mapping")
    try:
        return Config.model_validate(data)
    except ValidationError as exc:
        raise ConfigValidation(str(exc)) from exc


def load_config(path: Path | None = None, cwd: Path | None = None) -> Config:
    """Load the config from path, or discover it in cwd."""
    if path is not None:
        path = Path(path)
        if not path.is_file():
            raise ConfigNotFound(f"Config file '{path}' is not a file")
        return parse_config(_read(path))

    base = Path(cwd) if cwd is not None else Path.cwd()
    for file_name in _DEFAULT_CONFIG_FILES:
        candidate = base / file_name
        if candidate.is_file():
            log.debug("Using config file", path=str(candidate))
            return parse_config(_read(candidate))
    raise ConfigNotFound(f"Config file not found in {base}")


def _read(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix == ".json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigValidation(f"{path}: {exc}") from exc
