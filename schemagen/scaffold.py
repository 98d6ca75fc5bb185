"""Initialise a project directory with a starter config and templates.

Nothing that already exists is overwritten.
"""

from __future__ import annotations

from importlib import resources
from pathlib import Path

import structlog

log = structlog.get_logger(__name__)

CONFIG_FILE_NAME = "config.yaml"
TEMPLATE_FOLDER_NAME = "templates"
MODEL_FILE_NAME = "model.template"
SERVICE_FILE_NAME = "service.template"


def _starter(name: str) -> str:
    return resources.files("schemagen").joinpath("starter").joinpath(name).read_text(encoding="utf-8")


def _write_if_absent(path: Path, content: str, label: str) -> bool:
    if path.exists():
        log.info(f"{label} already exists", path=str(path))
        return False
    log.info(f"Creating {label.lower()}", path=str(path))
    path.write_text(content, encoding="utf-8")
    return True


def init(root: Path | None = None) -> list[Path]:
    """Create config.yaml and templates/ under root; returns what was written."""
    root = Path(root) if root is not None else Path.cwd()
    log.info("Initialising config directory and files")
    created: list[Path] = []

    config_path = root / CONFIG_FILE_NAME
    if _write_if_absent(config_path, _starter(CONFIG_FILE_NAME), "Config file"):
        created.append(config_path)

    template_dir = root / TEMPLATE_FOLDER_NAME
    if template_dir.exists():
        log.info("Template folder already exists")
    else:
        log.info("Creating template folder")
        template_dir.mkdir(parents=True)

    for file_name, label in ((MODEL_FILE_NAME, "Model template"), (SERVICE_FILE_NAME, "Service template")):
        path = template_dir / file_name
        if _write_if_absent(path, _starter(file_name), label):
            created.append(path)

    log.info("Templates are rendered with Jinja2 (https://jinja.palletsprojects.com/)")
    return created
