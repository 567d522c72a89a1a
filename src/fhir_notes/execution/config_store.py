"""One-JSON-file-per-server configuration store.

Files live in ``<project root>/.fhir-configs/<name>.json``. Writes are not
locked; concurrent saves of the same name are last-write-wins.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..errors import (
    AmbiguousConfigError,
    ConfigNotFoundError,
    NoConfigError,
    TemplateDataError,
)
from .models import FHIRConfig

logger = logging.getLogger(__name__)

_CONFIG_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._ -]*$")


def validate_config_name(name: str) -> str:
    """Config names become file stems, so path separators are rejected."""
    if not name or not _CONFIG_NAME_RE.match(name) or ".." in name:
        raise ValueError(f"Invalid config name: {name!r}")
    return name


def config_path(config_dir: Path, name: str) -> Path:
    return config_dir / f"{validate_config_name(name)}.json"


def config_names(config_dir: Path) -> list[str]:
    """Stems of every ``*.json`` file, sorted."""
    if not config_dir.is_dir():
        return []
    return sorted(p.stem for p in config_dir.glob("*.json") if p.is_file())


def read_config_file(path: Path) -> dict[str, Any]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise TemplateDataError(f"Config file {path} is not valid JSON: {exc}") from exc


def list_configs(config_dir: Path) -> list[dict[str, Any]]:
    """Every stored config as a dict; ``name`` defaults to the file stem."""
    return [
        {"name": name, **read_config_file(config_dir / f"{name}.json")}
        for name in config_names(config_dir)
    ]


def load_config(config_dir: Path, name: str) -> FHIRConfig:
    path = config_path(config_dir, name)
    if not path.is_file():
        raise ConfigNotFoundError(f"FHIR config not found: {name} ({path})")
    data = read_config_file(path)
    data.setdefault("name", name)
    return FHIRConfig.model_validate(data)


def select_config(config_dir: Path, name: str | None = None) -> FHIRConfig:
    """Pick the config to use.

    An explicit name must exist. Without one, a single stored config is used
    automatically; zero or several are errors.
    """
    if name:
        return load_config(config_dir, name)

    names = config_names(config_dir)
    if not names:
        raise NoConfigError(
            f"No FHIR config found in {config_dir}. Run fhir-setup to create one."
        )
    if len(names) > 1:
        raise AmbiguousConfigError(names)
    return load_config(config_dir, names[0])


def save_config(config_dir: Path, payload: dict[str, Any]) -> Path:
    """Write ``payload`` (which must contain ``name``) with a fresh ``savedAt``."""
    name = validate_config_name(str(payload.get("name", "")))
    config = {**payload, "savedAt": datetime.now(timezone.utc).isoformat()}
    config_dir.mkdir(parents=True, exist_ok=True)
    path = config_path(config_dir, name)
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    logger.info("Configuration saved to: %s", path)
    return path


def delete_config(config_dir: Path, name: str) -> None:
    path = config_path(config_dir, name)
    if not path.is_file():
        raise ConfigNotFoundError(f"FHIR config not found: {name}")
    path.unlink()
    logger.info("Configuration deleted: %s", name)
