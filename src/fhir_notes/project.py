"""Project root discovery.

The project root is the nearest ancestor of the working directory that holds
the FHIR config directory (``.fhir-configs`` by default).
"""

from __future__ import annotations

from pathlib import Path

from .errors import ProjectRootNotFoundError
from .settings import get_settings


def find_project_root(start: str | Path | None = None, marker: str | None = None) -> Path:
    """Walk upward from ``start`` (default: cwd) until ``marker`` is a directory.

    Raises:
        ProjectRootNotFoundError: if the filesystem root is reached first.
    """
    marker = marker or get_settings().config_dir_name
    current = Path(start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / marker).is_dir():
            return candidate
    raise ProjectRootNotFoundError(
        f"Could not find project root (no {marker} directory found above {current})"
    )


def config_dir(project_root: Path) -> Path:
    return project_root / get_settings().config_dir_name
