"""
Project root discovery and project-file loading.

The project file is ``provcode.yaml`` (or ``.provcode.yaml``) at the
project root.  Its keys are the :class:`ProvcodeSettings` field names::

    records_dir: docs/decisions
    schema_path: docs/schemas/decision.schema.json
    default_status: proposed

Load order, lowest to highest priority::

    defaults  →  provcode.yaml  →  .env  →  real env vars  →  CLI options
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from provcode.core.errors import ConfigError

PROJECT_FILES = ("provcode.yaml", ".provcode.yaml")


def find_project_root(start: Path | None = None) -> Path:
    """Walk upward from *start* to find the project root.

    Recognised root markers (checked in order):

    * ``provcode.yaml`` / ``.provcode.yaml``
    * ``pyproject.toml``
    * ``.git`` directory

    Falls back to *start* (or cwd) when no marker is found.
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        if any((directory / name).exists() for name in PROJECT_FILES):
            return directory
        if (directory / "pyproject.toml").exists():
            return directory
        if (directory / ".git").exists():
            return directory
    return current


def find_project_file(project_root: Path) -> Path | None:
    """Return the project file under *project_root*, if any."""
    for name in PROJECT_FILES:
        candidate = project_root / name
        if candidate.is_file():
            return candidate
    return None


def load_project_file(project_root: Path) -> dict[str, Any]:
    """Parse the project file into a plain dict.

    Returns an empty dict when there is no project file.

    Raises:
        ConfigError: The file is not valid YAML or not a mapping.
    """
    path = find_project_file(project_root)
    if path is None:
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in project file: {e}", cause=e).with_context(path=path)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Project file must contain a mapping").with_context(path=path)
    return data
