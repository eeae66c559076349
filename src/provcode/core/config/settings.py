"""
Centralized settings for provcode.

:class:`ProvcodeSettings` is the single validated source for the record
layout (directory and file names), identifier width, default status and
logging.  :func:`get_settings` layers the YAML project file underneath the
environment and caches the result per project root.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from provcode.core.errors import ConfigError
from provcode.core.models import RecordStatus


class ProvcodeSettings(BaseSettings):
    """provcode configuration.

    All fields can be set via ``PROVCODE_*`` environment variables (e.g.
    ``PROVCODE_RECORDS_DIR=docs/decisions``), a ``.env`` file, or the
    project file.  Relative paths resolve against ``project_root``.
    """

    model_config = SettingsConfigDict(
        env_prefix="PROVCODE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    project_root: Path = Field(default_factory=Path.cwd)

    # ── Layout ───────────────────────────────────────────────────
    records_dir: str = Field(default="records")
    template_name: str = Field(default="TEMPLATE")
    schema_path: str = Field(default="schemas/structured.schema.json")

    narrative_file: str = Field(default="narrative.md")
    structured_file: str = Field(default="structured.json")
    provenance_file: str = Field(default="provenance.jsonld")
    manifest_file: str = Field(default="manifest.json")
    evidence_dir: str = Field(default="evidence")

    # ── Records ──────────────────────────────────────────────────
    id_width: int = Field(default=3, ge=1, le=9)
    default_status: str = Field(default=RecordStatus.PROPOSED.value)

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="WARNING")
    log_format: str = Field(default="console")

    @field_validator("default_status")
    @classmethod
    def _check_status(cls, value: str) -> str:
        if value not in RecordStatus.values():
            raise ValueError(f"default_status must be one of {', '.join(RecordStatus.values())}")
        return value

    @field_validator("log_format")
    @classmethod
    def _check_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("console", "json"):
            raise ValueError("log_format must be 'console' or 'json'")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError("log_level must be DEBUG, INFO, WARNING or ERROR")
        return value

    def resolve(self, path: str) -> Path:
        """Resolve a configured path against the project root."""
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return self.project_root / candidate

    @property
    def records_path(self) -> Path:
        return self.resolve(self.records_dir)

    @property
    def schema_file(self) -> Path:
        return self.resolve(self.schema_path)


_settings_cache: dict[str, ProvcodeSettings] = {}


def get_settings(
    *,
    project_root: Path | None = None,
    _force_reload: bool = False,
    **overrides: Any,
) -> ProvcodeSettings:
    """Load, validate, and cache a :class:`ProvcodeSettings` instance.

    Parameters
    ----------
    project_root:
        Override the auto-detected project root.
    _force_reload:
        Bypass cache and reload from disk.
    overrides:
        Explicit field values (CLI options).  They win over everything and
        bypass the cache.
    """
    from .loader import find_project_root, load_project_file

    root = (project_root or find_project_root()).resolve()
    cache_key = str(root)
    overrides = {k: v for k, v in overrides.items() if v is not None}

    if not _force_reload and not overrides and cache_key in _settings_cache:
        return _settings_cache[cache_key]

    project_env = {
        f"PROVCODE_{key.upper()}": str(value)
        for key, value in load_project_file(root).items()
        if key != "project_root" and value is not None
    }

    env_file = root / ".env"
    dotenv_keys = (
        {key.upper() for key in dotenv_values(env_file)} if env_file.is_file() else set()
    )

    # Project-file values sit below real env vars and .env: inject only unset keys
    original_env: dict[str, str | None] = {}
    for key, value in project_env.items():
        if key not in os.environ and key not in dotenv_keys:
            original_env[key] = os.environ.get(key)
            os.environ[key] = value

    try:
        settings = ProvcodeSettings(
            _env_file=env_file if env_file.is_file() else None,  # type: ignore[call-arg]
            project_root=root,
            **overrides,
        )
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}", cause=e).with_context(path=root)
    finally:
        for key, orig_value in original_env.items():
            if orig_value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = orig_value

    if not overrides:
        _settings_cache[cache_key] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()
