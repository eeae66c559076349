"""
Shared pytest fixtures for provcode tests.

This module provides:
- Throwaway project trees (records/ + TEMPLATE + schema) under tmp_path
- A helper to write record directories with arbitrary structured content
- Settings cache and environment isolation

Usage:
    def test_something(project, write_record):
        write_record(project.records, "001-use-postgresql", complete_document("001-use-postgresql"))
"""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest

from provcode.core.config import clear_settings_cache
from provcode.core.store import RecordStore
from provcode.starter import install_starter


@dataclass
class Project:
    root: Path
    records: Path
    template: Path
    schema: Path

    @property
    def store(self) -> RecordStore:
        return RecordStore(self.records)


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch):
    """Fresh settings cache and no PROVCODE_* leakage from the host."""
    for key in list(os.environ):
        if key.startswith("PROVCODE_"):
            monkeypatch.delenv(key)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def project(tmp_path: Path) -> Project:
    """A project seeded with the bundled template and schema."""
    root = tmp_path / "project"
    records = root / "records"
    schema = root / "schemas" / "structured.schema.json"
    records.mkdir(parents=True)
    (root / "provcode.yaml").write_text("records_dir: records\n", encoding="utf-8")
    install_starter(records / "TEMPLATE", schema)
    return Project(root=root, records=records, template=records / "TEMPLATE", schema=schema)


@pytest.fixture
def bare_project(tmp_path: Path) -> Project:
    """A project with a records directory but no template and no schema."""
    root = tmp_path / "bare"
    records = root / "records"
    records.mkdir(parents=True)
    (root / "provcode.yaml").write_text("", encoding="utf-8")
    return Project(
        root=root,
        records=records,
        template=records / "TEMPLATE",
        schema=root / "schemas" / "structured.schema.json",
    )


@pytest.fixture
def write_record() -> Callable[..., Path]:
    """Write a record directory; ``data`` may be a dict or raw text."""

    def _write(
        records: Path,
        name: str,
        data: dict[str, Any] | str | None = None,
        *,
        narrative: bool = True,
        provenance: dict[str, Any] | str | None = None,
        manifest: dict[str, Any] | str | None = None,
    ) -> Path:
        path = records / name
        path.mkdir(parents=True)
        if data is not None:
            text = data if isinstance(data, str) else json.dumps(data, indent=2)
            (path / "structured.json").write_text(text, encoding="utf-8")
        if narrative:
            (path / "narrative.md").write_text(f"# {name}\n", encoding="utf-8")
        for filename, content in (("provenance.jsonld", provenance), ("manifest.json", manifest)):
            if content is not None:
                text = content if isinstance(content, str) else json.dumps(content)
                (path / filename).write_text(text, encoding="utf-8")
        return path

    return _write
