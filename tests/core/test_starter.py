"""Tests for provcode.starter — bundled template and schema installation."""

from __future__ import annotations

import json

from provcode.core.materializer import STATUS_TOKEN
from provcode.core.schema_rules import load_schema
from provcode.starter import install_starter


class TestInstallStarter:
    """install_starter into new and existing projects."""

    def test_fresh_install(self, tmp_path):
        """Template files and schema land in an empty project."""
        template = tmp_path / "records" / "TEMPLATE"
        schema = tmp_path / "schemas" / "structured.schema.json"

        report = install_starter(template, schema)

        assert report.written == [template, schema]
        assert report.skipped == []
        for name in ("structured.json", "narrative.md", "provenance.jsonld", "manifest.json"):
            assert (template / name).is_file(), name
        assert (template / "evidence").is_dir()

    def test_existing_files_are_kept(self, project):
        """Nothing is overwritten without force."""
        (project.template / "narrative.md").write_text("# Ours\n")
        project.schema.write_text("{}")

        report = install_starter(project.template, project.schema)

        assert report.written == []
        assert report.skipped == [project.template, project.schema]
        assert (project.template / "narrative.md").read_text() == "# Ours\n"
        assert project.schema.read_text() == "{}"

    def test_force_replaces(self, project):
        """force wipes the old template and rewrites the schema."""
        (project.template / "stale.txt").write_text("old")
        project.schema.write_text("{}")

        report = install_starter(project.template, project.schema, force=True)

        assert report.written == [project.template, project.schema]
        assert not (project.template / "stale.txt").exists()
        assert json.loads(project.schema.read_text())["required"]


class TestBundledContent:
    """Content shipped with the package."""

    def test_template_uses_placeholders(self, project):
        """The template still carries its tokens."""
        data = json.loads((project.template / "structured.json").read_text())
        assert data["id"] == "template-example-record"
        assert data["status"] == STATUS_TOKEN

    def test_provenance_has_context(self, project):
        data = json.loads((project.template / "provenance.jsonld").read_text())
        assert "@context" in data

    def test_bundled_schema_compiles(self, project):
        assert load_schema(project.schema) is not None
