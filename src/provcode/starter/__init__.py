"""
Bundled starter content: the record template and the structured schema.

``install_starter`` seeds a project with both so ``create`` and
``validate`` work out of the box.  Existing files are left alone unless
``force`` is set.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from importlib.resources import as_file, files
from pathlib import Path

from provcode.core.logging import get_logger

logger = get_logger(__name__)

SCHEMA_NAME = "structured.schema.json"


@dataclass
class InstallReport:
    """Paths written and skipped by :func:`install_starter`."""

    written: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)


def install_starter(template_dir: Path, schema_file: Path, *, force: bool = False) -> InstallReport:
    """Copy the bundled template and schema into a project.

    Args:
        template_dir: Destination of the template directory
        schema_file: Destination of the schema file
        force: Replace an existing template directory and schema file
    """
    report = InstallReport()
    package = files("provcode.starter")

    if template_dir.exists() and not force:
        report.skipped.append(template_dir)
    else:
        with as_file(package / "template") as source:
            if template_dir.exists():
                shutil.rmtree(template_dir)
            shutil.copytree(source, template_dir)
        report.written.append(template_dir)
        logger.info("starter_template_installed", path=str(template_dir))

    if schema_file.exists() and not force:
        report.skipped.append(schema_file)
    else:
        schema_file.parent.mkdir(parents=True, exist_ok=True)
        with as_file(package / "schemas" / SCHEMA_NAME) as source:
            shutil.copyfile(source, schema_file)
        report.written.append(schema_file)
        logger.info("starter_schema_installed", path=str(schema_file))

    return report
