"""Record Validator — checklist validation of decision records.

Each check is independent; order only affects how the report reads.  A
record is valid when no check produced an error.  Warnings never change
the verdict.

Architecture::

    validate_record(path, schema)
    │
    ├── _check_files           E001 required missing / W001 optional missing
    ├── parse structured doc   E002 (skips every field check below)
    │   ├── _check_schema      E003 violations / W002 schema missing
    │   ├── _check_content     E004-E007, E009 / W003-W008
    │   └── _check_links       W010 dangling supersession links
    └── _check_auxiliary       E008 bad JSON / W009 provenance without @context
    │
    ▼
    ValidationReport
    ├── diagnostics: list[Diagnostic]
    ├── valid → bool (no errors)
    ├── errors / warnings / infos → list[str]
    └── summary() → str

    validate_all(store, schema) → BatchReport (one report per record)

Example::

    from provcode.core.validator import validate_record

    report = validate_record(Path("records/001-use-postgresql"), schema=None)
    if not report.valid:
        for message in report.errors:
            print(message)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from provcode.core.logging import get_logger
from provcode.core.models import RecordLayout, RecordStatus
from provcode.core.schema_rules import CompiledSchema
from provcode.core.store import RecordStore

logger = get_logger(__name__)

MIN_TITLE_LENGTH = 5
MIN_PROBLEM_LENGTH = 50


# ---------------------------------------------------------------------------
# Diagnostic model
# ---------------------------------------------------------------------------

class Severity(str, Enum):
    """Severity level for a validation diagnostic."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Diagnostic:
    """A single validation finding.

    Attributes:
        code: Short identifier (e.g. ``"E001"``).
        severity: ``error``, ``warning``, or ``info``.
        message: Human-readable description.
        file: Record file the finding refers to (if applicable).
        field: Dotted field name inside that file (if applicable).
    """

    code: str
    severity: Severity
    message: str
    file: str | None = None
    field: str | None = None

    def __str__(self) -> str:
        location = f" ({self.file})" if self.file else ""
        return f"[{self.code}] {self.message}{location}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "severity": self.severity.value,
            "message": self.message,
            "file": self.file,
            "field": self.field,
        }


@dataclass
class ValidationReport:
    """Aggregated result of validating one record.

    Attributes:
        record_id: Directory name of the record.
        path: Record directory.
        diagnostics: All findings, in check order.
    """

    record_id: str
    path: Path
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        """True if there are no error-level diagnostics."""
        return not any(d.severity == Severity.ERROR for d in self.diagnostics)

    def by_severity(self, severity: Severity) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == severity]

    @property
    def errors(self) -> list[str]:
        return [d.message for d in self.by_severity(Severity.ERROR)]

    @property
    def warnings(self) -> list[str]:
        return [d.message for d in self.by_severity(Severity.WARNING)]

    @property
    def infos(self) -> list[str]:
        return [d.message for d in self.by_severity(Severity.INFO)]

    def add(
        self,
        code: str,
        severity: Severity,
        message: str,
        *,
        file: str | None = None,
        field: str | None = None,
    ) -> None:
        self.diagnostics.append(Diagnostic(code, severity, message, file=file, field=field))

    def summary(self) -> str:
        """One-line summary of the validation result."""
        status = "PASS" if self.valid else "FAIL"
        parts = [f"{status}: {self.record_id}"]
        for label, items in (("errors", self.errors), ("warnings", self.warnings)):
            if items:
                parts.append(f"{len(items)} {label}")
        return " | ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "record_id": self.record_id,
            "path": str(self.path),
            "valid": self.valid,
            "errors": self.errors,
            "warnings": self.warnings,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }

    def __str__(self) -> str:
        lines = [self.summary()]
        for d in self.diagnostics:
            if d.severity != Severity.INFO:
                lines.append(f"  {d}")
        return "\n".join(lines)


@dataclass
class BatchReport:
    """Result of validating every record in a store."""

    reports: list[ValidationReport] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.reports)

    @property
    def valid_count(self) -> int:
        return sum(1 for r in self.reports if r.valid)

    @property
    def invalid_count(self) -> int:
        return self.total - self.valid_count

    @property
    def warning_count(self) -> int:
        return sum(len(r.warnings) for r in self.reports)

    @property
    def passed(self) -> bool:
        return self.invalid_count == 0

    def summary(self) -> str:
        return (
            f"total={self.total}, valid={self.valid_count}, "
            f"invalid={self.invalid_count}, warnings={self.warning_count}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "valid": self.valid_count,
            "invalid": self.invalid_count,
            "warnings": self.warning_count,
            "records": [r.to_dict() for r in self.reports],
        }


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------

def _check_files(path: Path, layout: RecordLayout, report: ValidationReport) -> None:
    for name in layout.required_files:
        if (path / name).is_file():
            report.add("I001", Severity.INFO, f"Found required file: {name}", file=name)
        else:
            report.add("E001", Severity.ERROR, f"Missing required file: {name}", file=name)

    for name in layout.optional_files:
        if (path / name).is_file():
            report.add("I001", Severity.INFO, f"Found optional file: {name}", file=name)
        else:
            report.add("W001", Severity.WARNING, f"Missing optional file: {name}", file=name)


def _load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _check_schema(
    data: Any,
    schema: CompiledSchema | None,
    schema_path: Path | None,
    layout: RecordLayout,
    report: ValidationReport,
) -> None:
    name = layout.structured_file
    if schema is None:
        where = f": {schema_path}" if schema_path is not None else ""
        report.add(
            "W002",
            Severity.WARNING,
            f"Schema file not found{where}, skipping schema validation",
            file=name,
        )
        return

    errors = schema.evaluate(data)
    for message in errors:
        report.add("E003", Severity.ERROR, message, file=name)
    if not errors:
        report.add("I002", Severity.INFO, "Schema validation passed", file=name)


def _non_empty_list(value: Any) -> bool:
    return isinstance(value, list) and len(value) > 0


def _check_content(data: dict[str, Any], layout: RecordLayout, report: ValidationReport) -> None:
    """Review-quality heuristics, independent of the formal schema."""
    name = layout.structured_file

    record_id = data.get("id")
    if not record_id:
        report.add("E009", Severity.ERROR, "Identifier is missing", file=name, field="id")
    elif record_id != report.record_id:
        report.add(
            "E009",
            Severity.ERROR,
            f"Identifier {record_id!r} does not match directory name {report.record_id!r}",
            file=name,
            field="id",
        )

    title = data.get("title")
    if not isinstance(title, str) or len(title) < MIN_TITLE_LENGTH:
        report.add("E004", Severity.ERROR, "Title is missing or too short", file=name, field="title")

    if not data.get("status"):
        report.add("E005", Severity.ERROR, "Status is missing", file=name, field="status")

    if not data.get("date"):
        report.add("E006", Severity.ERROR, "Date is missing", file=name, field="date")

    context = data.get("context")
    problem = context.get("problem") if isinstance(context, dict) else None
    if not problem:
        report.add(
            "W003",
            Severity.WARNING,
            "Context or problem description is missing",
            file=name,
            field="context.problem",
        )
    elif isinstance(problem, str) and len(problem) < MIN_PROBLEM_LENGTH:
        report.add(
            "W003",
            Severity.WARNING,
            f"Problem description is very short (< {MIN_PROBLEM_LENGTH} characters)",
            file=name,
            field="context.problem",
        )

    decision = data.get("decision")
    if not (isinstance(decision, dict) and decision.get("summary")):
        report.add(
            "W004", Severity.WARNING, "Decision summary is missing", file=name, field="decision.summary"
        )

    consequences = data.get("consequences")
    if not consequences:
        report.add(
            "E007", Severity.ERROR, "Consequences section is missing", file=name, field="consequences"
        )
    else:
        positive = consequences.get("positive") if isinstance(consequences, dict) else None
        negative = consequences.get("negative") if isinstance(consequences, dict) else None
        if not _non_empty_list(positive):
            report.add(
                "W005",
                Severity.WARNING,
                "No positive consequences listed",
                file=name,
                field="consequences.positive",
            )
        if not _non_empty_list(negative):
            report.add(
                "W006",
                Severity.WARNING,
                "No negative consequences listed (be honest about trade-offs!)",
                file=name,
                field="consequences.negative",
            )

    if not _non_empty_list(data.get("alternatives")):
        report.add(
            "W007",
            Severity.WARNING,
            "No alternatives considered (recommended to document)",
            file=name,
            field="alternatives",
        )

    if not data.get("evidence"):
        report.add(
            "W008",
            Severity.WARNING,
            "No evidence provided (recommended for important decisions)",
            file=name,
            field="evidence",
        )


def _as_id_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, list):
        return [v for v in value if isinstance(v, str) and v]
    return []


def _check_links(
    data: dict[str, Any],
    known_ids: set[str] | None,
    layout: RecordLayout,
    report: ValidationReport,
) -> None:
    """Supersession links must point at existing records."""
    name = layout.structured_file
    superseded_by = _as_id_list(data.get("supersededBy"))

    if data.get("status") == RecordStatus.SUPERSEDED.value and not superseded_by:
        report.add(
            "W010",
            Severity.WARNING,
            "Status is superseded but supersededBy is not set",
            file=name,
            field="supersededBy",
        )

    if known_ids is None:
        return

    for key in ("supersedes", "supersededBy"):
        for target in _as_id_list(data.get(key)):
            if target not in known_ids:
                report.add(
                    "W010",
                    Severity.WARNING,
                    f"{key} refers to unknown record: {target}",
                    file=name,
                    field=key,
                )


def _check_auxiliary(path: Path, layout: RecordLayout, report: ValidationReport) -> None:
    provenance = path / layout.provenance_file
    if provenance.is_file():
        try:
            data = _load_json(provenance)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            report.add(
                "E008",
                Severity.ERROR,
                f"Invalid JSON in {layout.provenance_file}: {e}",
                file=layout.provenance_file,
            )
        else:
            if not isinstance(data, dict) or "@context" not in data:
                report.add(
                    "W009",
                    Severity.WARNING,
                    f"{layout.provenance_file} missing @context",
                    file=layout.provenance_file,
                    field="@context",
                )
            else:
                report.add(
                    "I003",
                    Severity.INFO,
                    f"{layout.provenance_file} is valid JSON-LD",
                    file=layout.provenance_file,
                )

    manifest = path / layout.manifest_file
    if manifest.is_file():
        try:
            _load_json(manifest)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            report.add(
                "E008",
                Severity.ERROR,
                f"Invalid JSON in {layout.manifest_file}: {e}",
                file=layout.manifest_file,
            )
        else:
            report.add(
                "I003",
                Severity.INFO,
                f"{layout.manifest_file} is valid JSON",
                file=layout.manifest_file,
            )


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def validate_record(
    record_path: Path,
    schema: CompiledSchema | None = None,
    *,
    layout: RecordLayout | None = None,
    schema_path: Path | None = None,
    known_ids: set[str] | None = None,
) -> ValidationReport:
    """Validate one record directory.

    Parameters
    ----------
    record_path
        Record directory; its name is the expected identifier.
    schema
        Compiled schema, or None when no schema file exists (reported as
        a warning).
    layout
        Record file names.  Defaults to :class:`RecordLayout`.
    schema_path
        Where the schema was looked for; only used in the warning text.
    known_ids
        Identifiers of all records, enabling supersession link checks.
    """
    layout = layout or RecordLayout()
    report = ValidationReport(record_id=record_path.name, path=record_path)

    _check_files(record_path, layout, report)

    structured = record_path / layout.structured_file
    if structured.is_file():
        try:
            data = _load_json(structured)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            report.add(
                "E002",
                Severity.ERROR,
                f"Invalid JSON in {layout.structured_file}: {e}",
                file=layout.structured_file,
            )
        else:
            _check_schema(data, schema, schema_path, layout, report)
            if isinstance(data, dict):
                _check_content(data, layout, report)
                _check_links(data, known_ids, layout, report)
            else:
                report.add(
                    "E002",
                    Severity.ERROR,
                    f"{layout.structured_file} must contain a JSON object",
                    file=layout.structured_file,
                )

    _check_auxiliary(record_path, layout, report)

    logger.debug(
        "record_validated",
        record_id=report.record_id,
        valid=report.valid,
        errors=len(report.errors),
        warnings=len(report.warnings),
    )
    return report


def validate_all(
    store: RecordStore,
    schema: CompiledSchema | None = None,
    *,
    schema_path: Path | None = None,
) -> BatchReport:
    """Validate every record in *store* (template excluded), in order."""
    known_ids = store.record_ids()
    batch = BatchReport()
    for path in store.iter_records():
        batch.reports.append(
            validate_record(
                path,
                schema,
                layout=store.layout,
                schema_path=schema_path,
                known_ids=known_ids,
            )
        )
    logger.info(
        "batch_validated",
        total=batch.total,
        valid=batch.valid_count,
        invalid=batch.invalid_count,
    )
    return batch
