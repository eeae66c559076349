"""Template Materializer — scaffold a new record from the template.

Copies the reserved template directory byte-for-byte, then rewrites the
placeholder tokens it contains.  Substitution is plain text replacement
(every occurrence, in list order), never a templating language; the
structured document additionally gets its known fields patched after
parsing.

Architecture::

    create_record(store, "Use PostgreSQL")
    │
    ├── slugify                → "use-postgresql"
    ├── slug collision check   → AlreadyExistsError (nothing written)
    ├── store.next_identifier  → "001"
    │
    ▼
    materialize(template_dir, dest_dir, substitutions)
    ├── TemplateMissingError / AlreadyExistsError (nothing written)
    ├── shutil.copytree
    ├── _apply_substitutions   (structured, provenance, manifest, narrative)
    └── _patch_structured      (id, title, date, status, provenance times)
    │
    ▼
    MaterializeReport
    ├── record_id, path
    ├── steps     → completed actions, in order
    └── warnings  → skipped actions (e.g. corrupt template JSON)

Placeholder tokens recognised in template files::

    template-example-record      → record identifier
    Template Example Record      → title derived from the slug
    YYYY-MM-DDTHH:MM:SSZ         → creation timestamp (UTC)
    YYYY-MM-DD                   → creation date
    proposed | accepted | ...    → default status

The timestamp token contains the date token, so it is substituted first.
"""

from __future__ import annotations

import json
import shutil
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from provcode.core.errors import AlreadyExistsError, TemplateMissingError, UsageError
from provcode.core.identifiers import format_identifier, slugify, title_from_slug
from provcode.core.logging import get_logger
from provcode.core.models import RecordLayout, RecordStatus
from provcode.core.store import RecordStore

logger = get_logger(__name__)

ID_TOKEN = "template-example-record"
TITLE_TOKEN = "Template Example Record"
TIMESTAMP_TOKEN = "YYYY-MM-DDTHH:MM:SSZ"
DATE_TOKEN = "YYYY-MM-DD"
STATUS_TOKEN = " | ".join(RecordStatus.values())


@dataclass(frozen=True)
class Substitution:
    """Replace every occurrence of ``pattern`` with ``replacement``."""

    pattern: str
    replacement: str

    def apply(self, text: str) -> str:
        return text.replace(self.pattern, self.replacement)


@dataclass(frozen=True)
class MaterializeContext:
    """Values derived from the invocation that fill the template.

    Attributes:
        record_id: Full identifier, also the directory name
        slug: Sanitized name part of the identifier
        title: Human-readable title derived from the slug
        date: Creation date, ``YYYY-MM-DD``
        timestamp: Creation time, RFC 3339 UTC with ``Z`` suffix
        status: Status written into the new record
    """

    record_id: str
    slug: str
    title: str
    date: str
    timestamp: str
    status: str = RecordStatus.PROPOSED.value

    @classmethod
    def build(
        cls,
        record_id: str,
        slug: str,
        *,
        now: datetime | None = None,
        default_status: str = RecordStatus.PROPOSED.value,
    ) -> MaterializeContext:
        moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
        return cls(
            record_id=record_id,
            slug=slug,
            title=title_from_slug(slug),
            date=moment.strftime("%Y-%m-%d"),
            timestamp=moment.strftime("%Y-%m-%dT%H:%M:%SZ"),
            status=default_status,
        )


@dataclass
class MaterializeReport:
    """Outcome of scaffolding one record."""

    record_id: str
    path: Path
    steps: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def default_substitutions(context: MaterializeContext) -> list[Substitution]:
    """Ordered substitutions for the bundled template tokens."""
    return [
        Substitution(ID_TOKEN, context.record_id),
        Substitution(TITLE_TOKEN, context.title),
        Substitution(TIMESTAMP_TOKEN, context.timestamp),
        Substitution(DATE_TOKEN, context.date),
        Substitution(STATUS_TOKEN, context.status),
    ]


def materialize(
    template_dir: Path,
    dest_dir: Path,
    substitutions: list[Substitution],
    *,
    layout: RecordLayout | None = None,
    context: MaterializeContext | None = None,
) -> MaterializeReport:
    """Copy *template_dir* to *dest_dir* and fill in placeholders.

    Parameters
    ----------
    template_dir
        Prototype record directory.
    dest_dir
        New record directory; must not exist.
    substitutions
        Applied in order to each of the layout's text files present.
    layout
        Record file names.  Defaults to :class:`RecordLayout`.
    context
        When given, the structured document's fields are patched from it.

    Raises
    ------
    TemplateMissingError
        *template_dir* is absent or not a directory.
    AlreadyExistsError
        *dest_dir* already exists; nothing is written.
    """
    layout = layout or RecordLayout()

    if not template_dir.is_dir():
        raise TemplateMissingError(
            f"Template directory not found: {template_dir}"
        ).with_context(path=template_dir)
    if dest_dir.exists():
        raise AlreadyExistsError(
            f"Record already exists: {dest_dir.name}"
        ).with_context(path=dest_dir, record_id=dest_dir.name)

    report = MaterializeReport(record_id=dest_dir.name, path=dest_dir)

    try:
        shutil.copytree(template_dir, dest_dir)
    except FileExistsError as e:
        # Lost a race with a concurrent create for the same identifier
        raise AlreadyExistsError(
            f"Record already exists: {dest_dir.name}", cause=e
        ).with_context(path=dest_dir, record_id=dest_dir.name)
    report.steps.append("Copied template")
    logger.info("template_copied", source=str(template_dir), dest=str(dest_dir))

    for name in layout.text_files:
        path = dest_dir / name
        if not path.is_file():
            continue
        if _apply_substitutions(path, substitutions, report):
            report.steps.append(f"Updated {name}")

    if context is not None:
        structured = dest_dir / layout.structured_file
        if structured.is_file() and _patch_structured(structured, context, report):
            report.steps.append(f"Patched fields in {layout.structured_file}")

    return report


def _read_text(path: Path) -> str:
    # Line endings are kept as found in the template
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def _apply_substitutions(
    path: Path, substitutions: list[Substitution], report: MaterializeReport
) -> bool:
    try:
        original = _read_text(path)
    except UnicodeDecodeError:
        report.warnings.append(f"Could not update {path.name}: not UTF-8 text")
        logger.warning("substitution_skipped", file=str(path), reason="not_utf8")
        return False

    text = original
    for substitution in substitutions:
        text = substitution.apply(text)

    if text != original:
        path.write_text(text, encoding="utf-8", newline="")
    logger.debug("substitutions_applied", file=str(path), changed=text != original)
    return True


def _patch_structured(
    path: Path, context: MaterializeContext, report: MaterializeReport
) -> bool:
    """Set identifier, title, dates and status in the structured document.

    A document that does not parse (a corrupt template) is left as the
    raw copy and reported as a warning.
    """
    try:
        raw = _read_text(path)
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        report.warnings.append(f"Could not update {path.name}: {e}")
        logger.warning("structured_patch_skipped", file=str(path), error=str(e))
        return False

    if not isinstance(data, dict):
        report.warnings.append(f"Could not update {path.name}: top level is not an object")
        logger.warning("structured_patch_skipped", file=str(path), error="not_an_object")
        return False

    data["id"] = context.record_id
    data["title"] = context.title
    data["date"] = context.date
    data["lastUpdated"] = context.date
    if RecordStatus.parse(data.get("status")) is None:
        data["status"] = context.status

    provenance = data.get("provenance")
    if isinstance(provenance, dict):
        provenance["created"] = context.timestamp
        provenance["modified"] = context.timestamp

    newline = "\r\n" if "\r\n" in raw else "\n"
    path.write_text(
        json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8", newline=newline
    )
    return True


def create_record(
    store: RecordStore,
    name: str,
    *,
    now: datetime | None = None,
) -> MaterializeReport:
    """Scaffold a new record named after *name* in *store*.

    Raises
    ------
    UsageError
        *name* has no alphanumeric characters.
    AlreadyExistsError
        A record with the same slug exists; nothing is written.
    TemplateMissingError
        The store has no template directory.
    """
    slug = slugify(name)
    if not slug:
        raise UsageError(f"Invalid record name: {name!r}")

    existing = store.find_by_slug(slug)
    if existing is not None:
        raise AlreadyExistsError(f"Record already exists: {existing}").with_context(
            record_id=existing, path=store.path_for(existing)
        )

    record_id = format_identifier(store.next_identifier(), slug)
    context = MaterializeContext.build(
        record_id, slug, now=now, default_status=store.default_status
    )
    report = materialize(
        store.template_dir,
        store.path_for(record_id),
        default_substitutions(context),
        layout=store.layout,
        context=context,
    )
    logger.info("record_created", record_id=record_id, path=str(report.path))
    return report
