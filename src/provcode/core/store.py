"""
Filesystem view of a records directory.

``RecordStore`` is the only place that enumerates record directories, so
every operation agrees on what counts as a record: a sub-directory of the
records directory other than the reserved template.  Enumeration is sorted
lexicographically, which on zero-padded prefixes equals creation order.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from provcode.core.errors import RecordNotFoundError, UsageError
from provcode.core.identifiers import DEFAULT_WIDTH, next_identifier, split_identifier
from provcode.core.models import RecordLayout, RecordStatus

if TYPE_CHECKING:
    from provcode.core.config import ProvcodeSettings


@dataclass
class RecordStore:
    """Records directory plus the conventions used to read it.

    Attributes:
        records_dir: Directory holding one sub-directory per record
        template_name: Reserved prototype directory name
        layout: File names inside each record
        id_width: Zero-padding width for new identifiers
        default_status: Status written into new records
    """

    records_dir: Path
    template_name: str = "TEMPLATE"
    layout: RecordLayout = field(default_factory=RecordLayout)
    id_width: int = DEFAULT_WIDTH
    default_status: str = RecordStatus.PROPOSED.value

    @classmethod
    def from_settings(cls, settings: ProvcodeSettings) -> RecordStore:
        layout = RecordLayout(
            narrative_file=settings.narrative_file,
            structured_file=settings.structured_file,
            provenance_file=settings.provenance_file,
            manifest_file=settings.manifest_file,
            evidence_dir=settings.evidence_dir,
        )
        return cls(
            records_dir=settings.records_path,
            template_name=settings.template_name,
            layout=layout,
            id_width=settings.id_width,
            default_status=settings.default_status,
        )

    @property
    def template_dir(self) -> Path:
        return self.records_dir / self.template_name

    def exists(self) -> bool:
        return self.records_dir.is_dir()

    def dir_names(self) -> list[str]:
        """Sorted names of all record directories, template excluded."""
        if not self.exists():
            return []
        return sorted(
            entry.name
            for entry in self.records_dir.iterdir()
            if entry.is_dir() and entry.name != self.template_name
        )

    def iter_records(self) -> Iterator[Path]:
        for name in self.dir_names():
            yield self.records_dir / name

    def record_ids(self) -> set[str]:
        return set(self.dir_names())

    def path_for(self, record_id: str) -> Path:
        return self.records_dir / record_id

    def resolve(self, record_id: str) -> Path:
        """Return the directory of an existing record.

        Raises:
            UsageError: *record_id* names the template or a nested path.
            RecordNotFoundError: No such record directory.
        """
        if (
            record_id in ("", ".", "..", self.template_name)
            or Path(record_id).name != record_id
        ):
            raise UsageError(f"Not a record identifier: {record_id!r}")
        path = self.path_for(record_id)
        if not path.is_dir():
            raise RecordNotFoundError(f"Record not found: {record_id}").with_context(
                record_id=record_id, path=path
            )
        return path

    def find_by_slug(self, slug: str) -> str | None:
        """Return the identifier of the record using *slug*, if any."""
        for name in self.dir_names():
            parts = split_identifier(name)
            if parts is not None and parts[1] == slug:
                return name
        return None

    def next_identifier(self) -> str:
        return next_identifier(self.dir_names(), width=self.id_width)
