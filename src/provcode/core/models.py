"""
Shared domain types: record status and on-disk layout.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RecordStatus(str, Enum):
    """Lifecycle status of a decision record.

    Transitions are never automatic; status changes are hand edits.
    Superseded and deprecated records are kept and linked by identifier.
    """

    PROPOSED = "proposed"
    ACCEPTED = "accepted"
    IMPLEMENTED = "implemented"
    DEPRECATED = "deprecated"
    SUPERSEDED = "superseded"
    REJECTED = "rejected"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value: object) -> RecordStatus | None:
        """Return the matching status, or None for anything else."""
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                return None
        return None


@dataclass(frozen=True)
class RecordLayout:
    """File names making up a record directory.

    Attributes:
        narrative_file: Free-text narrative (required)
        structured_file: Structured JSON document (required)
        provenance_file: Provenance graph, JSON-LD (optional)
        manifest_file: Authenticity manifest (optional)
        evidence_dir: Directory of supporting files (optional)
    """

    narrative_file: str = "narrative.md"
    structured_file: str = "structured.json"
    provenance_file: str = "provenance.jsonld"
    manifest_file: str = "manifest.json"
    evidence_dir: str = "evidence"

    @property
    def required_files(self) -> tuple[str, ...]:
        return (self.structured_file, self.narrative_file)

    @property
    def optional_files(self) -> tuple[str, ...]:
        return (self.provenance_file, self.manifest_file)

    @property
    def text_files(self) -> tuple[str, ...]:
        """Files that receive placeholder substitution after a copy."""
        return (
            self.structured_file,
            self.provenance_file,
            self.manifest_file,
            self.narrative_file,
        )
