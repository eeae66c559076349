"""Record documents and constants shared across test modules."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

FIXED_NOW = datetime(2026, 3, 14, 9, 26, 53, tzinfo=timezone.utc)

FULL_PROVENANCE = {"@context": {"prov": "http://www.w3.org/ns/prov#"}, "@graph": []}
FULL_MANIFEST = {"claim_generator": "provcode"}


def complete_document(record_id: str, **overrides: Any) -> dict[str, Any]:
    """A structured document that passes every check without warnings."""
    data: dict[str, Any] = {
        "id": record_id,
        "title": "Use PostgreSQL for persistence",
        "status": "accepted",
        "date": "2026-01-15",
        "context": {
            "problem": "We need a relational store with strong consistency guarantees and mature tooling.",
        },
        "decision": {"summary": "Adopt PostgreSQL 16 as the primary database."},
        "consequences": {
            "positive": ["Mature ecosystem"],
            "negative": ["Operational overhead of running a database"],
        },
        "alternatives": [{"name": "MySQL"}],
        "evidence": {"files": ["benchmark.csv"]},
    }
    data.update(overrides)
    return data
