"""
Record Lister — enumerate records with identifier, title and status.

Entries come back sorted by directory name.  A record whose structured
document is missing or unreadable is still listed, with only its
directory name.  The template prototype is never listed.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from provcode.core.identifiers import parse_sequence
from provcode.core.logging import get_logger
from provcode.core.store import RecordStore

logger = get_logger(__name__)


@dataclass(frozen=True)
class RecordEntry:
    """One line of the record listing.

    ``readable`` is False when the structured document could not be read;
    ``record_id``, ``title`` and ``status`` are then None.
    """

    dir_name: str
    record_id: str | None = None
    title: str | None = None
    status: str | None = None
    readable: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def read_entry(path: Path, structured_file: str) -> RecordEntry:
    """Build the listing entry for one record directory."""
    structured = path / structured_file
    if not structured.is_file():
        return RecordEntry(dir_name=path.name)

    try:
        data = json.loads(structured.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.debug("listing_parse_failed", record=path.name, error=str(e))
        return RecordEntry(dir_name=path.name)

    if not isinstance(data, dict):
        return RecordEntry(dir_name=path.name)

    def _text(key: str) -> str | None:
        value = data.get(key)
        return value if isinstance(value, str) else None

    return RecordEntry(
        dir_name=path.name,
        record_id=_text("id"),
        title=_text("title"),
        status=_text("status"),
        readable=True,
    )


def list_records(store: RecordStore, *, include_unnumbered: bool = False) -> list[RecordEntry]:
    """List the records in *store*.

    Args:
        store: Records directory to enumerate
        include_unnumbered: Also list directories without a ``NNN-`` prefix
    """
    entries: list[RecordEntry] = []
    structured_file = store.layout.structured_file

    for path in store.iter_records():
        if not include_unnumbered and parse_sequence(path.name) is None:
            continue
        entries.append(read_entry(path, structured_file))

    logger.debug("records_listed", count=len(entries), records_dir=str(store.records_dir))
    return entries
