"""
provcode — lifecycle manager for decision records.

Scaffolds numbered record directories from a template, validates them
against a JSON-Schema subset plus review heuristics, and lists them with
their status.

Example:
    >>> from provcode.core import RecordStore, create_record
    >>> from pathlib import Path
    >>> store = RecordStore(Path("records"))
    >>> create_record(store, "Use PostgreSQL").record_id
    '001-use-postgresql'
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
