"""
provcode core — record allocation, scaffolding, validation and listing.

Nothing in this package writes to the console; every operation returns a
report object that the CLI renders.

Architecture::

    errors.py          ProvcodeError hierarchy
    logging.py         structlog configuration
    config/            ProvcodeSettings + provcode.yaml loader
    models.py          RecordStatus, RecordLayout
    store.py           RecordStore (records directory view)
    identifiers.py     next_identifier, slugify, title_from_slug
    materializer.py    create_record, materialize
    schema_rules.py    compile_schema, evaluate, load_schema
    validator.py       validate_record, validate_all
    lister.py          list_records
"""

from provcode.core.errors import (
    AlreadyExistsError,
    ConfigError,
    ErrorCategory,
    ErrorContext,
    NotFoundError,
    ProvcodeError,
    RecordNotFoundError,
    SchemaError,
    TemplateMissingError,
    UsageError,
)
from provcode.core.identifiers import next_identifier, slugify, title_from_slug
from provcode.core.lister import RecordEntry, list_records
from provcode.core.materializer import (
    MaterializeContext,
    MaterializeReport,
    Substitution,
    create_record,
    default_substitutions,
    materialize,
)
from provcode.core.models import RecordLayout, RecordStatus
from provcode.core.schema_rules import CompiledSchema, compile_schema, evaluate, load_schema
from provcode.core.store import RecordStore
from provcode.core.validator import (
    BatchReport,
    Diagnostic,
    Severity,
    ValidationReport,
    validate_all,
    validate_record,
)

__all__ = [
    # Errors
    "ErrorCategory",
    "ErrorContext",
    "ProvcodeError",
    "UsageError",
    "NotFoundError",
    "RecordNotFoundError",
    "TemplateMissingError",
    "AlreadyExistsError",
    "ConfigError",
    "SchemaError",
    # Records
    "RecordStatus",
    "RecordLayout",
    "RecordStore",
    "RecordEntry",
    "list_records",
    # Identifiers
    "next_identifier",
    "slugify",
    "title_from_slug",
    # Materializer
    "Substitution",
    "MaterializeContext",
    "MaterializeReport",
    "default_substitutions",
    "materialize",
    "create_record",
    # Validation
    "CompiledSchema",
    "compile_schema",
    "evaluate",
    "load_schema",
    "Severity",
    "Diagnostic",
    "ValidationReport",
    "BatchReport",
    "validate_record",
    "validate_all",
]
