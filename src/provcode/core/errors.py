"""
Structured error types for provcode.

Every failure the tool can raise is a ``ProvcodeError`` carrying a
category, a structured context (file path, field name, record id) and an
optional chained cause.  The CLI renders these uniformly and maps them to
exit code 1.

Manifesto:
    - **Typed Error Hierarchy:** One class per failure the user can act on
    - **Rich Context:** Errors name the file and field that caused them
    - **Error Chaining:** The original ``OSError`` / ``JSONDecodeError`` is
      kept as ``cause``

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                      ProvcodeError                          │
        │              (category, context, cause)                     │
        ├─────────────────────────────────────────────────────────────┤
        │  UsageError        NotFoundError          AlreadyExistsError│
        │  (USAGE)           (NOT_FOUND)            (CONFLICT)        │
        │                        │                                    │
        │                RecordNotFoundError                          │
        │                TemplateMissingError                         │
        │                                                             │
        │  ConfigError                                                │
        │  (CONFIG)                                                   │
        │      │                                                      │
        │  SchemaError                                                │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> err = RecordNotFoundError("Record not found: 007-x")
    >>> err.with_context(record_id="007-x").context.record_id
    '007-x'
    >>> err.category.value
    'NOT_FOUND'

Guardrails:
    ❌ DON'T: Raise bare ``Exception`` / ``ValueError`` from core modules
    ✅ DO: Raise the ``ProvcodeError`` subclass naming the failure

    ❌ DON'T: Drop the underlying exception
    ✅ DO: Pass it as ``cause=`` so the report can show it

Tags:
    error-handling, exception-hierarchy, error-context, provcode
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field as dataclass_field
from enum import Enum
from pathlib import Path
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories used for reporting."""

    USAGE = "USAGE"              # Malformed invocation, bad record name
    NOT_FOUND = "NOT_FOUND"      # Record or template directory absent
    CONFLICT = "CONFLICT"        # Target record already exists
    CONFIG = "CONFIG"            # Bad settings or schema description
    INTERNAL = "INTERNAL"        # Bugs, unexpected state


@dataclass
class ErrorContext:
    """Structured metadata attached to an error.

    Attributes:
        path: File or directory the error refers to
        field: Dotted field name inside a structured document
        record_id: Record identifier (directory name)
        metadata: Additional key-value pairs
    """

    path: str | None = None
    field: str | None = None
    record_id: str | None = None
    metadata: dict[str, Any] = dataclass_field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        for key in ["path", "field", "record_id"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class ProvcodeError(Exception):
    """
    Base exception for all provcode errors.

    Subclasses set ``default_category``; callers may still override it per
    instance.  ``with_context`` returns ``self`` so context can be attached
    fluently at the raise site.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> ProvcodeError:
        """Attach context fields; unknown keys go to ``metadata``."""
        for key, value in kwargs.items():
            if isinstance(value, Path):
                value = str(value)
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output and logging."""
        result: dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
            "category": self.category.value,
        }
        ctx = self.context.to_dict()
        if ctx:
            result["context"] = ctx
        if self.cause is not None:
            result["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return result

    def __str__(self) -> str:
        location = self.context.path or self.context.record_id
        if location and self.context.field:
            return f"{self.message} [{location}: {self.context.field}]"
        if location:
            return f"{self.message} [{location}]"
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class UsageError(ProvcodeError):
    """Malformed invocation: empty record name, missing target argument."""

    default_category = ErrorCategory.USAGE


class NotFoundError(ProvcodeError):
    """A referenced record, template or directory does not exist."""

    default_category = ErrorCategory.NOT_FOUND


class RecordNotFoundError(NotFoundError):
    """No record directory with the requested identifier."""


class TemplateMissingError(NotFoundError):
    """The reserved template directory is absent or not a directory."""


class AlreadyExistsError(ProvcodeError):
    """The target record directory (or its slug) is already taken.

    Raised before any copy happens, so a refused creation leaves the
    records directory untouched.
    """

    default_category = ErrorCategory.CONFLICT


class ConfigError(ProvcodeError):
    """Invalid settings or project configuration file."""

    default_category = ErrorCategory.CONFIG


class SchemaError(ConfigError):
    """The schema description cannot be loaded or compiled."""


__all__ = [
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
]
