"""
Structured logging for provcode.

Logs are diagnostic only: user-facing reports are rendered by the CLI, so
everything here goes to stderr through the stdlib root handler and is
filtered by level before rendering.

Configuration is read from arguments or environment:
- PROVCODE_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR (default: WARNING)
- PROVCODE_LOG_FORMAT: json | console (default: console)

Usage:
    from provcode.core.logging import configure_logging, get_logger

    configure_logging(level="DEBUG")
    log = get_logger(__name__)
    log.info("record_created", record_id="001-use-postgresql")
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

_SERVICE_NAME = "provcode"

# Track if logging has been configured
_configured = False


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service", _SERVICE_NAME)
    return event_dict


def configure_logging(
    level: str | None = None,
    format: str | None = None,
    force: bool = False,
) -> None:
    """Configure structured logging for the application.

    Subsequent calls are no-ops unless ``force=True``; the CLI forces a
    reconfiguration on every invocation so ``--log-level`` always applies.

    Args:
        level: Log level (overrides PROVCODE_LOG_LEVEL)
        format: ``json`` or ``console`` (overrides PROVCODE_LOG_FORMAT)
        force: Reconfigure even if already configured
    """
    global _configured

    if _configured and not force:
        return

    log_level = (level or os.environ.get("PROVCODE_LOG_LEVEL", "WARNING")).upper()
    log_format = (format or os.environ.get("PROVCODE_LOG_FORMAT", "console")).lower()
    level_num = getattr(logging, log_level, logging.WARNING)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_service_metadata,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level_num,
        force=True,
    )
    logging.getLogger("provcode").setLevel(level_num)

    _configured = True


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger.

    Args:
        name: Logger name (usually __name__)
    """
    return structlog.get_logger(name)


def is_configured() -> bool:
    """Check if logging has been configured."""
    return _configured


__all__ = [
    "configure_logging",
    "get_logger",
    "is_configured",
]
