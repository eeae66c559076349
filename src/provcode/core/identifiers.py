"""
Identifier allocation and name handling for record directories.

A record directory is named ``<sequence>-<slug>`` where the sequence is a
zero-padded decimal.  Allocation is a pure function of the directory
listing; collisions between concurrent invocations are caught later by the
materializer, which refuses to write into an existing directory.

Example::

    >>> next_identifier({"001-use-postgresql", "002-jwt-auth", "TEMPLATE"})
    '003'
    >>> slugify("Use PostgreSQL!")
    'use-postgresql'
    >>> title_from_slug("use-postgresql")
    'Use Postgresql'
"""

from __future__ import annotations

import re
from collections.abc import Iterable

_SEQUENCE_RE = re.compile(r"^(\d+)-")
_WHITESPACE_RE = re.compile(r"\s+")
_INVALID_RE = re.compile(r"[^a-z0-9-]")
_HYPHENS_RE = re.compile(r"-{2,}")

DEFAULT_WIDTH = 3


def parse_sequence(name: str) -> int | None:
    """Return the numeric prefix of a record directory name, if any."""
    match = _SEQUENCE_RE.match(name)
    if not match:
        return None
    return int(match.group(1))


def split_identifier(name: str) -> tuple[int, str] | None:
    """Split ``"007-use-redis"`` into ``(7, "use-redis")``."""
    sequence = parse_sequence(name)
    if sequence is None:
        return None
    return sequence, name.split("-", 1)[1]


def next_identifier(existing_names: Iterable[str], width: int = DEFAULT_WIDTH) -> str:
    """Compute the next sequential identifier.

    Names without a numeric prefix (the template included) are ignored.
    The result is strictly greater than every parsed number, zero-padded
    to *width*; numbers that outgrow the width are not truncated.
    """
    numbers = [n for n in (parse_sequence(name) for name in existing_names) if n is not None]
    return str(max(numbers, default=0) + 1).zfill(width)


def slugify(name: str) -> str:
    """Lowercase, hyphen-separated, alphanumeric-only form of *name*."""
    slug = _WHITESPACE_RE.sub("-", name.strip().lower())
    slug = _INVALID_RE.sub("", slug)
    slug = _HYPHENS_RE.sub("-", slug)
    return slug.strip("-")


def title_from_slug(slug: str) -> str:
    """Human-readable title: split on hyphens, capitalize each word."""
    return " ".join(word[:1].upper() + word[1:] for word in slug.split("-") if word)


def format_identifier(sequence: str, slug: str) -> str:
    return f"{sequence}-{slug}"
