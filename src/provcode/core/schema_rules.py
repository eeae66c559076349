"""Schema-subset rules — a restricted JSON Schema as tagged rule objects.

Only the constraints below are understood; anything else in a schema file
is ignored.  This is not full JSON Schema compliance.

    JSON Schema keyword         Rule variant
    ───────────────────         ────────────
    required: [...]             RequiredField
    type: "string" | [...]      TypeCheck
    enum: [...]                 EnumCheck
    minLength / maxLength       StringLength
    pattern                     Pattern
    minItems                    MinItems
    properties (type=object)    NestedObject (recursive)

``compile_schema`` turns the mapping into a flat rule list per level and
``evaluate`` is the single recursive interpreter.  Errors name fields by
dotted path (``consequences.positive``).

Example::

    schema = compile_schema({
        "required": ["status"],
        "properties": {"status": {"type": "string", "enum": ["proposed"]}},
    })
    evaluate(schema.rules, {"status": "draft"})
    # ['Field status: must be one of proposed']
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from provcode.core.errors import SchemaError
from provcode.core.logging import get_logger

logger = get_logger(__name__)

JSON_TYPES = ("string", "number", "integer", "boolean", "object", "array", "null")


def json_type_of(value: Any) -> str:
    """Name the JSON type of a decoded value (integers report ``integer``)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _matches_type(value: Any, expected: str) -> bool:
    actual = json_type_of(value)
    if expected == "number":
        return actual in ("number", "integer")
    return actual == expected


# ---------------------------------------------------------------------------
# Rule variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RequiredField:
    field: str


@dataclass(frozen=True)
class TypeCheck:
    field: str
    types: tuple[str, ...]


@dataclass(frozen=True)
class EnumCheck:
    field: str
    allowed: tuple[Any, ...]


@dataclass(frozen=True)
class StringLength:
    field: str
    min_length: int | None = None
    max_length: int | None = None


@dataclass(frozen=True)
class Pattern:
    field: str
    pattern: str


@dataclass(frozen=True)
class MinItems:
    field: str
    minimum: int


@dataclass(frozen=True)
class NestedObject:
    field: str
    rules: tuple[Rule, ...]


Rule = Union[RequiredField, TypeCheck, EnumCheck, StringLength, Pattern, MinItems, NestedObject]


@dataclass(frozen=True)
class CompiledSchema:
    """Top-level rule list plus where it came from."""

    rules: tuple[Rule, ...]
    source: Path | None = None

    def evaluate(self, data: Any) -> list[str]:
        return evaluate(self.rules, data)


# ---------------------------------------------------------------------------
# Compilation
# ---------------------------------------------------------------------------

def compile_schema(schema: Any, *, source: Path | None = None) -> CompiledSchema:
    """Compile a JSON-Schema-like mapping into rules.

    Raises:
        SchemaError: The schema is not an object, a keyword has the wrong
            shape, or a ``pattern`` is not a valid regular expression.
    """
    try:
        rules = _compile_level(schema, path="")
    except SchemaError as e:
        if source is not None:
            e.with_context(path=source)
        raise
    return CompiledSchema(rules=rules, source=source)


def _compile_level(schema: Any, path: str) -> tuple[Rule, ...]:
    where = path or "<root>"
    if not isinstance(schema, dict):
        raise SchemaError(f"Schema at {where} must be an object").with_context(field=path or None)

    rules: list[Rule] = []

    required = schema.get("required", [])
    if not isinstance(required, list) or not all(isinstance(r, str) for r in required):
        raise SchemaError(f"'required' at {where} must be a list of strings").with_context(
            field=path or None
        )
    rules.extend(RequiredField(name) for name in required)

    properties = schema.get("properties", {})
    if not isinstance(properties, dict):
        raise SchemaError(f"'properties' at {where} must be an object").with_context(
            field=path or None
        )
    for name, prop in properties.items():
        rules.extend(_compile_property(name, prop, _join(path, name)))

    return tuple(rules)


def _compile_property(name: str, prop: Any, path: str) -> list[Rule]:
    if not isinstance(prop, dict):
        raise SchemaError(f"Property {path} must be an object").with_context(field=path)

    rules: list[Rule] = []

    raw_type = prop.get("type")
    types: tuple[str, ...] = ()
    if raw_type is not None:
        types = tuple(raw_type) if isinstance(raw_type, list) else (raw_type,)
        unknown = [t for t in types if t not in JSON_TYPES]
        if unknown:
            raise SchemaError(
                f"Property {path}: unknown type {', '.join(map(str, unknown))}"
            ).with_context(field=path)
        rules.append(TypeCheck(name, types))

    if "enum" in prop:
        if not isinstance(prop["enum"], list):
            raise SchemaError(f"Property {path}: 'enum' must be a list").with_context(field=path)
        rules.append(EnumCheck(name, tuple(prop["enum"])))

    min_length = prop.get("minLength")
    max_length = prop.get("maxLength")
    if min_length is not None or max_length is not None:
        rules.append(StringLength(name, min_length, max_length))

    if "pattern" in prop:
        try:
            re.compile(prop["pattern"])
        except (re.error, TypeError) as e:
            raise SchemaError(
                f"Property {path}: invalid pattern {prop['pattern']!r}", cause=e
            ).with_context(field=path)
        rules.append(Pattern(name, prop["pattern"]))

    if prop.get("minItems") is not None:
        rules.append(MinItems(name, prop["minItems"]))

    if "object" in types and ("properties" in prop or "required" in prop):
        rules.append(NestedObject(name, _compile_level(prop, path)))

    return rules


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

def evaluate(rules: tuple[Rule, ...] | list[Rule], data: Any, prefix: str = "") -> list[str]:
    """Check *data* against *rules* and return error messages in rule order.

    Every rule except ``RequiredField`` applies only when its field is
    present; string, array and object rules apply only to values of that
    kind (a wrong kind is reported by ``TypeCheck``).
    """
    if not isinstance(data, dict):
        return [f"{prefix or 'Document'}: expected type object, got {json_type_of(data)}"]

    errors: list[str] = []
    for rule in rules:
        path = _join(prefix, rule.field)
        if isinstance(rule, RequiredField):
            if rule.field not in data:
                errors.append(f"Missing required field: {path}")
            continue
        if rule.field not in data:
            continue
        value = data[rule.field]

        match rule:
            case TypeCheck(types=types):
                if not any(_matches_type(value, t) for t in types):
                    errors.append(
                        f"Field {path}: expected type {' or '.join(types)}, got {json_type_of(value)}"
                    )
            case EnumCheck(allowed=allowed):
                if value not in allowed:
                    errors.append(f"Field {path}: must be one of {', '.join(map(str, allowed))}")
            case StringLength(min_length=min_length, max_length=max_length):
                if isinstance(value, str):
                    if min_length is not None and len(value) < min_length:
                        errors.append(f"Field {path}: minimum length is {min_length}")
                    if max_length is not None and len(value) > max_length:
                        errors.append(f"Field {path}: maximum length is {max_length}")
            case Pattern(pattern=pattern):
                if isinstance(value, str) and not re.search(pattern, value):
                    errors.append(f"Field {path}: does not match pattern {pattern}")
            case MinItems(minimum=minimum):
                if isinstance(value, list) and len(value) < minimum:
                    errors.append(f"Field {path}: minimum {minimum} items required")
            case NestedObject(rules=nested):
                if isinstance(value, dict):
                    errors.extend(evaluate(nested, value, path))

    return errors


def _join(prefix: str, name: str) -> str:
    return f"{prefix}.{name}" if prefix else name


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def load_schema(path: Path) -> CompiledSchema | None:
    """Load and compile a schema file.

    Returns None when the file does not exist; validation then degrades to
    heuristics only.

    Raises:
        SchemaError: The file is not valid JSON or not a valid schema.
    """
    if not path.is_file():
        logger.info("schema_missing", path=str(path))
        return None
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SchemaError(f"Invalid JSON in schema file: {e}", cause=e).with_context(path=path)
    schema = compile_schema(raw, source=path)
    logger.debug("schema_loaded", path=str(path), rules=len(schema.rules))
    return schema
