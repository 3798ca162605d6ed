"""
Schema Validation Utilities

Validates JSON data (question bank records, composition requests)
against the bundled JSON schemas.

Basic structural checks always run and give targeted messages; full
jsonschema validation runs in strict mode. Both fail fast with a
ValidationError carrying the offending path.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from ..errors import ValidationError


# Schema version constants
QUESTION_SCHEMA_VERSION = 1
REQUEST_SCHEMA_VERSION = 1


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


def _check_version(data: dict[str, Any], expected: int) -> None:
    if "schema_version" not in data:
        return
    version = data["schema_version"]
    if version != expected:
        raise ValidationError(
            f"Unsupported schema version: {version} (expected {expected})",
            path="schema_version",
        )


def _validate_schema(data: dict[str, Any], name: str) -> None:
    """Run full jsonschema validation, collecting every error."""
    schema = _load_schema(name)
    validator = jsonschema.Draft7Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))
    if errors:
        first = errors[0]
        raise ValidationError(
            f"Schema validation failed: {first.message}",
            path=".".join(str(p) for p in first.absolute_path),
            errors=[e.message for e in errors],
        )


def validate_question(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a question bank record.

    Args:
        data: Question dictionary to validate
        strict: If True, also run full jsonschema validation

    Raises:
        ValidationError: If data is invalid
    """
    required = ["id", "question_type", "subject_id", "chapter_id"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing],
        )
    _check_version(data, QUESTION_SCHEMA_VERSION)

    options = data.get("options", [])
    if not isinstance(options, list) or len(options) > 4:
        raise ValidationError(
            f"Question {data['id']}: options must be a list of at most 4",
            path="options",
        )

    if strict:
        _validate_schema(data, "question")


def validate_request(data: dict[str, Any], *, strict: bool = True) -> None:
    """
    Validate a composition request payload.

    Args:
        data: Request dictionary to validate
        strict: If True, also run full jsonschema validation

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Request must be a JSON object")

    required = ["subject_id", "layout", "types"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing],
        )
    _check_version(data, REQUEST_SCHEMA_VERSION)

    if "chapters" not in data and "coverage" not in data:
        raise ValidationError(
            "Request needs either 'chapters' or 'coverage'", path="chapters"
        )

    types = data.get("types")
    if not isinstance(types, dict):
        raise ValidationError("types must be an object", path="types")
    for qtype, entry in types.items():
        if not isinstance(entry, dict):
            raise ValidationError(f"types.{qtype} must be an object", path=f"types.{qtype}")
        for key in ("total", "attempt"):
            value = entry.get(key)
            if isinstance(value, int) and value < 0:
                raise ValidationError(
                    f"types.{qtype}.{key} cannot be negative: {value}",
                    path=f"types.{qtype}.{key}",
                )

    if strict:
        _validate_schema(data, "request")
