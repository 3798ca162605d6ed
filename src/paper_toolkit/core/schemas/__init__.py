"""
Schemas Package

JSON schema definitions and validation utilities.
"""

from .validator import (
    validate_question,
    validate_request,
    ValidationError,
    QUESTION_SCHEMA_VERSION,
    REQUEST_SCHEMA_VERSION,
)

__all__ = [
    "validate_question",
    "validate_request",
    "ValidationError",
    "QUESTION_SCHEMA_VERSION",
    "REQUEST_SCHEMA_VERSION",
]
