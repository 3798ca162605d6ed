"""
Module: core.errors

Purpose:
    Base exception hierarchy shared by every layer of the toolkit.

Key Classes:
    - ComposeError: Root of all toolkit errors
    - ValidationError: Structurally invalid input (fails fast)

Used By:
    - core.models: Construction-time validation
    - core.schemas.validator: Schema validation
    - composer.controller: Value-returned error results
"""

from __future__ import annotations


class ComposeError(Exception):
    """Root of all errors raised or returned by the toolkit."""


class ValidationError(ComposeError):
    """
    Raised when input is structurally impossible.

    Examples are an empty chapter scope, a negative attempt count or a
    request that fails schema validation. Nothing is composed when this
    error is produced.

    Attributes:
        path: Dotted path to the offending field ("" for the whole object)
        errors: Individual error messages
    """

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or [message]
