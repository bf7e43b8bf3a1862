"""Structured validation errors for fetched user payloads."""

from __future__ import annotations
from typing import Any


class ParsingError(Exception):
    """Base class for payload validation issues."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class PayloadShapeError(ParsingError):
    """Raised when the payload (or a nested object) is not the expected container type."""


class MissingFieldError(ParsingError):
    """Raised when a required field is absent from a record."""


class FieldTypeError(ParsingError):
    """Raised when a field is present but carries the wrong type."""


class DuplicateIdError(ParsingError):
    """Raised when two records share the same identifier."""
