from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, *, row_number: Optional[int] = None):
        super().__init__(message)
        self.row_number = row_number


class InvalidFormatError(ValidationError):
    """Raised when a date/time/month value cannot be normalized."""


class ParseError(DomainError):
    """Raised (or collected) when a CSV line does not match the header shape."""

    def __init__(self, message: str, *, line_number: int, raw_line: str = ""):
        super().__init__(message)
        self.line_number = line_number
        self.raw_line = raw_line


class PersistenceError(DomainError):
    """Raised when the backing store fails to read or write."""


class ConflictError(DomainError):
    """Raised when a write collides with an existing natural key."""


class NotFoundError(DomainError):
    """Raised when a requested record does not exist."""
