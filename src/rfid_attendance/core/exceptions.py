from __future__ import annotations

from .enums import TapCode


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class UidRejectedError(ValidationError):
    """Raised when a scanned identifier cannot be turned into a canonical UID."""

    def __init__(self, code: TapCode, message: str):
        super().__init__(message)
        self.code = code


class DuplicateError(ValidationError):
    """Raised when a unique field (uid, email) is already taken."""

    def __init__(self, field: str, value: object = None):
        super().__init__(f"{field} already exists")
        self.field = field
        self.value = value


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""
