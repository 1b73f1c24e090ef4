from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ConflictError(DomainError):
    """Raised when a unique key (file number, phone number) is already taken."""


class NotFoundError(DomainError):
    """Raised when a record does not exist or is not visible to the actor."""


class AuthenticationError(DomainError):
    """Raised when credentials or the session token are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class AdminRequiredError(AuthorizationError):
    """Raised when an admin-only listing is requested by a non-admin."""
