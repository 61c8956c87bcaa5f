"""
Domain Errors

Errors raised by the domain and application layers. The API layer maps
each class to an HTTP status in one place (keystone.modules.errors).
"""
from typing import Optional


class DomainError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Input failed a business rule."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""

    def __init__(self, entity: str, key: str, message: Optional[str] = None):
        super().__init__(message or f"{entity} with id {key} not found")
        self.entity = entity
        self.key = key


class ConflictError(DomainError):
    """Entity already exists (e.g. duplicate email)."""


class UnauthorizedError(DomainError):
    """Missing or invalid credentials."""


class ForbiddenError(DomainError):
    """Authenticated, but not allowed."""


class InternalError(DomainError):
    """Unexpected failure in an adapter."""
