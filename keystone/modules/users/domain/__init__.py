"""
Domain Models

Pure data models, errors and contracts for the user entity.
"""

from .user import User, Role
from .pagination import Page, PaginationParams, MAX_PER_PAGE
from .tokens import Claims, TokenPair
from .repository import UserRepository
from .errors import (
    DomainError,
    ValidationError,
    NotFoundError,
    ConflictError,
    UnauthorizedError,
    ForbiddenError,
    InternalError,
)

__all__ = [
    "User",
    "Role",
    "Page",
    "PaginationParams",
    "MAX_PER_PAGE",
    "Claims",
    "TokenPair",
    "UserRepository",
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "UnauthorizedError",
    "ForbiddenError",
    "InternalError",
]
