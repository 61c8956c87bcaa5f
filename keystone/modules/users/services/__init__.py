"""
Business Logic Services

Use cases orchestrating the domain contracts.
"""

from .user_service import UserService
from .auth_service import AuthService
from .ports import PasswordHasher, TokenService

__all__ = [
    "UserService",
    "AuthService",
    "PasswordHasher",
    "TokenService",
]
