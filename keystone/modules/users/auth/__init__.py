"""
Authentication and Authorization Module

Provides:
- Argon2 password hashing
- JWT issuance and validation
- Authentication dependencies
- Role-based access control (RBAC)
"""

from .passwords import Argon2PasswordHasher
from .tokens import JwtConfig, JwtTokenService
from .middleware import get_current_claims, get_current_user, require_role, require_admin
from .permissions import check_permission, require_permission

__all__ = [
    "Argon2PasswordHasher",
    "JwtConfig",
    "JwtTokenService",
    "get_current_claims",
    "get_current_user",
    "require_role",
    "require_admin",
    "check_permission",
    "require_permission",
]
