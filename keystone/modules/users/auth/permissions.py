"""
Permission and RBAC Utilities

Maps roles to named permissions.
"""
import logging
from typing import Callable, Dict, FrozenSet

from fastapi import Depends

from keystone.modules.users.auth.middleware import get_current_claims
from keystone.modules.users.domain.errors import ForbiddenError
from keystone.modules.users.domain.tokens import Claims
from keystone.modules.users.domain.user import Role

logger = logging.getLogger("keystone.users.permissions")

USERS_READ = "users:read"
SYSTEM_READ = "system:read"
SYSTEM_MIGRATE = "system:migrate"

ROLE_PERMISSIONS: Dict[Role, FrozenSet[str]] = {
    Role.ADMIN: frozenset({USERS_READ, SYSTEM_READ, SYSTEM_MIGRATE}),
    Role.USER: frozenset({USERS_READ}),
}


def check_permission(claims: Claims, permission: str) -> bool:
    """
    True if any of the token's roles grants the permission. Unknown role
    names grant nothing.
    """
    for role_name in claims.roles:
        try:
            role = Role(role_name)
        except ValueError:
            continue
        if permission in ROLE_PERMISSIONS.get(role, frozenset()):
            return True
    return False


def require_permission(permission: str) -> Callable:
    """
    FastAPI dependency factory requiring a specific permission.
    """

    async def permission_checker(claims: Claims = Depends(get_current_claims)) -> Claims:
        if not check_permission(claims, permission):
            logger.info(f"User {claims.sub} denied: missing permission '{permission}'")
            raise ForbiddenError(f"Permission '{permission}' required")
        return claims

    return permission_checker
