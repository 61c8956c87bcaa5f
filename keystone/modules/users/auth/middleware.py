"""
Authentication Middleware

FastAPI dependencies for bearer-token authentication and user context.
"""
import logging
import uuid
from typing import Callable, Optional

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from keystone.modules.dependencies import get_token_service, get_user_service
from keystone.modules.users.domain.errors import ForbiddenError, NotFoundError, UnauthorizedError
from keystone.modules.users.domain.tokens import Claims
from keystone.modules.users.domain.user import Role, User
from keystone.modules.users.services.ports import TokenService
from keystone.modules.users.services.user_service import UserService

logger = logging.getLogger("keystone.users.auth")

# auto_error=False so a missing header and a wrong scheme can be told apart
bearer_scheme = HTTPBearer(auto_error=False, description="JWT from POST /auth/login")


async def get_current_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    token_service: TokenService = Depends(get_token_service),
) -> Claims:
    """
    FastAPI dependency validating the Authorization header.

    Raises UnauthorizedError if the header is missing, malformed, or the
    token is invalid or expired.
    """
    if credentials is None:
        if not request.headers.get("Authorization"):
            raise UnauthorizedError("Missing Authorization header")
        raise UnauthorizedError("Invalid Authorization header format. Use: Bearer <token>")

    claims = token_service.validate(credentials.credentials)
    request.state.claims = claims
    logger.debug(f"Authenticated request for user {claims.sub}")
    return claims


async def get_current_user(
    claims: Claims = Depends(get_current_claims),
    user_service: UserService = Depends(get_user_service),
) -> User:
    """
    FastAPI dependency resolving the token subject to a stored user.
    """
    try:
        user_id = uuid.UUID(claims.sub)
    except ValueError:
        raise UnauthorizedError("Invalid user ID in token")

    user = await user_service.get_user(user_id)
    if user is None:
        raise NotFoundError("User", claims.sub, "Current user not found")
    return user


def require_role(*roles: Role) -> Callable:
    """
    Dependency factory for role-based access control.

    Usage:
        @router.get("/admin-only", dependencies=[Depends(require_role(Role.ADMIN))])
    """
    if not roles:
        raise ValueError("require_role needs at least one role")

    async def role_checker(claims: Claims = Depends(get_current_claims)) -> Claims:
        if not any(claims.has_role(role.value) for role in roles):
            wanted = "' or '".join(role.value for role in roles)
            logger.info(f"User {claims.sub} denied: requires role '{wanted}'")
            raise ForbiddenError(f"Required role '{wanted}' not found")
        return claims

    return role_checker


require_admin = require_role(Role.ADMIN)
