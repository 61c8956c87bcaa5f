"""
JWT Token Service

Issues and validates HS256 access tokens with PyJWT.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt

from keystone.core.settings import Settings
from keystone.modules.users.domain.errors import UnauthorizedError
from keystone.modules.users.domain.tokens import Claims, TokenPair
from keystone.modules.users.domain.user import User
from keystone.modules.users.services.ports import TokenService

logger = logging.getLogger("keystone.users.tokens")

REQUIRED_CLAIMS = ["sub", "exp", "iat"]


class JwtConfig:
    """Signing configuration."""

    def __init__(self, secret: str, expiration_hours: int = 24, algorithm: str = "HS256"):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self.secret = secret
        self.expiration_hours = expiration_hours
        self.algorithm = algorithm

    @classmethod
    def from_settings(cls, settings: Settings) -> "JwtConfig":
        return cls(
            secret=settings.jwt_secret,
            expiration_hours=settings.jwt_expiration_hours,
            algorithm=settings.jwt_algorithm,
        )

    @property
    def expires_in(self) -> int:
        return self.expiration_hours * 3600


class JwtTokenService(TokenService):

    def __init__(self, config: JwtConfig):
        self.config = config

    def generate(self, user: User) -> TokenPair:
        now = datetime.now(timezone.utc)
        exp = now + timedelta(seconds=self.config.expires_in)

        payload: Dict[str, Any] = {
            "sub": str(user.id),
            "email": user.email,
            "roles": [user.role.value],
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        token = jwt.encode(payload, self.config.secret, algorithm=self.config.algorithm)
        return TokenPair(access_token=token, expires_in=self.config.expires_in)

    def validate(self, token: str) -> Claims:
        try:
            payload = jwt.decode(
                token,
                self.config.secret,
                algorithms=[self.config.algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError:
            raise UnauthorizedError("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected token: {e}")
            raise UnauthorizedError("Invalid token")

        roles = payload.get("roles") or []
        if not isinstance(roles, list):
            raise UnauthorizedError("Invalid token")

        return Claims(
            sub=str(payload["sub"]),
            email=str(payload.get("email", "")),
            roles=[str(r) for r in roles],
            iat=int(payload["iat"]),
            exp=int(payload["exp"]),
        )
