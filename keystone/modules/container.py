"""
Application Container

Wires adapters into use cases once per app. Route modules reach the
services through keystone.modules.dependencies.
"""
import logging
from typing import Optional

from keystone.core.settings import Settings
from keystone.modules.audit_manager import AuditManager, NullAuditManager
from keystone.modules.users.auth.passwords import Argon2PasswordHasher
from keystone.modules.users.auth.tokens import JwtConfig, JwtTokenService
from keystone.modules.users.domain.repository import UserRepository
from keystone.modules.users.repositories.user_repository import PostgresUserRepository
from keystone.modules.users.services.auth_service import AuthService
from keystone.modules.users.services.ports import PasswordHasher, TokenService
from keystone.modules.users.services.user_service import UserService
from keystone.services.database.connection_manager import ConnectionManager

logger = logging.getLogger("keystone.container")


class Container:
    """Shared service instances for one application."""

    def __init__(
        self,
        settings: Settings,
        user_repository: UserRepository,
        password_hasher: Optional[PasswordHasher] = None,
        token_service: Optional[TokenService] = None,
        audit=None,
        connection_manager: Optional[ConnectionManager] = None,
    ):
        self.settings = settings
        self.connection_manager = connection_manager
        self.user_repository = user_repository
        self.password_hasher = password_hasher or Argon2PasswordHasher()
        self.token_service = token_service or JwtTokenService(JwtConfig.from_settings(settings))
        self.audit = audit or NullAuditManager()

        self.user_service = UserService(user_repository)
        self.auth_service = AuthService(
            repository=user_repository,
            password_hasher=self.password_hasher,
            token_service=self.token_service,
            audit=self.audit,
        )

    @classmethod
    def build(cls, settings: Settings) -> "Container":
        """Production wiring: PostgreSQL repository and audit log."""
        connection_manager = ConnectionManager(settings.database_url)
        database = connection_manager.database
        logger.debug("Building container with PostgreSQL adapters")
        return cls(
            settings=settings,
            user_repository=PostgresUserRepository(database),
            audit=AuditManager(database),
            connection_manager=connection_manager,
        )
