"""
Service Ports

Contracts the use cases depend on; implemented in keystone.modules.users.auth.
"""
from abc import ABC, abstractmethod

from keystone.modules.users.domain.tokens import Claims, TokenPair
from keystone.modules.users.domain.user import User


class PasswordHasher(ABC):

    @abstractmethod
    def hash(self, password: str) -> str:
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        """Return False on mismatch; raise InternalError on a corrupt hash."""
        pass


class TokenService(ABC):

    @abstractmethod
    def generate(self, user: User) -> TokenPair:
        pass

    @abstractmethod
    def validate(self, token: str) -> Claims:
        """Raise UnauthorizedError for any token that can't be trusted."""
        pass
