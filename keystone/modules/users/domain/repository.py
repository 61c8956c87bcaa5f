"""
User Repository Contract

The application layer depends on this interface; the PostgreSQL adapter
lives in keystone.modules.users.repositories.
"""
import uuid
from abc import ABC, abstractmethod
from typing import Optional

from keystone.modules.users.domain.pagination import Page, PaginationParams
from keystone.modules.users.domain.user import User


class UserRepository(ABC):
    """Persistence port for users."""

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Persist a new user and return the stored row.

        Raises ConflictError when the email is already taken.
        """
        pass

    @abstractmethod
    async def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    async def list(self, params: PaginationParams) -> Page[User]:
        """Return one page ordered newest first."""
        pass

    @abstractmethod
    async def count(self) -> int:
        pass
