"""
User Service

Read-side use cases: lookup by id and paginated listing.
"""
import logging
import uuid
from typing import Optional

from keystone.modules.users.domain.pagination import Page, PaginationParams
from keystone.modules.users.domain.repository import UserRepository
from keystone.modules.users.domain.user import User

logger = logging.getLogger("keystone.users.service")


class UserService:
    """Service for user queries."""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def get_user(self, user_id: uuid.UUID) -> Optional[User]:
        logger.debug(f"[UserService.get_user] user_id={user_id}")
        return await self.repository.find_by_id(user_id)

    async def list_users(self, params: PaginationParams) -> Page[User]:
        logger.debug(f"[UserService.list_users] page={params.page}, per_page={params.per_page}")
        return await self.repository.list(params)
