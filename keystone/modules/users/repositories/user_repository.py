"""
User Repository

Handles all database operations for the users table.
"""
import logging
import uuid
from typing import Any, Dict, Optional

import asyncpg
from databases import Database

from keystone.modules.users.domain.errors import ConflictError, InternalError
from keystone.modules.users.domain.pagination import Page, PaginationParams
from keystone.modules.users.domain.repository import UserRepository
from keystone.modules.users.domain.user import User

logger = logging.getLogger("keystone.users.repository")

UNIQUE_VIOLATION = "23505"

USER_COLUMNS = "id, username, email, password_hash, role, created_at, updated_at"


def is_unique_violation(error: Exception) -> bool:
    if isinstance(error, asyncpg.exceptions.UniqueViolationError):
        return True
    return getattr(error, "sqlstate", None) == UNIQUE_VIOLATION


def map_database_error(error: Exception, entity: str = "User") -> Exception:
    """Translate a driver error into a domain error. Driver text is logged, never returned."""
    if is_unique_violation(error):
        return ConflictError(f"{entity} already exists")
    logger.error(f"Database error: {error}")
    return InternalError("Database error")


def _row_to_dict(row: Any) -> Dict[str, Any]:
    return dict(row._mapping)


class PostgresUserRepository(UserRepository):
    """PostgreSQL adapter for user data access."""

    def __init__(self, database: Database):
        self.database = database

    async def create(self, user: User) -> User:
        query = f"""
            INSERT INTO users (id, username, email, password_hash, role, created_at, updated_at)
            VALUES (:id, :username, :email, :password_hash, :role, :created_at, :updated_at)
            RETURNING {USER_COLUMNS}
        """
        try:
            row = await self.database.fetch_one(query, {
                "id": user.id,
                "username": user.username,
                "email": user.email,
                "password_hash": user.password_hash,
                "role": user.role.value,
                "created_at": user.created_at,
                "updated_at": user.updated_at,
            })
        except Exception as e:
            logger.error(f"[PostgresUserRepository.create] ERROR: {e}")
            raise map_database_error(e)
        return User.from_dict(_row_to_dict(row))

    async def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        query = f"SELECT {USER_COLUMNS} FROM users WHERE id = :user_id"
        try:
            row = await self.database.fetch_one(query, {"user_id": user_id})
        except Exception as e:
            raise map_database_error(e)
        if not row:
            return None
        return User.from_dict(_row_to_dict(row))

    async def find_by_email(self, email: str) -> Optional[User]:
        query = f"SELECT {USER_COLUMNS} FROM users WHERE email = :email"
        try:
            row = await self.database.fetch_one(query, {"email": email})
        except Exception as e:
            raise map_database_error(e)
        if not row:
            return None
        return User.from_dict(_row_to_dict(row))

    async def list(self, params: PaginationParams) -> Page[User]:
        query = f"""
            SELECT {USER_COLUMNS}
            FROM users
            ORDER BY created_at DESC, id
            LIMIT :limit OFFSET :offset
        """
        try:
            rows = await self.database.fetch_all(query, {
                "limit": params.limit,
                "offset": params.offset,
            })
        except Exception as e:
            raise map_database_error(e)

        total = await self.count()
        users = [User.from_dict(_row_to_dict(row)) for row in rows]
        return Page.build(users, total, params)

    async def count(self) -> int:
        try:
            total = await self.database.fetch_val("SELECT COUNT(*) FROM users")
        except Exception as e:
            raise map_database_error(e)
        return int(total or 0)
