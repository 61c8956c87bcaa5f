"""
Shared fixtures: an in-memory repository, fast Argon2 parameters and a
TestClient wired through the application container.
"""
import uuid
from typing import Dict, Optional

import pytest
from argon2 import PasswordHasher as Argon2
from fastapi.testclient import TestClient

from keystone.app import create_app
from keystone.core.settings import Settings
from keystone.modules.container import Container
from keystone.modules.users.auth.passwords import Argon2PasswordHasher
from keystone.modules.users.auth.tokens import JwtConfig, JwtTokenService
from keystone.modules.users.domain import ConflictError, Page, PaginationParams, Role, User, UserRepository

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"
DEFAULT_PASSWORD = "securepassword123"


class InMemoryUserRepository(UserRepository):
    """Dict-backed repository with the same ordering and conflict rules as PostgreSQL."""

    def __init__(self):
        self.users: Dict[uuid.UUID, User] = {}

    async def create(self, user: User) -> User:
        if any(u.email == user.email for u in self.users.values()):
            raise ConflictError("User already exists")
        self.users[user.id] = user
        return user

    async def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        return self.users.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    async def list(self, params: PaginationParams) -> Page[User]:
        by_id = sorted(self.users.values(), key=lambda u: str(u.id))
        ordered = sorted(by_id, key=lambda u: u.created_at, reverse=True)
        items = ordered[params.offset:params.offset + params.limit]
        return Page.build(items, len(ordered), params)

    async def count(self) -> int:
        return len(self.users)

    def add(self, user: User) -> User:
        self.users[user.id] = user
        return user


@pytest.fixture
def settings():
    return Settings(jwt_secret=TEST_SECRET, jwt_expiration_hours=1, log_level="WARNING")


@pytest.fixture
def password_hasher():
    """Argon2 with minimal cost so the suite stays fast."""
    return Argon2PasswordHasher(Argon2(time_cost=1, memory_cost=8, parallelism=1))


@pytest.fixture
def token_service(settings):
    return JwtTokenService(JwtConfig.from_settings(settings))


@pytest.fixture
def repository():
    return InMemoryUserRepository()


@pytest.fixture
def container(settings, repository, password_hasher, token_service):
    return Container(
        settings=settings,
        user_repository=repository,
        password_hasher=password_hasher,
        token_service=token_service,
    )


@pytest.fixture
def app(container):
    return create_app(container=container)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(repository, password_hasher):
    """Insert a user directly into the repository."""

    def _make_user(
        email: str = "john@example.com",
        username: str = "john_doe",
        role: Role = Role.USER,
        password: str = DEFAULT_PASSWORD,
    ) -> User:
        user = User(
            username=username,
            email=email,
            password_hash=password_hasher.hash(password),
            role=role,
        )
        return repository.add(user)

    return _make_user


@pytest.fixture
def auth_headers(token_service):
    """Bearer header for a given user."""

    def _auth_headers(user: User) -> Dict[str, str]:
        token = token_service.generate(user)
        return {"Authorization": f"Bearer {token.access_token}"}

    return _auth_headers
