"""
Test Users API
Listing, lookup by id and the bearer-protected /me route.
"""
import time
import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import jwt
import pytest
from fastapi.testclient import TestClient

from keystone.app import create_app
from keystone.modules.container import Container
from keystone.modules.users.domain import User
from keystone.modules.users.domain.pagination import MAX_PAGE
from keystone.modules.users.repositories import PostgresUserRepository

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def five_users(repository):
    """user0 is the oldest, user4 the newest."""
    users = []
    for i in range(5):
        users.append(repository.add(User(
            username=f"user{i}",
            email=f"user{i}@example.com",
            password_hash="$argon2id$unused",
            created_at=BASE_TIME + timedelta(minutes=i),
        )))
    return users


def test_list_users_defaults(client, five_users):
    response = client.get("/users")

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 5
    assert body["page"] == 1
    assert body["per_page"] == 20
    assert body["total_pages"] == 1
    assert [u["username"] for u in body["items"]] == ["user4", "user3", "user2", "user1", "user0"]


def test_list_users_second_page(client, five_users):
    body = client.get("/users", params={"page": 2, "per_page": 2}).json()

    assert [u["username"] for u in body["items"]] == ["user2", "user1"]
    assert body["total"] == 5
    assert body["total_pages"] == 3


def test_list_users_page_past_end(client, five_users):
    body = client.get("/users", params={"page": 10, "per_page": 2}).json()
    assert body["items"] == []
    assert body["total"] == 5


def test_list_users_clamps_out_of_range_params(client, five_users):
    body = client.get("/users", params={"page": 0, "per_page": 1000}).json()
    assert body["page"] == 1
    assert body["per_page"] == 100


def test_list_users_empty(client):
    body = client.get("/users").json()
    assert body == {"items": [], "total": 0, "page": 1, "per_page": 20, "total_pages": 0}


def test_list_users_rejects_non_integer_page(client):
    response = client.get("/users", params={"page": "abc"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"


def test_listing_never_exposes_password_hash(client, five_users):
    body = client.get("/users").json()
    assert all("password_hash" not in u for u in body["items"])


def test_get_user_by_id(client, five_users):
    target = five_users[2]

    response = client.get(f"/users/{target.id}")

    assert response.status_code == 200
    assert response.json()["id"] == str(target.id)
    assert response.json()["email"] == "user2@example.com"


def test_get_user_not_found(client):
    missing = uuid.uuid4()

    response = client.get(f"/users/{missing}")

    assert response.status_code == 404
    assert response.json() == {
        "error": {"code": "NOT_FOUND", "message": f"User with id {missing} not found"},
    }


def test_get_user_invalid_uuid(client):
    response = client.get("/users/not-a-uuid")
    assert response.status_code == 400
    assert "user_id" in response.json()["error"]["message"]


def test_me_returns_current_user(client, make_user, auth_headers):
    user = make_user()

    response = client.get("/me", headers=auth_headers(user))

    assert response.status_code == 200
    assert response.json()["id"] == str(user.id)
    assert response.json()["username"] == "john_doe"


def test_me_without_header(client):
    response = client.get("/me")

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Missing Authorization header"


@pytest.mark.parametrize("header", ["Basic dXNlcjpwYXNz", "Bearer", "Token abc.def.ghi"])
def test_me_with_malformed_header(client, header):
    response = client.get("/me", headers={"Authorization": header})

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid Authorization header format. Use: Bearer <token>"


def test_me_with_invalid_token(client):
    response = client.get("/me", headers={"Authorization": "Bearer not.a.token"})

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid token"


def test_me_with_expired_token(client, settings, make_user):
    user = make_user()
    now = int(time.time())
    token = jwt.encode(
        {"sub": str(user.id), "email": user.email, "roles": ["user"], "iat": now - 7200, "exp": now - 60},
        settings.jwt_secret,
        algorithm="HS256",
    )

    response = client.get("/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Token has expired"


def test_me_with_non_uuid_subject(client, settings):
    now = int(time.time())
    token = jwt.encode({"sub": "42", "roles": ["user"], "iat": now, "exp": now + 60}, settings.jwt_secret)

    response = client.get("/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid user ID in token"


def test_me_for_deleted_user(client, repository, make_user, auth_headers):
    user = make_user()
    headers = auth_headers(user)
    del repository.users[user.id]

    response = client.get("/me", headers=headers)

    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Current user not found"


def test_huge_page_is_clamped(client, five_users):
    response = client.get("/users", params={"page": 10 ** 18, "per_page": 100})

    assert response.status_code == 200
    body = response.json()
    assert body["page"] == MAX_PAGE
    assert body["items"] == []
    assert body["total"] == 5


def test_database_failure_does_not_leak_driver_text(settings, password_hasher, token_service):
    database = MagicMock()
    database.fetch_all = AsyncMock(side_effect=RuntimeError(
        "invalid input for query argument $2: SELECT id, username, email, password_hash FROM users"
    ))
    container = Container(
        settings=settings,
        user_repository=PostgresUserRepository(database),
        password_hasher=password_hasher,
        token_service=token_service,
    )

    response = TestClient(create_app(container=container)).get("/users")

    assert response.status_code == 500
    assert response.json() == {"error": {"code": "INTERNAL_ERROR", "message": "Database error"}}
