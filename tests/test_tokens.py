"""
Tests for JWT issuance and validation.
"""
import time

import jwt
import pytest

from keystone.modules.users.auth.tokens import JwtConfig, JwtTokenService
from keystone.modules.users.domain.errors import UnauthorizedError
from keystone.modules.users.domain.user import Role, User


@pytest.fixture
def user():
    return User(username="john_doe", email="john@example.com", password_hash="h", role=Role.ADMIN)


def test_generate_returns_bearer_pair(token_service, user):
    pair = token_service.generate(user)
    assert pair.token_type == "Bearer"
    assert pair.expires_in == 3600
    assert pair.access_token.count(".") == 2


def test_claims_carry_subject_email_and_roles(token_service, user):
    claims = token_service.validate(token_service.generate(user).access_token)
    assert claims.sub == str(user.id)
    assert claims.email == "john@example.com"
    assert claims.roles == ["admin"]
    assert claims.has_role("admin")
    assert claims.exp - claims.iat == 3600


def test_expired_token_is_rejected(settings, token_service, user):
    now = int(time.time())
    token = jwt.encode(
        {"sub": str(user.id), "email": user.email, "roles": ["user"], "iat": now - 7200, "exp": now - 3600},
        settings.jwt_secret,
        algorithm="HS256",
    )
    with pytest.raises(UnauthorizedError) as exc_info:
        token_service.validate(token)
    assert exc_info.value.message == "Token has expired"


def test_token_signed_with_other_secret_is_rejected(token_service, user):
    other = JwtTokenService(JwtConfig(secret="another-secret-key-that-is-also-long-enough"))
    token = other.generate(user).access_token
    with pytest.raises(UnauthorizedError) as exc_info:
        token_service.validate(token)
    assert exc_info.value.message == "Invalid token"


def test_garbage_token_is_rejected(token_service):
    with pytest.raises(UnauthorizedError) as exc_info:
        token_service.validate("not.a.jwt")
    assert exc_info.value.message == "Invalid token"


def test_token_without_expiry_is_rejected(settings, token_service, user):
    token = jwt.encode({"sub": str(user.id), "iat": int(time.time())}, settings.jwt_secret, algorithm="HS256")
    with pytest.raises(UnauthorizedError):
        token_service.validate(token)


def test_non_list_roles_are_rejected(settings, token_service, user):
    now = int(time.time())
    token = jwt.encode(
        {"sub": str(user.id), "roles": "admin", "iat": now, "exp": now + 60},
        settings.jwt_secret,
        algorithm="HS256",
    )
    with pytest.raises(UnauthorizedError):
        token_service.validate(token)


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        JwtConfig(secret="")


def test_expires_in_follows_hours():
    assert JwtConfig(secret="x" * 32, expiration_hours=24).expires_in == 86400


def test_lifetime_is_derived_from_settings(settings):
    assert JwtConfig.from_settings(settings).expires_in == settings.jwt_expiration_hours * 3600
