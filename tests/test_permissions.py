"""
Tests for role to permission mapping and the RBAC dependency factories.
"""
import pytest

from keystone.modules.users.auth.middleware import require_role
from keystone.modules.users.auth.permissions import (
    SYSTEM_MIGRATE,
    USERS_READ,
    check_permission,
    require_permission,
)
from keystone.modules.users.domain import Claims, ForbiddenError, Role


def claims_with(*roles):
    return Claims(sub="00000000-0000-0000-0000-000000000001", email="a@example.com", iat=0, exp=1, roles=list(roles))


def test_admin_has_every_permission():
    assert check_permission(claims_with("admin"), SYSTEM_MIGRATE)
    assert check_permission(claims_with("admin"), USERS_READ)


def test_user_cannot_migrate():
    assert check_permission(claims_with("user"), USERS_READ)
    assert not check_permission(claims_with("user"), SYSTEM_MIGRATE)


def test_unknown_roles_grant_nothing():
    assert not check_permission(claims_with("superuser"), USERS_READ)
    assert not check_permission(claims_with(), USERS_READ)


@pytest.mark.asyncio
async def test_require_permission_rejects():
    checker = require_permission(SYSTEM_MIGRATE)
    with pytest.raises(ForbiddenError) as exc_info:
        await checker(claims=claims_with("user"))
    assert exc_info.value.message == "Permission 'system:migrate' required"


@pytest.mark.asyncio
async def test_require_role_accepts_any_listed_role():
    checker = require_role(Role.ADMIN, Role.USER)
    claims = claims_with("user")
    assert await checker(claims=claims) is claims


@pytest.mark.asyncio
async def test_require_role_message():
    checker = require_role(Role.ADMIN)
    with pytest.raises(ForbiddenError) as exc_info:
        await checker(claims=claims_with("user"))
    assert exc_info.value.message == "Required role 'admin' not found"


def test_require_role_needs_a_role():
    with pytest.raises(ValueError):
        require_role()
