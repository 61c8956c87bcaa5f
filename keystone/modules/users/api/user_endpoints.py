"""
User API Endpoints

Public user listing and lookup, plus the authenticated /me route.
"""
import logging
import uuid

from fastapi import APIRouter, Depends, Query

from keystone.modules.dependencies import get_user_service
from keystone.modules.users.api.schemas import ErrorResponse, PaginatedUsersResponse, UserResponse
from keystone.modules.users.auth.middleware import get_current_user
from keystone.modules.users.domain.errors import NotFoundError
from keystone.modules.users.domain.pagination import DEFAULT_PAGE, DEFAULT_PER_PAGE, MAX_PER_PAGE, PaginationParams
from keystone.modules.users.domain.user import User
from keystone.modules.users.services.user_service import UserService

logger = logging.getLogger("keystone.users.api")

router = APIRouter(tags=["Users"])


@router.get("/users", response_model=PaginatedUsersResponse)
async def list_users(
    page: int = Query(DEFAULT_PAGE, description="1-based page number"),
    per_page: int = Query(DEFAULT_PER_PAGE, description=f"Page size, at most {MAX_PER_PAGE}"),
    user_service: UserService = Depends(get_user_service),
):
    """
    List users, newest first.
    """
    result = await user_service.list_users(PaginationParams(page=page, per_page=per_page))
    return PaginatedUsersResponse.from_page(result)


@router.get(
    "/users/{user_id}",
    response_model=UserResponse,
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def get_user(
    user_id: uuid.UUID,
    user_service: UserService = Depends(get_user_service),
):
    user = await user_service.get_user(user_id)
    if user is None:
        raise NotFoundError("User", str(user_id))
    return UserResponse.from_domain(user)


@router.get(
    "/me",
    response_model=UserResponse,
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
)
async def get_me(current_user: User = Depends(get_current_user)):
    """
    Current authenticated user.
    """
    return UserResponse.from_domain(current_user)
