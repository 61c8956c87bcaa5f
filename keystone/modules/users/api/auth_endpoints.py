"""
Authentication API Endpoints

POST /auth/register and POST /auth/login.
"""
import logging

from fastapi import APIRouter, Depends, Request

from keystone.modules.dependencies import get_auth_service
from keystone.modules.request_context import get_client_ip
from keystone.modules.users.api.schemas import (
    AuthResponse,
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from keystone.modules.users.services.auth_service import AuthService

logger = logging.getLogger("keystone.users.api.auth")

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    status_code=201,
    response_model=AuthResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
async def register(
    payload: RegisterRequest,
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user.
    """
    logger.debug(f"[auth_endpoints.register] username={payload.username}")
    user = await auth_service.register(
        username=payload.username,
        email=payload.email,
        password=payload.password,
        ip_address=get_client_ip(request),
    )
    return AuthResponse(user=UserResponse.from_domain(user))


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(
    payload: LoginRequest,
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Login and get a JWT access token.
    """
    token = await auth_service.login(
        email=payload.email,
        password=payload.password,
        ip_address=get_client_ip(request),
    )
    return TokenResponse.from_domain(token)
