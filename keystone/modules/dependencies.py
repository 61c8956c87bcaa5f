"""
FastAPI dependencies resolving services from the app container.
"""
from fastapi import Request

from keystone.modules.users.services.auth_service import AuthService
from keystone.modules.users.services.ports import TokenService
from keystone.modules.users.services.user_service import UserService


def get_container(request: Request):
    return request.app.state.container


def get_user_service(request: Request) -> UserService:
    return get_container(request).user_service


def get_auth_service(request: Request) -> AuthService:
    return get_container(request).auth_service


def get_token_service(request: Request) -> TokenService:
    return get_container(request).token_service
