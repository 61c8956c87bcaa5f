"""
Request/Response Models
"""
import uuid
from datetime import datetime
from typing import List

from pydantic import BaseModel, EmailStr, Field

from keystone.modules.users.domain.pagination import Page
from keystone.modules.users.domain.tokens import TokenPair
from keystone.modules.users.domain.user import Role, User


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50, examples=["john_doe"])
    email: EmailStr = Field(..., examples=["john@example.com"])
    password: str = Field(..., min_length=8, max_length=128, examples=["securepassword123"])


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., examples=["john@example.com"])
    password: str = Field(..., min_length=1, examples=["securepassword123"])


class UserResponse(BaseModel):
    id: uuid.UUID
    username: str
    email: str
    role: Role
    created_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role,
            created_at=user.created_at,
        )


class AuthResponse(BaseModel):
    user: UserResponse


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = Field("Bearer", examples=["Bearer"])
    expires_in: int = Field(..., description="Token lifetime in seconds", examples=[86400])

    @classmethod
    def from_domain(cls, token: TokenPair) -> "TokenResponse":
        return cls(
            access_token=token.access_token,
            token_type=token.token_type,
            expires_in=token.expires_in,
        )


class PaginatedUsersResponse(BaseModel):
    items: List[UserResponse]
    total: int
    page: int
    per_page: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page[User]) -> "PaginatedUsersResponse":
        return cls(
            items=[UserResponse.from_domain(u) for u in page.items],
            total=page.total,
            page=page.page,
            per_page=page.per_page,
            total_pages=page.total_pages,
        )


class ErrorBody(BaseModel):
    code: str = Field(..., examples=["NOT_FOUND"])
    message: str


class ErrorResponse(BaseModel):
    error: ErrorBody
