"""
Token Domain Models
"""
from dataclasses import dataclass, field
from typing import List

TOKEN_TYPE = "Bearer"


@dataclass
class Claims:
    """Decoded JWT payload."""
    sub: str
    email: str
    iat: int
    exp: int
    roles: List[str] = field(default_factory=list)

    def has_role(self, role: str) -> bool:
        return role in self.roles


@dataclass
class TokenPair:
    """Issued access token."""
    access_token: str
    expires_in: int
    token_type: str = TOKEN_TYPE
