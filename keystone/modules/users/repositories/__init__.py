"""
Data Access Layer (Repositories)

Repositories handle all database interactions.
"""

from .user_repository import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
]
