"""
Password Hashing

Argon2id via argon2-cffi. Hashes are self-describing PHC strings
($argon2id$v=19$m=...,t=...,p=...$salt$hash) so parameters can change
without invalidating stored hashes.
"""
import logging
from typing import Optional

from argon2 import PasswordHasher as _Argon2
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from keystone.modules.users.domain.errors import InternalError
from keystone.modules.users.services.ports import PasswordHasher

logger = logging.getLogger("keystone.users.passwords")


class Argon2PasswordHasher(PasswordHasher):
    """Salted Argon2id password hasher."""

    def __init__(self, hasher: Optional[_Argon2] = None):
        self._hasher = hasher or _Argon2()

    def hash(self, password: str) -> str:
        try:
            return self._hasher.hash(password)
        except Exception as e:
            raise InternalError(f"Password hashing failed: {e}")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return self._hasher.verify(password_hash, password)
        except VerifyMismatchError:
            return False
        except InvalidHashError as e:
            raise InternalError(f"Invalid password hash format: {e}")
        except VerificationError as e:
            logger.warning(f"Password verification error: {e}")
            return False
