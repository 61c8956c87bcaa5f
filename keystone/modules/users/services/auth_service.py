"""
Auth Service

Registration and login use cases.
"""
import logging
from typing import Optional

from keystone.modules.users.domain.errors import ConflictError, UnauthorizedError, ValidationError
from keystone.modules.users.domain.repository import UserRepository
from keystone.modules.users.domain.tokens import TokenPair
from keystone.modules.users.domain.user import Role, User
from keystone.modules.users.services.ports import PasswordHasher, TokenService

logger = logging.getLogger("keystone.users.auth_service")

USERNAME_MIN, USERNAME_MAX = 3, 50
PASSWORD_MIN, PASSWORD_MAX = 8, 128

INVALID_CREDENTIALS = "Invalid credentials"

# Unknown emails are checked against a hash of this; every failed login runs one Argon2 verify
DUMMY_PASSWORD = "keystone-login-dummy-password"


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    """
    Orchestrates the repository, password hasher and token service.
    """

    def __init__(
        self,
        repository: UserRepository,
        password_hasher: PasswordHasher,
        token_service: TokenService,
        audit=None,
    ):
        self.repository = repository
        self.password_hasher = password_hasher
        self.token_service = token_service
        self.audit = audit
        self._dummy_hash: Optional[str] = None

    def _dummy_password_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self.password_hasher.hash(DUMMY_PASSWORD)
        return self._dummy_hash

    async def _audit(
        self,
        user_id: str,
        action: str,
        resource_id: Optional[str] = None,
        ip_address: Optional[str] = None,
        **details,
    ) -> None:
        if self.audit is None:
            return
        await self.audit.log_event(
            user_id=user_id,
            action=action,
            resource_type="USER",
            resource_id=resource_id,
            details=details,
            ip_address=ip_address,
        )

    @staticmethod
    def _validate_registration(username: str, email: str, password: str) -> None:
        if not username or not username.strip():
            raise ValidationError("Username cannot be empty")
        if not USERNAME_MIN <= len(username.strip()) <= USERNAME_MAX:
            raise ValidationError(f"Username must be {USERNAME_MIN}-{USERNAME_MAX} characters")
        if not email or not email.strip():
            raise ValidationError("Email cannot be empty")
        if len(password) < PASSWORD_MIN:
            raise ValidationError(f"Password must be at least {PASSWORD_MIN} characters")
        if len(password) > PASSWORD_MAX:
            raise ValidationError(f"Password must be at most {PASSWORD_MAX} characters")

    async def register(
        self,
        username: str,
        email: str,
        password: str,
        role: Role = Role.USER,
        ip_address: Optional[str] = None,
    ) -> User:
        """
        Create a new account.

        Raises:
            ValidationError: bad username, email or password
            ConflictError: email already registered
        """
        self._validate_registration(username, email, password)
        email = normalize_email(email)
        logger.debug(f"[AuthService.register] email={email}, role={role.value}")

        if await self.repository.find_by_email(email) is not None:
            raise ConflictError("Email already registered")

        user = User(
            username=username.strip(),
            email=email,
            password_hash=self.password_hasher.hash(password),
            role=role,
        )
        try:
            created = await self.repository.create(user)
        except ConflictError:
            # Lost a race with a concurrent registration
            raise ConflictError("Email already registered")

        logger.info(f"Registered user {created.id} ({created.role.value})")
        await self._audit(
            str(created.id),
            "REGISTER",
            str(created.id),
            ip_address=ip_address,
            email=created.email,
            role=created.role.value,
        )
        return created

    async def login(self, email: str, password: str, ip_address: Optional[str] = None) -> TokenPair:
        """
        Exchange credentials for an access token.

        Raises:
            UnauthorizedError: unknown email or wrong password (same message)
        """
        email = normalize_email(email)
        user = await self.repository.find_by_email(email)
        if user is None:
            self.password_hasher.verify(password, self._dummy_password_hash())
            logger.info("Login failed: unknown email")
            await self._audit("anonymous", "LOGIN_FAILED", ip_address=ip_address, email=email)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not self.password_hasher.verify(password, user.password_hash):
            logger.info(f"Login failed for user {user.id}: wrong password")
            await self._audit(str(user.id), "LOGIN_FAILED", str(user.id), ip_address=ip_address)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        token = self.token_service.generate(user)
        logger.info(f"User {user.id} logged in")
        await self._audit(str(user.id), "LOGIN", str(user.id), ip_address=ip_address)
        return token
