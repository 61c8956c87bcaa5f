"""
Application Settings

Loaded from environment variables (and a local .env file via python-dotenv).
"""
import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger("keystone.settings")

DEV_JWT_SECRET = "super-secret-key-change-in-production"


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _get_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Immutable runtime configuration."""
    database_url: Optional[str] = None
    redis_url: Optional[str] = None
    jwt_secret: str = DEV_JWT_SECRET
    jwt_expiration_hours: int = 24
    jwt_algorithm: str = "HS256"
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    run_migrations_on_startup: bool = False

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        """Build settings from the process environment."""
        load_dotenv(env_file)

        jwt_secret = os.getenv("JWT_SECRET")
        if not jwt_secret:
            # Development convenience. In PROD, this must be set explicitly.
            logger.warning("JWT_SECRET not set. Using the development default secret.")
            jwt_secret = DEV_JWT_SECRET

        origins = os.getenv("CORS_ORIGINS", "*")

        return cls(
            database_url=os.getenv("DATABASE_URL"),
            redis_url=os.getenv("REDIS_URL"),
            jwt_secret=jwt_secret,
            jwt_expiration_hours=_get_int("JWT_EXPIRATION_HOURS", 24),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            api_host=os.getenv("API_HOST", "0.0.0.0"),
            api_port=_get_int("API_PORT", 3000),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            run_migrations_on_startup=_get_bool("RUN_MIGRATIONS_ON_STARTUP"),
        )
