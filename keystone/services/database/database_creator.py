"""
Database Creator

Creates the target database when it does not exist yet, with a safeguard
against silently recreating production databases.
"""
import logging
from typing import Iterable, Optional
from urllib.parse import urlparse

import asyncpg

logger = logging.getLogger("keystone.database.creator")

# Production database names that should not be auto-created
PRODUCTION_DB_NAMES = ("keystone", "keystone_prod", "keystone_production")


class DatabaseCreator:
    """
    Ensures the database named in DATABASE_URL exists.
    """

    def __init__(self, database_url: str, production_names: Optional[Iterable[str]] = None):
        self.database_url = database_url
        self._parsed_url = urlparse(database_url)
        self.production_names = {
            name.lower() for name in (production_names if production_names is not None else PRODUCTION_DB_NAMES)
        }

    @property
    def database_name(self) -> str:
        return self._parsed_url.path.lstrip('/')

    def is_production(self) -> bool:
        return self.database_name.lower() in self.production_names

    async def ensure_exists(self) -> bool:
        """
        Connect to the 'postgres' maintenance database and create the target
        database if missing.

        Returns:
            True if the database was created, False if it already existed.

        Raises:
            RuntimeError: If the missing database has a production name.
        """
        db_name = self.database_name
        if not db_name:
            raise ValueError("No database name found in DATABASE_URL")

        conn = await asyncpg.connect(
            host=self._parsed_url.hostname or 'localhost',
            port=self._parsed_url.port or 5432,
            user=self._parsed_url.username or 'postgres',
            password=self._parsed_url.password or '',
            database='postgres',
        )
        try:
            exists = await conn.fetchval(
                "SELECT 1 FROM pg_database WHERE datname = $1",
                db_name,
            )
            if exists:
                logger.debug(f"Database '{db_name}' already exists")
                return False

            if self.is_production():
                logger.critical(f"Production database '{db_name}' does not exist")
                raise RuntimeError(
                    f"Production database '{db_name}' does not exist. "
                    f"Auto-creation refused; create it manually or restore from backup."
                )

            logger.warning(f"Database '{db_name}' does not exist, creating it...")
            # Identifiers can't be parameterized
            escaped_db_name = db_name.replace('"', '""')
            await conn.execute(f'CREATE DATABASE "{escaped_db_name}"')
            logger.info(f"Database '{db_name}' created successfully")
            return True
        finally:
            await conn.close()
