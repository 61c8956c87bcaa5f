"""
Migration Tracker

Tracks which migrations have been applied to the database.
"""
import logging
from datetime import datetime, timezone
from typing import Set

from databases import Database

from keystone.core.migrations.migration_models import Migration

logger = logging.getLogger("keystone.migrations.tracker")

TRACKING_TABLE_DDL = [
    """
    CREATE TABLE IF NOT EXISTS schema_migrations (
        id SERIAL PRIMARY KEY,
        migration_number INTEGER NOT NULL UNIQUE,
        filename VARCHAR(255) NOT NULL,
        applied_at TIMESTAMPTZ,
        error_message TEXT
    )
    """,
]


class MigrationTracker:
    """
    Tracks applied migrations in the schema_migrations table.
    """

    def __init__(self, database: Database):
        self.database = database

    async def create_tracking_table(self) -> None:
        for stmt in TRACKING_TABLE_DDL:
            await self.database.execute(stmt)
        logger.debug("Migration tracking table created/verified")

    async def get_applied_migrations(self) -> Set[int]:
        """
        Returns:
            Set of migration numbers that applied without error
        """
        query = "SELECT migration_number FROM schema_migrations WHERE error_message IS NULL"
        rows = await self.database.fetch_all(query)
        return {row["migration_number"] for row in rows}

    async def mark_applied(self, migration: Migration) -> None:
        """Record a migration as successfully applied."""
        applied_at = datetime.now(timezone.utc)
        query = """
        INSERT INTO schema_migrations (migration_number, filename, applied_at)
        VALUES (:number, :filename, :applied_at)
        ON CONFLICT (migration_number)
        DO UPDATE SET
            filename = EXCLUDED.filename,
            applied_at = EXCLUDED.applied_at,
            error_message = NULL
        """

        await self.database.execute(query, {
            "number": migration.number,
            "filename": migration.filename,
            "applied_at": applied_at,
        })

        logger.info(f"Marked migration {migration.filename} as applied")

    async def mark_failed(self, migration: Migration, error_message: str) -> None:
        """Record a migration as failed."""
        query = """
        INSERT INTO schema_migrations (migration_number, filename, error_message)
        VALUES (:number, :filename, :error)
        ON CONFLICT (migration_number)
        DO UPDATE SET error_message = EXCLUDED.error_message
        """

        await self.database.execute(query, {
            "number": migration.number,
            "filename": migration.filename,
            "error": error_message,
        })

        logger.error(f"Marked migration {migration.filename} as failed - {error_message}")
