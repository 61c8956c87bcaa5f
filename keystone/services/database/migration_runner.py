"""
Migration Runner

Executes pending database migrations in order.
"""
import logging
from typing import List, Optional

from databases import Database

from keystone.core.migrations.migration_models import Migration
from keystone.core.migrations.migration_registry import MigrationRegistry
from keystone.core.migrations.migration_tracker import MigrationTracker

logger = logging.getLogger("keystone.database.migrations")


def split_statements(sql: str) -> List[str]:
    """Split a migration file on ';' (no procedural bodies allowed)."""
    return [stmt.strip() for stmt in sql.split(';') if stmt.strip()]


class MigrationRunner:
    """
    Discovers and executes pending database migrations.
    """

    def __init__(self, database: Database, migrations_dir: Optional[str] = None):
        self.database = database
        self.registry = MigrationRegistry(migrations_dir)
        self.tracker = MigrationTracker(database)

    def _read_migration_file(self, migration: Migration) -> str:
        with open(migration.filepath, 'r') as f:
            return f.read()

    async def _execute_migration(self, migration: Migration) -> None:
        """
        Execute a single migration inside one transaction.
        """
        logger.info(f"Executing migration {migration.filename}")

        statements = split_statements(self._read_migration_file(migration))

        async with self.database.transaction():
            for i, statement in enumerate(statements, 1):
                await self.database.execute(statement)
                logger.debug(f"  Executed statement {i}/{len(statements)}")

    async def pending_migrations(self) -> List[Migration]:
        await self.tracker.create_tracking_table()
        applied = await self.tracker.get_applied_migrations()
        return [m for m in self.registry.discover_migrations() if m.number not in applied]

    async def run_migrations(self) -> List[Migration]:
        """
        Apply every pending migration in number order.

        A failure is recorded in schema_migrations and re-raised; later
        migrations are not attempted.

        Returns:
            The migrations applied by this run.
        """
        pending = await self.pending_migrations()

        if not pending:
            logger.info("All migrations are already applied")
            return []

        logger.info(f"Found {len(pending)} pending migrations")

        applied: List[Migration] = []
        for migration in pending:
            try:
                await self._execute_migration(migration)
            except Exception as e:
                logger.error(f"Migration {migration.filename} failed: {e}")
                await self.tracker.mark_failed(migration, str(e))
                raise
            await self.tracker.mark_applied(migration)
            applied.append(migration)
            logger.info(f"✅ Migration {migration.filename} applied successfully")

        logger.info(f"Migration run complete. {len(applied)} migrations applied.")
        return applied
