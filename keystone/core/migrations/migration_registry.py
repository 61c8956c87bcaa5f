"""
Migration Registry

Auto-discovers migrations from the migrations directory.
"""
import logging
import os
import re
from pathlib import Path
from typing import Dict, List, Optional

from keystone.core.migrations.migration_models import Migration

logger = logging.getLogger("keystone.migrations.registry")

DEFAULT_MIGRATIONS_DIR = Path(__file__).resolve().parent.parent.parent / "migrations"


class MigrationRegistry:
    """
    Discovers migration files.
    """

    # 001_create_users.sql -> (1, "create_users")
    MIGRATION_PATTERN = re.compile(r'^(\d+)_(.+)\.sql$')

    def __init__(self, migrations_dir: Optional[str] = None):
        """
        Args:
            migrations_dir: Path to migrations directory. Defaults to keystone/migrations
        """
        self.migrations_dir = str(migrations_dir or DEFAULT_MIGRATIONS_DIR)

    def discover_migrations(self) -> List[Migration]:
        """
        Discover all migration files in the migrations directory.

        Returns:
            List of Migration objects, sorted by migration number.

        Raises:
            ValueError: If two files share a migration number.
        """
        if not os.path.isdir(self.migrations_dir):
            logger.warning(f"Migrations directory not found: {self.migrations_dir}")
            return []

        migrations: Dict[int, Migration] = {}

        for filename in sorted(os.listdir(self.migrations_dir)):
            if not filename.endswith('.sql'):
                continue

            match = self.MIGRATION_PATTERN.match(filename)
            if not match:
                logger.warning(f"Skipping file with invalid migration name format: {filename}")
                continue

            number = int(match.group(1))
            if number in migrations:
                raise ValueError(
                    f"Duplicate migration number {number:03d}: "
                    f"{migrations[number].filename}, {filename}"
                )

            migrations[number] = Migration(
                number=number,
                name=match.group(2),
                filepath=os.path.join(self.migrations_dir, filename),
            )

        result = [migrations[num] for num in sorted(migrations)]
        logger.info(f"Discovered {len(result)} migrations from {self.migrations_dir}")
        return result
