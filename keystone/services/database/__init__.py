"""
Database Services

Connection lifecycle, database creation and schema migrations.
"""

from .connection_manager import ConnectionManager
from .database_creator import DatabaseCreator
from .migration_runner import MigrationRunner

__all__ = [
    "ConnectionManager",
    "DatabaseCreator",
    "MigrationRunner",
]
