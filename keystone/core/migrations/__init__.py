from .migration_models import Migration
from .migration_registry import MigrationRegistry
from .migration_tracker import MigrationTracker

__all__ = [
    "Migration",
    "MigrationRegistry",
    "MigrationTracker",
]
