"""
Migration Models
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Migration:
    """A forward-only SQL file named NNN_name.sql."""
    number: int
    name: str
    filepath: str

    @property
    def filename(self) -> str:
        return f"{self.number:03d}_{self.name}.sql"
