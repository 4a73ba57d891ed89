"""
Migration Data Models

Migration describes one forward step between schema versions.
MigrationResult is what the import pipeline hands back to its caller.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional


Snapshot = Dict[str, Any]


@dataclass(frozen=True)
class Migration:
    """Single schema migration step"""
    from_version: str
    to_version: str
    description: str
    # Must return a new snapshot whose 'version' is to_version
    transform: Callable[[Snapshot], Snapshot]

    @property
    def label(self) -> str:
        """Human-readable step description for migrationsApplied"""
        return f"{self.from_version} → {self.to_version}: {self.description}"


@dataclass
class MigrationResult:
    """Outcome of migrating an imported snapshot"""
    success: bool
    data: Optional[Snapshot] = None
    error: Optional[str] = None
    migrations_applied: List[str] = field(default_factory=list)

    @classmethod
    def ok(cls, data: Snapshot, migrations_applied: List[str] = None) -> 'MigrationResult':
        """Create successful result"""
        return cls(success=True, data=data, migrations_applied=list(migrations_applied or []))

    @classmethod
    def fail(cls, error: str, migrations_applied: List[str] = None) -> 'MigrationResult':
        """Create failure result, keeping the steps completed so far"""
        return cls(success=False, error=error, migrations_applied=list(migrations_applied or []))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON shape used by the API"""
        return {
            'success': self.success,
            'data': self.data,
            'error': self.error,
            'migrationsApplied': list(self.migrations_applied)
        }


@dataclass
class ImportReport:
    """Per-table insert/skip counts for a completed import"""
    inserted: Dict[str, int]
    skipped: Dict[str, int]
    migrations_applied: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'inserted': dict(self.inserted),
            'skipped': dict(self.skipped),
            'migrationsApplied': list(self.migrations_applied)
        }
