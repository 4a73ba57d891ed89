"""
JSON Schema Migrations

Export files carry the schema version they were written with. When the
export format changes:

1. Bump CURRENT_SCHEMA_VERSION
2. Write a transform taking the previous version to the new one
3. Append it to DEFAULT_MIGRATIONS

Each version has at most one outgoing migration, so the upgrade path is a
simple chain rather than a graph.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from app.errors import DuplicateMigrationError
from models.migration import Migration, Snapshot
from models.snapshot import EXPORT_TABLES
from utils.versioning import compare_versions, version_key

logger = logging.getLogger(__name__)


CURRENT_SCHEMA_VERSION = "1.2"


def migrate_v1_0_to_v1_1(data: Snapshot) -> Snapshot:
    """Add equipment table"""
    tables = data['tables']
    return {
        **data,
        'version': "1.1",
        'tables': {
            **tables,
            'equipment': tables.get('equipment') or []
        }
    }


def migrate_v1_1_to_v1_2(data: Snapshot) -> Snapshot:
    """Give every record an aircraft_id (replaced with the target aircraft on import)"""
    tables = dict(data['tables'])
    for table in EXPORT_TABLES:
        tables[table] = [
            {**record, 'aircraft_id': record.get('aircraft_id')}
            for record in tables[table]
        ]
    return {**data, 'version': "1.2", 'tables': tables}


DEFAULT_MIGRATIONS = (
    Migration(
        from_version="1.0",
        to_version="1.1",
        description="Add equipment table",
        transform=migrate_v1_0_to_v1_1
    ),
    Migration(
        from_version="1.1",
        to_version="1.2",
        description="Multi-aircraft support - aircraft_id field added to all records including subscriptions",
        transform=migrate_v1_1_to_v1_2
    ),
)


class MigrationRegistry:
    """
    Immutable, ordered set of migrations keyed by source version

    Versions are matched numerically, so a migration registered from "1.0"
    also serves a file stamped "1.0.0".

    Raises:
        DuplicateMigrationError: two migrations share a from_version
    """

    def __init__(self, migrations: Iterable[Migration]):
        self._migrations: Tuple[Migration, ...] = tuple(migrations)
        self._by_source: Dict[Tuple[float, ...], Migration] = {}

        for migration in self._migrations:
            key = version_key(migration.from_version)
            if key in self._by_source:
                raise DuplicateMigrationError(migration.from_version)
            self._by_source[key] = migration

    @property
    def migrations(self) -> Tuple[Migration, ...]:
        return self._migrations

    def __len__(self) -> int:
        return len(self._migrations)

    def find(self, from_version: str) -> Optional[Migration]:
        """Migration starting at from_version, if any"""
        return self._by_source.get(version_key(from_version))

    def find_path(self, from_version: str, to_version: str) -> List[Migration]:
        """
        Chain of migrations leading from from_version toward to_version

        Stops at the first version with no outgoing migration. An empty or
        short path means a link is missing; compare the last step's
        to_version with the target to tell that apart from "already there".
        """
        path: List[Migration] = []
        current = from_version
        # A chain can be no longer than the registry; guards against cycles
        max_steps = len(self._migrations)

        while compare_versions(current, to_version) < 0 and len(path) < max_steps:
            next_migration = self.find(current)
            if next_migration is None:
                logger.debug(f"No migration registered from version {current}")
                break
            path.append(next_migration)
            current = next_migration.to_version

        return path


def build_default_registry() -> MigrationRegistry:
    """Registry of the migrations shipped with the application"""
    return MigrationRegistry(DEFAULT_MIGRATIONS)


def find_migration_path(from_version: str, to_version: str) -> List[Migration]:
    """Path through the default registry"""
    return build_default_registry().find_path(from_version, to_version)
