"""
Migration Service - Import Snapshot Upgrades

Takes a parsed export file and brings it forward to the schema version the
running application understands. Pure computation: no I/O, and the input
document is never modified.

Usage:
    from services.migration_service import migrate_to_current_version

    result = migrate_to_current_version(json.loads(payload))
    if not result.success:
        show_error(result.error)
"""

import copy
import logging
import warnings
from typing import Any, Dict, List, Optional

from app.errors import (
    AppError,
    StructuralError,
    FutureVersionError,
    MigrationStepError,
    UnknownPathWarning
)
from models.migration import MigrationResult
from services.schema_migrations import (
    CURRENT_SCHEMA_VERSION,
    MigrationRegistry,
    build_default_registry
)
from utils.validators import SnapshotValidator, normalize_data
from utils.versioning import compare_versions, version_key

logger = logging.getLogger(__name__)


def get_version_info(import_version: str, current_version: str = CURRENT_SCHEMA_VERSION) -> Dict[str, Any]:
    """Compatibility summary shown before an import is confirmed"""
    comparison = compare_versions(import_version, current_version)
    return {
        'is_compatible': comparison <= 0,
        'requires_migration': comparison < 0,
        'is_newer': comparison > 0,
        'current_version': current_version
    }


class SchemaMigrator:
    """
    Applies a registry of migrations to imported snapshots

    Args:
        registry: Migrations to use (injected so tests can supply fake chains)
        current_version: Version imports are brought up to
    """

    def __init__(
        self,
        registry: Optional[MigrationRegistry] = None,
        current_version: str = CURRENT_SCHEMA_VERSION
    ):
        self.registry = registry if registry is not None else build_default_registry()
        self.current_version = current_version

    def migrate(self, raw: Any) -> MigrationResult:
        """
        Migrate a raw snapshot to the current version

        Never raises for bad input: every failure comes back as a
        MigrationResult with success=False. Steps completed before a
        failing step are listed in migrations_applied, but the partial
        data is not returned and must not be persisted.
        """
        applied: List[str] = []
        try:
            return self._migrate(raw, applied)
        except AppError as e:
            logger.warning(f"Import rejected [{e.code}]: {e.message}")
            return MigrationResult.fail(e.message, applied)

    def _migrate(self, raw: Any, applied: List[str]) -> MigrationResult:
        is_valid, error, table = SnapshotValidator.validate_structure(raw)
        if not is_valid:
            raise StructuralError(error, table=table)

        import_version = raw['version']
        comparison = compare_versions(import_version, self.current_version)

        if comparison > 0:
            raise FutureVersionError(import_version, self.current_version)

        # Private copy; raw is left untouched
        snapshot = normalize_data(copy.deepcopy(raw))

        if comparison == 0:
            return MigrationResult.ok(snapshot)

        path = self.registry.find_path(import_version, self.current_version)

        if not path:
            # Exports older than the migration system are accepted as-is.
            # Fields added by skipped migrations may be missing downstream.
            message = f"No migration path from {import_version} to {self.current_version}. Data will be imported as-is."
            logger.warning(message)
            warnings.warn(message, UnknownPathWarning, stacklevel=3)
            return MigrationResult.ok(
                snapshot,
                [f"Legacy import from v{import_version} (no migrations needed)"]
            )

        for migration in path:
            try:
                snapshot = migration.transform(snapshot)
            except Exception as e:
                logger.error(f"Migration {migration.from_version} → {migration.to_version} failed: {e}")
                raise MigrationStepError(migration.from_version, migration.to_version, str(e) or type(e).__name__)

            stamped = snapshot.get('version') if isinstance(snapshot, dict) else None
            if not isinstance(stamped, str) or version_key(stamped) != version_key(migration.to_version):
                logger.error(f"Migration {migration.label} left version at {stamped!r}")
                raise MigrationStepError(
                    migration.from_version,
                    migration.to_version,
                    f"transform did not set version to {migration.to_version} (got {stamped!r})"
                )

            applied.append(migration.label)
            logger.info(f"Applied migration {migration.label}")

        last_version = path[-1].to_version
        if compare_versions(last_version, self.current_version) != 0:
            # Chain broke part way; keep what was migrated
            message = f"Migration chain stopped at {last_version}, current version is {self.current_version}"
            logger.warning(message)
            warnings.warn(message, UnknownPathWarning, stacklevel=3)

        return MigrationResult.ok(snapshot, applied)

    def version_info(self, import_version: str) -> Dict[str, Any]:
        return get_version_info(import_version, self.current_version)


_default_migrator: Optional[SchemaMigrator] = None


def get_migrator() -> SchemaMigrator:
    """Get or create the migrator built on the shipped migrations"""
    global _default_migrator
    if _default_migrator is None:
        _default_migrator = SchemaMigrator()
    return _default_migrator


def migrate_to_current_version(raw: Any) -> MigrationResult:
    """Migrate an imported snapshot using the shipped migrations"""
    return get_migrator().migrate(raw)
