"""
Data Transfer Service - JSON Export / Import

Export reads every user table into a versioned snapshot. Import migrates a
snapshot to the current schema first and only then writes it, table by
table in foreign-key order, skipping records that already exist.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.errors import AppError
from models.migration import ImportReport, MigrationResult, Snapshot
from models.snapshot import EXPORT_TABLES, IMPORT_ORDER, count_records, strip_field, total_records
from services.base_service import IPersistence, ServiceResult
from services.migration_service import SchemaMigrator, get_migrator
from services.schema_migrations import CURRENT_SCHEMA_VERSION

logger = logging.getLogger(__name__)


def build_export(
    persistence: IPersistence,
    user_id: str,
    now: Optional[datetime] = None
) -> Snapshot:
    """
    Snapshot of all of a user's records

    user_id is stripped from every record; the importing user is stamped
    back on when the file is loaded.
    """
    now = now or datetime.now(timezone.utc)
    tables = {
        table: strip_field(persistence.query(table, {'user_id': user_id}), 'user_id')
        for table in EXPORT_TABLES
    }

    logger.info(f"Exported {total_records(count_records(tables))} records for user {user_id}")

    return {
        'version': CURRENT_SCHEMA_VERSION,
        'exportDate': now.isoformat(),
        'tables': tables
    }


def preview_import(raw: Any, migrator: Optional[SchemaMigrator] = None) -> Dict[str, Any]:
    """
    Migrate without writing, for the confirmation step

    Returns:
        Dictionary with the migration result, record counts and, when the
        file has a version string, the version compatibility summary
    """
    migrator = migrator or get_migrator()
    result = migrator.migrate(raw)

    preview: Dict[str, Any] = {'result': result.to_dict()}
    tables = result.data['tables'] if result.success else (raw.get('tables') if isinstance(raw, dict) else None)
    preview['counts'] = count_records(tables or {})
    preview['total'] = total_records(preview['counts'])

    version = raw.get('version') if isinstance(raw, dict) else None
    if isinstance(version, str):
        preview['version_info'] = migrator.version_info(version)
    return preview


def _record_exists(persistence: IPersistence, table: str, record: Dict[str, Any]) -> bool:
    record_id = record.get('id')
    if record_id is None:
        return False
    return bool(persistence.query(table, {'id': record_id}))


def _import_counters(
    persistence: IPersistence,
    record: Dict[str, Any],
    user_id: str,
    aircraft_id: Optional[str]
) -> bool:
    """
    aircraft_counters holds one row per user/aircraft

    Returns:
        True when a new row was inserted, False when an existing row was updated
    """
    owner = {'user_id': user_id}
    if aircraft_id:
        owner['aircraft_id'] = aircraft_id

    existing = persistence.query('aircraft_counters', owner)
    if existing:
        patch = {key: value for key, value in record.items() if key != 'id'}
        persistence.update('aircraft_counters', existing[0]['id'], {**patch, **owner})
        return False

    persistence.insert('aircraft_counters', {**record, **owner})
    return True


def import_snapshot(
    persistence: IPersistence,
    user_id: str,
    raw: Any,
    aircraft_id: Optional[str] = None,
    migrator: Optional[SchemaMigrator] = None
) -> ServiceResult[ImportReport]:
    """
    Migrate and store an exported snapshot for user_id

    Nothing is written when migration fails. Individual rows that fail to
    insert are counted as skipped and the import carries on.

    Args:
        persistence: Target store
        user_id: Owner stamped on every imported row
        raw: Parsed export file
        aircraft_id: Aircraft stamped on every row (replaces the null
            placeholder added by the multi-aircraft migration)
        migrator: Migrator to use (default: shipped migrations)
    """
    migrator = migrator or get_migrator()
    result: MigrationResult = migrator.migrate(raw)
    if not result.success:
        return ServiceResult.fail(result.error, {'migrationsApplied': result.migrations_applied})

    tables = result.data['tables']
    inserted = {table: 0 for table in EXPORT_TABLES}
    skipped = {table: 0 for table in EXPORT_TABLES}

    for table in IMPORT_ORDER:
        for record in tables.get(table, []):
            stamped = {**record, 'user_id': user_id}
            if aircraft_id:
                stamped['aircraft_id'] = aircraft_id

            try:
                if table == 'aircraft_counters':
                    if _import_counters(persistence, stamped, user_id, aircraft_id):
                        inserted[table] += 1
                    else:
                        skipped[table] += 1
                    continue

                if _record_exists(persistence, table, record):
                    skipped[table] += 1
                    continue

                persistence.insert(table, stamped)
                inserted[table] += 1
            except AppError as e:
                logger.warning(f"Skipping {table} record {record.get('id')}: {e.message}")
                skipped[table] += 1

    report = ImportReport(inserted=inserted, skipped=skipped, migrations_applied=result.migrations_applied)
    logger.info(
        f"Import for user {user_id}: {total_records(inserted)} inserted, "
        f"{total_records(skipped)} skipped"
    )
    return ServiceResult.ok(report, {'migrationsApplied': result.migrations_applied})
