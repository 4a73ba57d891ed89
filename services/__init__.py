"""
Services Package - Business Logic Layer
"""

from services.base_service import IPersistence, ServiceResult
from services.migration_service import SchemaMigrator, migrate_to_current_version
from services.schema_migrations import CURRENT_SCHEMA_VERSION, MigrationRegistry
from services.transaction_service import (
    build_maintenance_transactions,
    create_maintenance_transactions,
    update_maintenance_transactions,
    void_maintenance_transactions
)

__all__ = [
    'IPersistence',
    'ServiceResult',
    'SchemaMigrator',
    'migrate_to_current_version',
    'CURRENT_SCHEMA_VERSION',
    'MigrationRegistry',
    'build_maintenance_transactions',
    'create_maintenance_transactions',
    'update_maintenance_transactions',
    'void_maintenance_transactions'
]
