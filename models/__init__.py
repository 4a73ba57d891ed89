"""
Models Package - Data Models and Interfaces
"""

from models.notification import (
    Recurrence,
    NotificationBasis,
    CounterType,
    AlertStatus,
    Notification
)

from models.counters import CounterSnapshot

from models.maintenance import (
    MaintenanceLog,
    TransactionCategory,
    TransactionLine
)

from models.migration import (
    Migration,
    MigrationResult,
    ImportReport
)

from models.snapshot import (
    EXPORT_TABLES,
    TABLE_DISPLAY_NAMES
)

__all__ = [
    'Recurrence',
    'NotificationBasis',
    'CounterType',
    'AlertStatus',
    'Notification',
    'CounterSnapshot',
    'MaintenanceLog',
    'TransactionCategory',
    'TransactionLine',
    'Migration',
    'MigrationResult',
    'ImportReport',
    'EXPORT_TABLES',
    'TABLE_DISPLAY_NAMES'
]
