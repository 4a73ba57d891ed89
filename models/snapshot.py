"""
Export Snapshot Model

A snapshot is the JSON document produced by a data export:

    {
        "version": "1.2",
        "exportDate": "2024-01-01T00:00:00+00:00",
        "tables": {"notifications": [...], ...}
    }

Records inside each table are opaque dictionaries. Snapshots are kept as
plain dicts so unknown keys survive every transform untouched.
"""

from typing import Any, Dict, List


# Every table an export contains, in export order
EXPORT_TABLES = (
    'aircraft_counters',
    'aircraft_counter_history',
    'subscriptions',
    'notifications',
    'maintenance_logs',
    'directives',
    'aircraft_directive_status',
    'directive_history',
    'maintenance_directive_compliance',
    'equipment',
)

# Insert order on import (parents before children)
IMPORT_ORDER = (
    'aircraft_counters',
    'aircraft_counter_history',
    'subscriptions',
    'directives',
    'maintenance_logs',
    'notifications',
    'aircraft_directive_status',
    'directive_history',
    'maintenance_directive_compliance',
    'equipment',
)

TABLE_DISPLAY_NAMES = {
    'aircraft_counters': "Aircraft Counters",
    'aircraft_counter_history': "Counter History",
    'subscriptions': "Subscriptions",
    'notifications': "Notifications",
    'maintenance_logs': "Maintenance Logs",
    'directives': "Directives",
    'aircraft_directive_status': "Directive Status",
    'directive_history': "Directive History",
    'maintenance_directive_compliance': "Compliance Records",
    'equipment': "Equipment",
}


def count_records(tables: Dict[str, Any]) -> Dict[str, int]:
    """Record count per enumerated table; missing or non-list tables count 0"""
    counts = {}
    for table in EXPORT_TABLES:
        records = tables.get(table) if isinstance(tables, dict) else None
        counts[table] = len(records) if isinstance(records, list) else 0
    return counts


def total_records(counts: Dict[str, int]) -> int:
    return sum(counts.values())


def strip_field(records: List[Dict[str, Any]], field_name: str) -> List[Dict[str, Any]]:
    """Copy records without one field (e.g. user_id before export)"""
    return [
        {key: value for key, value in record.items() if key != field_name}
        for record in records
    ]
