"""
Input Validation Utilities

Validates imported snapshots and request parameters before processing.
"""

from typing import Tuple, Optional, Any, Dict
from datetime import date

from models.snapshot import EXPORT_TABLES
from utils.versioning import is_valid_version
from utils.date_utils import parse_date


class SnapshotValidator:
    """Validate export snapshots before migration"""

    @classmethod
    def validate_structure(cls, raw: Any) -> Tuple[bool, Optional[str], Optional[str]]:
        """
        Check the basic shape of an imported snapshot

        Unknown table keys are allowed and left alone. Enumerated tables
        may be missing (they normalize to empty lists) but must be lists
        when present; an explicit null is rejected.

        Args:
            raw: Parsed JSON document

        Returns:
            Tuple of (is_valid, error_message, offending_table)
        """
        if not raw or not isinstance(raw, dict):
            return False, "Invalid data format: expected an object", None

        version = raw.get('version')
        if not version or not isinstance(version, str):
            return False, "Missing or invalid 'version' field", None

        if not is_valid_version(version):
            return False, f"Invalid 'version' field: '{version}' is not a dotted numeric version", None

        tables = raw.get('tables')
        if not isinstance(tables, dict):
            return False, "Missing or invalid 'tables' field", None

        for table in EXPORT_TABLES:
            if table in tables and not isinstance(tables[table], list):
                return False, f"Table '{table}' should be an array", table

        return True, None, None


def normalize_data(snapshot: Dict[str, Any]) -> Dict[str, Any]:
    """
    Ensure every enumerated table exists as a list

    Returns a new snapshot; present lists and unknown keys are carried over
    as-is. Idempotent.
    """
    tables = dict(snapshot.get('tables') or {})
    for table in EXPORT_TABLES:
        if tables.get(table) is None:
            tables[table] = []
    return {**snapshot, 'tables': tables}


def validate_query_date(value: Optional[str]) -> Tuple[bool, Optional[date], Optional[str]]:
    """
    Validate a date query parameter

    Missing values default to today.

    Returns:
        Tuple of (is_valid, parsed_date, error_message)
    """
    if not value:
        return True, date.today(), None

    parsed = parse_date(value)
    if parsed is None:
        return False, None, f"Invalid date: {value}"
    return True, parsed, None
