"""
Utility Functions Package
"""

from utils.validators import SnapshotValidator, normalize_data, validate_query_date
from utils.versioning import compare_versions, is_valid_version
from utils.date_utils import (
    parse_date,
    to_date,
    add_weeks,
    add_months,
    is_same_day
)

__all__ = [
    'SnapshotValidator',
    'normalize_data',
    'validate_query_date',
    'compare_versions',
    'is_valid_version',
    'parse_date',
    'to_date',
    'add_weeks',
    'add_months',
    'is_same_day'
]
