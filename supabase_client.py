"""
Supabase Client Module for the Maintenance Dashboard
Generic table access used by the export/import pipeline and the
calendar / counters endpoints. Row-level security on the Supabase side
decides what each user may see.
"""

import logging
from typing import Any, Dict, List, Optional

from supabase import Client, create_client

from app.config import SupabaseConfig, get_config
from app.errors import DatabaseError, ServiceUnavailableError
from services.base_service import IPersistence

logger = logging.getLogger(__name__)

PAGE_SIZE = 1000


def _fetch_all(query) -> List[Dict[str, Any]]:
    """Fetch all records using pagination to bypass the 1000-row limit"""
    # Pages are only stable under a fixed ordering
    query = query.order('id')
    all_data = []
    start = 0

    while True:
        # Use range for pagination: start to start + PAGE_SIZE - 1
        result = query.range(start, start + PAGE_SIZE - 1).execute()
        data = result.data if result.data else []
        all_data.extend(data)

        # If we fetched fewer than a page, we're done
        if len(data) < PAGE_SIZE:
            break

        start += PAGE_SIZE

    return all_data


class SupabasePersistence(IPersistence):
    """IPersistence backed by a Supabase project"""

    def __init__(self, client: Client):
        self.client = client

    @classmethod
    def from_config(cls, config: SupabaseConfig) -> 'SupabasePersistence':
        """Create client from URL/key configuration"""
        try:
            return cls(create_client(config.url, config.key))
        except Exception as e:
            raise ServiceUnavailableError("Supabase", reason=str(e)) from e

    def _filtered(self, query, filters: Optional[Dict[str, Any]]):
        for column, value in (filters or {}).items():
            if value is None:
                query = query.is_(column, 'null')
            else:
                query = query.eq(column, value)
        return query

    def query(self, table: str, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        try:
            return _fetch_all(self._filtered(self.client.table(table).select('*'), filters))
        except Exception as e:
            logger.error(f"Error querying {table}: {e}")
            raise DatabaseError("select", details={'table': table, 'reason': str(e)}) from e

    def insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        try:
            result = self.client.table(table).insert(record).execute()
        except Exception as e:
            logger.error(f"Error inserting into {table}: {e}")
            raise DatabaseError("insert", details={'table': table, 'reason': str(e)}) from e
        return result.data[0] if result.data else record

    def update(self, table: str, record_id: Any, patch: Dict[str, Any]) -> None:
        try:
            self.client.table(table).update(patch).eq('id', record_id).execute()
        except Exception as e:
            logger.error(f"Error updating {table} {record_id}: {e}")
            raise DatabaseError("update", details={'table': table, 'id': record_id, 'reason': str(e)}) from e

    def delete(self, table: str, filters: Dict[str, Any]) -> None:
        if not filters:
            raise DatabaseError("delete", details={'table': table, 'reason': 'refusing unfiltered delete'})
        try:
            self._filtered(self.client.table(table).delete(), filters).execute()
        except Exception as e:
            logger.error(f"Error deleting from {table}: {e}")
            raise DatabaseError("delete", details={'table': table, 'reason': str(e)}) from e

    def check_connection(self) -> tuple:
        """Check if Supabase is reachable and the tables exist"""
        try:
            self.client.table('notifications').select('id').limit(1).execute()
            return True, "Connected to Supabase"
        except Exception as e:
            return False, f"Supabase connection failed: {e}"


_persistence: Optional[SupabasePersistence] = None


def get_persistence() -> SupabasePersistence:
    """
    Get initialized persistence singleton

    Raises:
        ServiceUnavailableError: SUPABASE_URL / SUPABASE_KEY not configured
    """
    global _persistence
    if _persistence is None:
        config = get_config().supabase
        if config is None or not config.is_valid():
            raise ServiceUnavailableError("Supabase", reason="SUPABASE_URL or SUPABASE_KEY not configured")
        _persistence = SupabasePersistence.from_config(config)
        logger.info("Supabase client initialized")
    return _persistence
