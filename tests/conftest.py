"""Shared fixtures: in-memory persistence and a Flask test client."""

import uuid
from typing import Any, Dict, List, Optional

import pytest

from app.errors import DatabaseError
from services.base_service import IPersistence


class InMemoryPersistence(IPersistence):
    """Dict-of-lists table store with equality filters."""

    def __init__(self, tables: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.tables: Dict[str, List[Dict[str, Any]]] = {
            name: [dict(row) for row in rows] for name, rows in (tables or {}).items()
        }
        self.failing_tables = set()

    @staticmethod
    def _matches(row: Dict[str, Any], filters: Optional[Dict[str, Any]]) -> bool:
        return all(row.get(column) == value for column, value in (filters or {}).items())

    def query(self, table, filters=None):
        return [dict(row) for row in self.tables.get(table, []) if self._matches(row, filters)]

    def insert(self, table, record):
        if table in self.failing_tables:
            raise DatabaseError("insert", details={'table': table})
        row = dict(record)
        row.setdefault('id', str(uuid.uuid4()))
        self.tables.setdefault(table, []).append(row)
        return dict(row)

    def update(self, table, record_id, patch):
        for row in self.tables.get(table, []):
            if row.get('id') == record_id:
                row.update(patch)

    def delete(self, table, filters):
        self.tables[table] = [row for row in self.tables.get(table, []) if not self._matches(row, filters)]


@pytest.fixture
def persistence():
    return InMemoryPersistence()


@pytest.fixture
def client(persistence):
    from api.index import create_app

    app = create_app(persistence=persistence)
    app.config['TESTING'] = True
    return app.test_client()
