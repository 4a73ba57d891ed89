"""Tests for the Supabase persistence adapter against a fake query builder."""

from types import SimpleNamespace

import pytest

import supabase_client
from app.errors import DatabaseError, ServiceUnavailableError
from supabase_client import PAGE_SIZE, SupabasePersistence


class FakeQuery:
    """Records builder calls and serves rows a page at a time."""

    def __init__(self, rows, calls, fail=False):
        self.rows = rows
        self.calls = calls
        self.fail = fail
        self.window = None

    def __getattr__(self, name):
        def method(*args):
            self.calls.append((name, args))
            if name == 'range':
                self.window = args
            return self
        return method

    def execute(self):
        if self.fail:
            raise RuntimeError("connection reset")
        if self.window is None:
            return SimpleNamespace(data=self.rows[:1])
        start, end = self.window
        return SimpleNamespace(data=self.rows[start:end + 1])


class FakeClient:
    def __init__(self, rows=None, fail=False):
        self.rows = rows or []
        self.fail = fail
        self.calls = []

    def table(self, name):
        self.calls.append(('table', (name,)))
        return FakeQuery(self.rows, self.calls, self.fail)


def test_query_pages_through_all_rows():
    rows = [{'id': i} for i in range(PAGE_SIZE + 5)]
    client = FakeClient(rows)

    result = SupabasePersistence(client).query('notifications', {'user_id': 'u1'})

    assert len(result) == PAGE_SIZE + 5
    ranges = [args for name, args in client.calls if name == 'range']
    assert ranges == [(0, PAGE_SIZE - 1), (PAGE_SIZE, 2 * PAGE_SIZE - 1)]
    assert ('eq', ('user_id', 'u1')) in client.calls


def test_none_filter_uses_is_null():
    client = FakeClient()
    SupabasePersistence(client).query('equipment', {'aircraft_id': None})
    assert ('is_', ('aircraft_id', 'null')) in client.calls


def test_failures_become_database_errors():
    store = SupabasePersistence(FakeClient(fail=True))

    with pytest.raises(DatabaseError) as excinfo:
        store.insert('directives', {'id': 'd1'})

    assert excinfo.value.details['table'] == 'directives'
    assert store.check_connection()[0] is False


def test_unfiltered_delete_is_refused():
    client = FakeClient()
    with pytest.raises(DatabaseError):
        SupabasePersistence(client).delete('notifications', {})
    assert client.calls == []


def test_get_persistence_requires_configuration(monkeypatch):
    monkeypatch.setattr(supabase_client, '_persistence', None)
    monkeypatch.setattr(supabase_client, 'get_config', lambda: SimpleNamespace(supabase=None))

    with pytest.raises(ServiceUnavailableError):
        supabase_client.get_persistence()


def test_query_orders_rows_before_paging():
    client = FakeClient([{'id': 1}])

    SupabasePersistence(client).query('notifications')

    names = [name for name, _ in client.calls]
    assert ('order', ('id',)) in client.calls
    assert names.index('order') < names.index('range')
