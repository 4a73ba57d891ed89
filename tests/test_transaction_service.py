"""Tests for maintenance cost line items."""

from datetime import date

import pytest

from conftest import InMemoryPersistence
from models.maintenance import MaintenanceLog, TransactionCategory
from services.transaction_service import (
    build_maintenance_transactions,
    calculate_other_cost,
    create_maintenance_transactions,
    plan_transaction_sync,
    update_maintenance_transactions,
    void_maintenance_transactions,
)


def make_log(labor=None, parts=None, total=None):
    return MaintenanceLog(
        id="log-1",
        entry_title="Annual",
        date_performed=date(2024, 4, 2),
        labor_cost=labor,
        parts_cost=parts,
        total_cost=total,
    )


@pytest.mark.parametrize("total,labor,parts,expected", [
    (None, 100, 50, 0),
    (0, 100, 50, 0),
    (200, 100, 50, 50),
    (120, 100, 50, 0),
    (300, None, None, 300),
])
def test_calculate_other_cost(total, labor, parts, expected):
    assert calculate_other_cost(total, labor, parts) == expected


def test_total_only_becomes_single_other_line():
    lines = build_maintenance_transactions(make_log(total=450.0))

    assert len(lines) == 1
    assert lines[0].category == TransactionCategory.OTHER
    assert lines[0].amount == 450.0
    assert lines[0].title == "Annual:Other"


def test_labor_parts_and_remainder():
    lines = build_maintenance_transactions(make_log(labor=300.0, parts=120.0, total=500.0))

    assert [(line.title, line.amount) for line in lines] == [
        ("Annual:Labor", 300.0),
        ("Annual:Parts", 120.0),
        ("Annual:Other", 80.0),
    ]
    row = lines[0].to_dict()
    assert row["category"] == "Maintenance Labor"
    assert row["direction"] == "Debit"
    assert row["status"] == "Pending"
    assert row["reference_id"] == "log-1"
    assert row["transaction_date"] == "2024-04-02"
    assert row["include_in_cost_per_hour"] is True


def test_no_costs_no_lines():
    assert build_maintenance_transactions(make_log()) == []


def test_plan_sync_updates_inserts_and_voids():
    existing = [
        {"id": "tx-labor", "category": "Maintenance Labor"},
        {"id": "tx-other", "category": "Other"},
    ]
    plan = plan_transaction_sync(make_log(labor=200.0, parts=75.0), existing)

    assert plan.updates == {
        "tx-labor": {
            "title": "Annual:Labor",
            "transaction_date": "2024-04-02",
            "amount": 200.0,
            "status": "Pending",
        }
    }
    assert [line.category for line in plan.inserts] == [TransactionCategory.PARTS]
    assert plan.voids == ["tx-other"]
    assert not plan.is_empty


def test_create_update_and_void_round_trip():
    store = InMemoryPersistence()

    created = create_maintenance_transactions(store, "user-1", "ac-1", make_log(labor=100.0, total=150.0))
    assert created == 2
    rows = store.query("transactions")
    assert {row["category"] for row in rows} == {"Maintenance Labor", "Other"}
    assert all(row["user_id"] == "user-1" and row["aircraft_id"] == "ac-1" for row in rows)

    plan = update_maintenance_transactions(store, "user-1", "ac-1", make_log(parts=40.0))
    assert len(plan.inserts) == 1
    assert len(plan.voids) == 2
    statuses = {row["category"]: row["status"] for row in store.query("transactions")}
    assert statuses == {"Maintenance Labor": "Voided", "Other": "Voided", "Maintenance Parts": "Pending"}

    assert void_maintenance_transactions(store, "log-1", "user-1") == 1
    assert all(row["status"] == "Voided" for row in store.query("transactions"))
