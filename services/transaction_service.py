"""
Transaction Service - Maintenance Cost Line Items

Keeps the transactions ledger in step with maintenance log costs. A log
with labor, parts and a larger total produces three debits; a log with only
a total produces a single "Other" debit.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from models.maintenance import MaintenanceLog, TransactionCategory, TransactionLine
from services.base_service import IPersistence

logger = logging.getLogger(__name__)


TRANSACTIONS_TABLE = 'transactions'
VOIDED = "Voided"


def calculate_other_cost(
    total: Optional[float],
    labor: Optional[float],
    parts: Optional[float]
) -> float:
    """
    Part of the total not explained by labor and parts

    Captures a manually overridden total. Never negative.
    """
    if not total:
        return 0.0
    other = total - (labor or 0) - (parts or 0)
    return other if other > 0 else 0.0


def required_amounts(log: MaintenanceLog) -> Dict[TransactionCategory, float]:
    """Amount per category the ledger should hold for this log"""
    has_labor = log.labor_cost is not None and log.labor_cost > 0
    has_parts = log.parts_cost is not None and log.parts_cost > 0
    has_total = log.total_cost is not None and log.total_cost > 0

    if has_total and not has_labor and not has_parts:
        return {TransactionCategory.OTHER: log.total_cost}

    amounts: Dict[TransactionCategory, float] = {}
    if has_labor:
        amounts[TransactionCategory.LABOR] = log.labor_cost
    if has_parts:
        amounts[TransactionCategory.PARTS] = log.parts_cost

    other = calculate_other_cost(log.total_cost, log.labor_cost, log.parts_cost)
    if other > 0:
        amounts[TransactionCategory.OTHER] = other
    return amounts


def build_maintenance_transactions(log: MaintenanceLog) -> List[TransactionLine]:
    """Line items for a newly created maintenance log"""
    return [
        TransactionLine(
            title=f"{log.entry_title}:{category.title_suffix}",
            transaction_date=log.date_performed,
            amount=amount,
            category=category,
            reference_id=log.id
        )
        for category, amount in required_amounts(log).items()
    ]


@dataclass
class TransactionSyncPlan:
    """Ledger changes needed after a maintenance log edit"""
    updates: Dict[str, Dict[str, Any]] = field(default_factory=dict)  # transaction id -> patch
    inserts: List[TransactionLine] = field(default_factory=list)
    voids: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.updates or self.inserts or self.voids)


def plan_transaction_sync(log: MaintenanceLog, existing: List[Dict[str, Any]]) -> TransactionSyncPlan:
    """
    Compare required line items with the log's live transactions

    Args:
        log: Edited maintenance log
        existing: Non-voided transactions referencing the log (id, category)
    """
    existing_by_category = {tx.get('category'): tx.get('id') for tx in existing}
    plan = TransactionSyncPlan()

    for line in build_maintenance_transactions(log):
        existing_id = existing_by_category.pop(line.category.value, None)
        if existing_id:
            plan.updates[existing_id] = {
                'title': line.title,
                'transaction_date': line.to_dict()['transaction_date'],
                'amount': line.amount,
                'status': line.status
            }
        else:
            plan.inserts.append(line)

    plan.voids = [tx_id for tx_id in existing_by_category.values() if tx_id]
    return plan


def _owned(line: TransactionLine, user_id: str, aircraft_id: str) -> Dict[str, Any]:
    return {**line.to_dict(), 'user_id': user_id, 'aircraft_id': aircraft_id}


def _live_transactions(persistence: IPersistence, log_id: str, user_id: str) -> List[Dict[str, Any]]:
    rows = persistence.query(TRANSACTIONS_TABLE, {
        'reference_id': log_id,
        'reference_type': "Maintenance",
        'user_id': user_id
    })
    return [row for row in rows if row.get('status') != VOIDED]


def create_maintenance_transactions(
    persistence: IPersistence,
    user_id: str,
    aircraft_id: str,
    log: MaintenanceLog
) -> int:
    """Insert line items for a new log; returns the number created"""
    lines = build_maintenance_transactions(log)
    for line in lines:
        persistence.insert(TRANSACTIONS_TABLE, _owned(line, user_id, aircraft_id))
    logger.info(f"Created {len(lines)} transactions for maintenance log {log.id}")
    return len(lines)


def update_maintenance_transactions(
    persistence: IPersistence,
    user_id: str,
    aircraft_id: str,
    log: MaintenanceLog
) -> TransactionSyncPlan:
    """Bring the ledger in line with an edited log and return what changed"""
    plan = plan_transaction_sync(log, _live_transactions(persistence, log.id, user_id))

    for tx_id, patch in plan.updates.items():
        persistence.update(TRANSACTIONS_TABLE, tx_id, patch)
    for line in plan.inserts:
        persistence.insert(TRANSACTIONS_TABLE, _owned(line, user_id, aircraft_id))
    for tx_id in plan.voids:
        persistence.update(TRANSACTIONS_TABLE, tx_id, {'status': VOIDED})

    logger.info(
        f"Synced transactions for maintenance log {log.id}: "
        f"{len(plan.updates)} updated, {len(plan.inserts)} created, {len(plan.voids)} voided"
    )
    return plan


def void_maintenance_transactions(persistence: IPersistence, log_id: str, user_id: str) -> int:
    """Void every live transaction of a deleted log; returns the number voided"""
    live = _live_transactions(persistence, log_id, user_id)
    for row in live:
        persistence.update(TRANSACTIONS_TABLE, row['id'], {'status': VOIDED})
    return len(live)
