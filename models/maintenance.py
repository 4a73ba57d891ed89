"""
Maintenance Log and Transaction Models

Used for calendar entries (performed / next due dates) and for turning a
log's cost fields into ledger line items.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any
from datetime import date
from enum import Enum

from utils.date_utils import to_date


class TransactionCategory(Enum):
    """Ledger category of a maintenance line item"""
    LABOR = "Maintenance Labor"
    PARTS = "Maintenance Parts"
    OTHER = "Other"

    @property
    def title_suffix(self) -> str:
        """Short label appended to the log title"""
        return {
            TransactionCategory.LABOR: "Labor",
            TransactionCategory.PARTS: "Parts",
            TransactionCategory.OTHER: "Other",
        }[self]


def _cost(value: Any) -> Optional[float]:
    if value is None or value == '':
        return None
    return float(value)


@dataclass
class MaintenanceLog:
    """Maintenance log entry"""
    id: str
    entry_title: str
    date_performed: Optional[date] = None
    next_due_date: Optional[date] = None
    labor_cost: Optional[float] = None
    parts_cost: Optional[float] = None
    total_cost: Optional[float] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    performed_by_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MaintenanceLog':
        """Create from a maintenance_logs row"""
        return cls(
            id=str(data.get('id', '')),
            entry_title=data.get('entry_title') or '',
            date_performed=to_date(data.get('date_performed')),
            next_due_date=to_date(data.get('next_due_date')),
            labor_cost=_cost(data.get('labor_cost')),
            parts_cost=_cost(data.get('parts_cost')),
            total_cost=_cost(data.get('total_cost')),
            category=data.get('category'),
            subcategory=data.get('subcategory'),
            performed_by_name=data.get('performed_by_name')
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'entry_title': self.entry_title,
            'date_performed': self.date_performed.isoformat() if self.date_performed else None,
            'next_due_date': self.next_due_date.isoformat() if self.next_due_date else None,
            'labor_cost': self.labor_cost,
            'parts_cost': self.parts_cost,
            'total_cost': self.total_cost,
            'category': self.category,
            'subcategory': self.subcategory,
            'performed_by_name': self.performed_by_name
        }


@dataclass
class TransactionLine:
    """Debit line item derived from a maintenance log"""
    title: str
    transaction_date: Optional[date]
    amount: float
    category: TransactionCategory
    reference_id: str
    direction: str = "Debit"
    intent: str = "Maintenance"
    status: str = "Pending"
    source: str = "Maintenance"
    reference_type: str = "Maintenance"
    include_in_cash_flow: bool = True
    include_in_ownership_total: bool = True
    include_in_cost_per_hour: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a transactions table row (without owner columns)"""
        return {
            'title': self.title,
            'transaction_date': self.transaction_date.isoformat() if self.transaction_date else None,
            'amount': self.amount,
            'direction': self.direction,
            'intent': self.intent,
            'category': self.category.value,
            'status': self.status,
            'source': self.source,
            'reference_id': self.reference_id,
            'reference_type': self.reference_type,
            'include_in_cash_flow': self.include_in_cash_flow,
            'include_in_ownership_total': self.include_in_ownership_total,
            'include_in_cost_per_hour': self.include_in_cost_per_hour
        }
