"""
Notification Data Models

Maintenance notifications are either calendar based (due on a date and
optionally recurring) or counter based (due when an aircraft counter
reaches a target value).
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any
from datetime import date
from enum import Enum

from utils.date_utils import to_date


DEFAULT_ALERT_DAYS = 7
DEFAULT_ALERT_HOURS = 10.0


class Recurrence(Enum):
    """Recurrence rule labels as stored in the notifications table"""
    NONE = "None"
    WEEKLY = "Weekly"
    BI_MONTHLY = "Bi-Monthly"
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    SEMI_ANNUAL = "Semi-Annual"
    YEARLY = "Yearly"

    @classmethod
    def from_string(cls, value: Optional[str]) -> 'Recurrence':
        """Parse recurrence label, unknown values mean no recurrence"""
        if not value:
            return cls.NONE

        value_clean = str(value).strip()
        for rule in cls:
            if rule.value.lower() == value_clean.lower():
                return rule
        return cls.NONE


class NotificationBasis(Enum):
    """What a notification's due-ness is measured in"""
    DATE = "Date"
    COUNTER = "Counter"

    @classmethod
    def from_string(cls, value: Optional[str]) -> 'NotificationBasis':
        if value and str(value).strip().lower() == "counter":
            return cls.COUNTER
        return cls.DATE


class CounterType(Enum):
    """Aircraft counters a notification can track"""
    HOBBS = "Hobbs"
    TACH = "Tach"
    AIRFRAME_TT = "Airframe TT"
    ENGINE_TT = "Engine TT"
    PROP_TT = "Prop TT"

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional['CounterType']:
        """Parse counter label, None when unknown"""
        if not value:
            return None
        for counter in cls:
            if counter.value == str(value).strip():
                return counter
        return None

    @property
    def field_name(self) -> str:
        """Column holding this counter in aircraft_counters"""
        return _COUNTER_FIELDS[self]


_COUNTER_FIELDS = {
    CounterType.HOBBS: 'hobbs',
    CounterType.TACH: 'tach',
    CounterType.AIRFRAME_TT: 'airframe_total_time',
    CounterType.ENGINE_TT: 'engine_total_time',
    CounterType.PROP_TT: 'prop_total_time',
}


class AlertStatus(Enum):
    """Derived urgency of a notification occurrence, never persisted"""
    NORMAL = "normal"
    ALERT = "alert"
    DUE = "due"


@dataclass
class Notification:
    """Maintenance notification entity"""
    id: str
    description: str
    basis: NotificationBasis = NotificationBasis.DATE
    initial_date: Optional[date] = None
    recurrence: Recurrence = Recurrence.NONE
    counter_type: Optional[CounterType] = None
    initial_counter_value: Optional[float] = None
    alert_days: int = DEFAULT_ALERT_DAYS
    alert_hours: float = DEFAULT_ALERT_HOURS
    is_completed: bool = False
    type: Optional[str] = None
    component: Optional[str] = None
    notes: Optional[str] = None
    aircraft_id: Optional[str] = None
    subscription_id: Optional[str] = None

    @property
    def is_counter_based(self) -> bool:
        return self.basis == NotificationBasis.COUNTER

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        default_alert_days: int = DEFAULT_ALERT_DAYS,
        default_alert_hours: float = DEFAULT_ALERT_HOURS
    ) -> 'Notification':
        """
        Create from a notifications table row

        Rows without alert thresholds take the given defaults
        (NotificationConfig supplies them in the API).
        """
        alert_days = data.get('alert_days')
        alert_hours = data.get('alert_hours')
        counter_value = data.get('initial_counter_value')

        return cls(
            id=str(data.get('id', '')),
            description=data.get('description') or '',
            basis=NotificationBasis.from_string(data.get('notification_basis')),
            initial_date=to_date(data.get('initial_date')),
            recurrence=Recurrence.from_string(data.get('recurrence')),
            counter_type=CounterType.from_string(data.get('counter_type')),
            initial_counter_value=float(counter_value) if counter_value is not None else None,
            alert_days=int(alert_days) if alert_days is not None else default_alert_days,
            alert_hours=float(alert_hours) if alert_hours is not None else default_alert_hours,
            is_completed=bool(data.get('is_completed', False)),
            type=data.get('type'),
            component=data.get('component'),
            notes=data.get('notes'),
            aircraft_id=data.get('aircraft_id'),
            subscription_id=data.get('subscription_id')
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'id': self.id,
            'description': self.description,
            'notification_basis': self.basis.value,
            'initial_date': self.initial_date.isoformat() if self.initial_date else None,
            'recurrence': self.recurrence.value,
            'counter_type': self.counter_type.value if self.counter_type else None,
            'initial_counter_value': self.initial_counter_value,
            'alert_days': self.alert_days,
            'alert_hours': self.alert_hours,
            'is_completed': self.is_completed,
            'type': self.type,
            'component': self.component,
            'notes': self.notes,
            'aircraft_id': self.aircraft_id,
            'subscription_id': self.subscription_id
        }
