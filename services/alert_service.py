"""
Alert Service - Notification Urgency

Classifies notifications as normal / alert / due against current state:
today's date for calendar notifications, the aircraft counters for
counter notifications. Results are derived on every call and never stored.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple
from datetime import date

from models.counters import CounterSnapshot
from models.notification import AlertStatus, Notification
from utils.date_utils import days_until

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentState:
    """What a notification is measured against"""
    today: Optional[date] = None
    counters: Optional[CounterSnapshot] = None

    @classmethod
    def now(cls, counters: Optional[CounterSnapshot] = None) -> 'CurrentState':
        return cls(today=date.today(), counters=counters)


def status_from_remaining(remaining: float, threshold: float) -> AlertStatus:
    """Due at or below zero, alert at or below threshold, otherwise normal"""
    if remaining <= 0:
        return AlertStatus.DUE
    if remaining <= threshold:
        return AlertStatus.ALERT
    return AlertStatus.NORMAL


def remaining_days(due_date: date, today: date) -> int:
    """Calendar days until due_date (negative when overdue)"""
    return days_until(due_date, today)


def counter_remaining(notification: Notification, counters: Optional[CounterSnapshot]) -> Optional[float]:
    """
    Hours left before a counter notification is due

    Returns:
        target - current, or None when counters are unavailable or the
        notification has no recognised counter type
    """
    if counters is None or notification.counter_type is None:
        return None
    target = notification.initial_counter_value or 0.0
    return target - counters.value_for(notification.counter_type)


def classify(
    notification: Notification,
    state: CurrentState,
    occurrence_date: Optional[date] = None
) -> AlertStatus:
    """
    Urgency of a notification (or one of its occurrences)

    Args:
        notification: Notification to classify
        state: Today's date and/or current counters
        occurrence_date: Due date to use instead of the initial date

    Missing counters or a missing date always classify as NORMAL; nothing
    can be evaluated, so nothing is flagged.
    """
    if notification.is_counter_based:
        remaining = counter_remaining(notification, state.counters)
        if remaining is None:
            return AlertStatus.NORMAL
        return status_from_remaining(remaining, notification.alert_hours)

    due_date = occurrence_date or notification.initial_date
    if due_date is None or state.today is None:
        return AlertStatus.NORMAL
    return status_from_remaining(remaining_days(due_date, state.today), notification.alert_days)


def group_counter_notifications(
    notifications: Iterable[Notification],
    counters: Optional[CounterSnapshot]
) -> Dict[str, List[Tuple[Notification, float]]]:
    """
    Counter notifications grouped by counter label

    Each group is sorted by remaining hours, most urgent first. Empty when
    counters are unavailable.
    """
    if counters is None:
        return OrderedDict()

    groups: Dict[str, List[Tuple[Notification, float]]] = OrderedDict()
    for notification in notifications:
        if not notification.is_counter_based or notification.is_completed:
            continue
        remaining = counter_remaining(notification, counters)
        if remaining is None:
            logger.debug(f"Skipping notification {notification.id}: no counter type")
            continue
        groups.setdefault(notification.counter_type.value, []).append((notification, remaining))

    for items in groups.values():
        items.sort(key=lambda item: item[1])

    return groups
