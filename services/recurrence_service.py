"""
Recurrence Service - Calendar Occurrence Projection

Projects date-based notifications forward from their initial date and
matches them against calendar days.

Only the first DEFAULT_LOOKAHEAD occurrences after the initial date are
ever considered (configurable through CALENDAR_LOOKAHEAD_OCCURRENCES).
A Weekly notification therefore never shows up more than ten weeks after
its initial date; later days are reported as "not occurring".
"""

import logging
from typing import Any, Dict, Iterable, List, Optional
from datetime import date

from models.maintenance import MaintenanceLog
from models.notification import Notification, Recurrence
from utils.date_utils import add_weeks, add_months, is_same_day, to_date

logger = logging.getLogger(__name__)


DEFAULT_LOOKAHEAD = 10

# (unit, multiplier) per rule
_RECURRENCE_STEPS = {
    Recurrence.WEEKLY: ('weeks', 1),
    Recurrence.BI_MONTHLY: ('weeks', 2),
    Recurrence.MONTHLY: ('months', 1),
    Recurrence.QUARTERLY: ('months', 3),
    Recurrence.SEMI_ANNUAL: ('months', 6),
    Recurrence.YEARLY: ('months', 12),
}


def next_occurrence(initial_date: date, recurrence: Any, occurrence_index: int) -> date:
    """
    Date of the Nth occurrence after initial_date

    Months are added to the initial date in one step (not chained), so a
    Jan 31 monthly notification falls on Feb 29, Mar 31, Apr 30, ...

    Args:
        initial_date: Anchor date (occurrence 0)
        recurrence: Recurrence or its label; unknown/None returns initial_date
        occurrence_index: 1 for the first repeat, 2 for the second, ...
    """
    if not isinstance(recurrence, Recurrence):
        recurrence = Recurrence.from_string(recurrence)

    step = _RECURRENCE_STEPS.get(recurrence)
    if step is None:
        return initial_date

    unit, multiplier = step
    if unit == 'weeks':
        return add_weeks(initial_date, occurrence_index * multiplier)
    return add_months(initial_date, occurrence_index * multiplier)


def occurs_on_date(
    notification: Notification,
    target_date: date,
    lookahead: int = DEFAULT_LOOKAHEAD
) -> bool:
    """
    True when the notification falls on target_date

    Checks the initial date, then occurrences 1..lookahead in increasing
    order, stopping once an occurrence passes target_date.
    """
    initial_date = notification.initial_date
    target = to_date(target_date)
    if initial_date is None or target is None:
        return False

    if is_same_day(initial_date, target):
        return True

    for index in range(1, lookahead + 1):
        occurrence = next_occurrence(initial_date, notification.recurrence, index)
        if occurrence == target:
            return True
        if occurrence > target:
            break

    return False


def occurrence_dates(notification: Notification, lookahead: int = DEFAULT_LOOKAHEAD) -> List[date]:
    """Initial date plus every projected occurrence in the lookahead window"""
    if notification.initial_date is None:
        return []

    dates = [notification.initial_date]
    if notification.recurrence == Recurrence.NONE:
        return dates

    for index in range(1, lookahead + 1):
        dates.append(next_occurrence(notification.initial_date, notification.recurrence, index))
    return dates


def notifications_for_date(
    notifications: Iterable[Notification],
    day: date,
    lookahead: int = DEFAULT_LOOKAHEAD
) -> List[Notification]:
    """Open date-based notifications falling on day"""
    return [
        n for n in notifications
        if not n.is_completed
        and not n.is_counter_based
        and occurs_on_date(n, day, lookahead)
    ]


def maintenance_logs_for_date(logs: Iterable[MaintenanceLog], day: date) -> List[MaintenanceLog]:
    """Logs performed on, or next due on, day"""
    return [
        log for log in logs
        if is_same_day(log.date_performed, day) or is_same_day(log.next_due_date, day)
    ]


def build_calendar_day(
    notifications: Iterable[Notification],
    logs: Iterable[MaintenanceLog],
    day: date,
    lookahead: int = DEFAULT_LOOKAHEAD
) -> Dict[str, Any]:
    """
    Everything scheduled on one calendar day

    Returns:
        Dictionary with:
        - date: ISO date
        - notifications: matching notification dicts
        - maintenance_logs: matching log dicts, each flagged with is_next_due
    """
    day_notifications = notifications_for_date(notifications, day, lookahead)
    day_logs = maintenance_logs_for_date(logs, day)

    logger.debug(f"Calendar {day}: {len(day_notifications)} notifications, {len(day_logs)} logs")

    return {
        'date': day.isoformat(),
        'notifications': [n.to_dict() for n in day_notifications],
        'maintenance_logs': [
            {**log.to_dict(), 'is_next_due': is_same_day(log.next_due_date, day)}
            for log in day_logs
        ]
    }


def highlighted_dates(
    notifications: Iterable[Notification],
    logs: Iterable[MaintenanceLog],
    lookahead: int = DEFAULT_LOOKAHEAD
) -> Dict[str, List[str]]:
    """Distinct ISO dates to mark on the calendar, per source"""
    notification_days = set()
    for notification in notifications:
        if notification.is_completed or notification.is_counter_based:
            continue
        notification_days.update(occurrence_dates(notification, lookahead))

    log_days = set()
    for log in logs:
        for day in (log.date_performed, log.next_due_date):
            if day is not None:
                log_days.add(day)

    return {
        'notifications': sorted(d.isoformat() for d in notification_days),
        'maintenance_logs': sorted(d.isoformat() for d in log_days)
    }


def next_due_date(
    notification: Notification,
    today: date,
    lookahead: int = DEFAULT_LOOKAHEAD
) -> Optional[date]:
    """
    First occurrence on or after today within the lookahead window

    Falls back to the last known occurrence when every projected date is
    already past (the notification is overdue).
    """
    dates = occurrence_dates(notification, lookahead)
    if not dates:
        return None
    for occurrence in dates:
        if occurrence >= today:
            return occurrence
    return dates[-1]
