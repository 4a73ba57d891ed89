"""
Date Parsing and Manipulation Utilities

Provides consistent date handling across the application.

Month arithmetic clamps to the last valid day of the target month
(Jan 31 + 1 month -> Feb 28, or Feb 29 in a leap year).
"""

from typing import Any, Optional
from datetime import datetime, date, timedelta

from dateutil.relativedelta import relativedelta


def parse_date(date_str: str) -> Optional[date]:
    """
    Parse date string in various formats

    Supported formats:
    - YYYY-MM-DD
    - ISO-8601 timestamps (2024-01-01T10:00:00Z, 2024-01-01T10:00:00+00:00)
    - DD/MM/YYYY
    - DD.MM.YYYY

    Args:
        date_str: Date string to parse

    Returns:
        Parsed date or None if invalid
    """
    if not date_str:
        return None

    date_str = str(date_str).strip()

    # Timestamps coming back from Postgres / JSON exports
    if 'T' in date_str or ' ' in date_str:
        try:
            return datetime.fromisoformat(date_str.replace('Z', '+00:00')).date()
        except ValueError:
            pass

    formats = [
        '%Y-%m-%d',
        '%d/%m/%Y',
        '%d.%m.%Y',
        '%Y%m%d',
    ]

    for fmt in formats:
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue

    return None


def to_date(value: Any) -> Optional[date]:
    """Coerce a date, datetime or date string to a calendar date"""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date(value)


def add_weeks(start: date, weeks: int) -> date:
    """Add whole weeks"""
    return start + timedelta(weeks=weeks)


def add_months(start: date, months: int) -> date:
    """Add calendar months, clamping to the end of shorter months"""
    return start + relativedelta(months=months)


def days_until(target: date, today: date) -> int:
    """
    Whole calendar days from today to target

    Both sides are calendar dates (already truncated to midnight), so the
    difference is exact and never drifts with the time of day.
    Negative when target is in the past.
    """
    return (to_date(target) - to_date(today)).days


def is_same_day(a: Any, b: Any) -> bool:
    """True when both values fall on the same calendar day"""
    day_a = to_date(a)
    day_b = to_date(b)
    return day_a is not None and day_a == day_b


def format_date_for_display(d: date, include_day: bool = True) -> str:
    """Format date for dashboard display"""
    if include_day:
        return d.strftime('%a, %d %b %Y')  # Mon, 15 Jan 2024
    return d.strftime('%d %b %Y')  # 15 Jan 2024
