"""Tests for alert status classification."""

from datetime import date, timedelta

import pytest

from models.counters import CounterSnapshot
from models.notification import AlertStatus, CounterType, Notification, NotificationBasis
from services.alert_service import (
    CurrentState,
    classify,
    counter_remaining,
    group_counter_notifications,
    status_from_remaining,
)


TODAY = date(2024, 6, 15)


def date_notification(days_out, alert_days=7):
    return Notification(
        id="d1",
        description="Pitot-static check",
        initial_date=TODAY + timedelta(days=days_out),
        alert_days=alert_days,
    )


def counter_notification(target, counter_type=CounterType.TACH, alert_hours=10.0, id="c1"):
    return Notification(
        id=id,
        description="100 hour inspection",
        basis=NotificationBasis.COUNTER,
        counter_type=counter_type,
        initial_counter_value=target,
        alert_hours=alert_hours,
    )


COUNTERS = CounterSnapshot(hobbs=1200.0, tach=950.0, airframe_total_time=3000.0)


@pytest.mark.parametrize("days_out,expected", [
    (30, AlertStatus.NORMAL),
    (8, AlertStatus.NORMAL),
    (7, AlertStatus.ALERT),
    (1, AlertStatus.ALERT),
    (0, AlertStatus.DUE),
    (-3, AlertStatus.DUE),
])
def test_date_thresholds(days_out, expected):
    assert classify(date_notification(days_out), CurrentState(today=TODAY)) == expected


def test_custom_alert_days():
    state = CurrentState(today=TODAY)
    assert classify(date_notification(14, alert_days=14), state) == AlertStatus.ALERT
    assert classify(date_notification(15, alert_days=14), state) == AlertStatus.NORMAL


def test_occurrence_date_overrides_initial_date():
    notification = date_notification(-60)
    state = CurrentState(today=TODAY)
    assert classify(notification, state, occurrence_date=TODAY + timedelta(days=20)) == AlertStatus.NORMAL


def test_date_notification_without_today_is_normal():
    assert classify(date_notification(-5), CurrentState()) == AlertStatus.NORMAL


@pytest.mark.parametrize("target,expected", [
    (980.0, AlertStatus.NORMAL),
    (960.5, AlertStatus.NORMAL),
    (960.0, AlertStatus.ALERT),
    (950.1, AlertStatus.ALERT),
    (950.0, AlertStatus.DUE),
    (900.0, AlertStatus.DUE),
])
def test_counter_thresholds(target, expected):
    assert classify(counter_notification(target), CurrentState(counters=COUNTERS)) == expected


def test_missing_counters_fail_open():
    overdue = counter_notification(1.0)
    assert classify(overdue, CurrentState(today=TODAY, counters=None)) == AlertStatus.NORMAL


def test_unknown_counter_type_is_normal():
    notification = counter_notification(1.0, counter_type=None)
    assert classify(notification, CurrentState(counters=COUNTERS)) == AlertStatus.NORMAL


def test_counter_remaining():
    assert counter_remaining(counter_notification(1250.0, CounterType.HOBBS), COUNTERS) == 50.0
    assert counter_remaining(counter_notification(1250.0), None) is None


def test_status_from_remaining():
    assert status_from_remaining(0, 10) == AlertStatus.DUE
    assert status_from_remaining(10, 10) == AlertStatus.ALERT
    assert status_from_remaining(10.5, 10) == AlertStatus.NORMAL


def test_group_counter_notifications_sorted_by_remaining():
    far = counter_notification(1100.0, id="far")
    near = counter_notification(955.0, id="near")
    airframe = counter_notification(3050.0, CounterType.AIRFRAME_TT, id="af")
    date_based = date_notification(3)

    groups = group_counter_notifications([far, airframe, near, date_based], COUNTERS)

    assert list(groups) == ["Tach", "Airframe TT"]
    assert [(n.id, remaining) for n, remaining in groups["Tach"]] == [("near", 5.0), ("far", 150.0)]
    assert groups["Airframe TT"][0][1] == 50.0


def test_group_counter_notifications_without_counters():
    assert group_counter_notifications([counter_notification(10.0)], None) == {}
