"""Tests for environment-driven configuration."""

import pytest

from app import config as config_module
from app.config import AppConfig, NotificationConfig, SupabaseConfig


@pytest.fixture(autouse=True)
def reset_singleton():
    config_module._config = None
    yield
    config_module._config = None


def test_supabase_config_requires_both_values(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.delenv("SUPABASE_KEY", raising=False)
    assert SupabaseConfig.from_env() is None

    monkeypatch.setenv("SUPABASE_KEY", "anon-key")
    config = SupabaseConfig.from_env()
    assert config.url == "https://example.supabase.co"
    assert config.is_valid()


def test_notification_defaults(monkeypatch):
    for name in ("CALENDAR_LOOKAHEAD_OCCURRENCES", "DEFAULT_ALERT_DAYS", "DEFAULT_ALERT_HOURS"):
        monkeypatch.delenv(name, raising=False)

    config = NotificationConfig.from_env()

    assert config.lookahead_occurrences == 10
    assert config.default_alert_days == 7
    assert config.default_alert_hours == 10.0


def test_lookahead_override(monkeypatch):
    monkeypatch.setenv("CALENDAR_LOOKAHEAD_OCCURRENCES", "24")
    assert NotificationConfig.from_env().lookahead_occurrences == 24


def test_validate_reports_issues(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.setenv("CALENDAR_LOOKAHEAD_OCCURRENCES", "0")

    issues = AppConfig.from_env().validate()

    assert any("SECRET_KEY" in issue for issue in issues)
    assert any("Supabase" in issue for issue in issues)
    assert any("LOOKAHEAD" in issue for issue in issues)


def test_reload_config_picks_up_changes(monkeypatch):
    monkeypatch.setenv("DEBUG", "false")
    assert config_module.get_config().debug is False

    monkeypatch.setenv("DEBUG", "true")
    assert config_module.get_config().debug is False
    assert config_module.reload_config().debug is True
