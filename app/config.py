"""
Application Configuration

Centralized configuration management with validation.
Loads settings from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass
from typing import Optional
import logging

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


@dataclass
class SupabaseConfig:
    """Supabase database configuration"""
    url: str
    key: str

    @classmethod
    def from_env(cls) -> Optional['SupabaseConfig']:
        """Load Supabase config from environment"""
        url = os.environ.get('SUPABASE_URL')
        key = os.environ.get('SUPABASE_KEY')

        if not url or not key:
            logger.warning("SUPABASE_URL or SUPABASE_KEY not set")
            return None

        return cls(url=url, key=key)

    def is_valid(self) -> bool:
        """Check if config is valid"""
        return bool(self.url and self.key)


@dataclass
class NotificationConfig:
    """Recurrence lookahead and alert threshold defaults"""
    # Calendar matching only projects this many occurrences past the initial date
    lookahead_occurrences: int = 10
    default_alert_days: int = 7
    default_alert_hours: float = 10.0

    @classmethod
    def from_env(cls) -> 'NotificationConfig':
        """Load notification settings from environment"""
        return cls(
            lookahead_occurrences=int(os.environ.get('CALENDAR_LOOKAHEAD_OCCURRENCES', '10')),
            default_alert_days=int(os.environ.get('DEFAULT_ALERT_DAYS', '7')),
            default_alert_hours=float(os.environ.get('DEFAULT_ALERT_HOURS', '10'))
        )


@dataclass
class AppConfig:
    """Main application configuration"""
    debug: bool
    secret_key: str
    log_level: str
    supabase: Optional[SupabaseConfig]
    notifications: NotificationConfig

    @classmethod
    def from_env(cls) -> 'AppConfig':
        """Load all configuration from environment"""
        return cls(
            debug=os.environ.get('DEBUG', 'false').lower() == 'true',
            secret_key=os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production'),
            log_level=os.environ.get('LOG_LEVEL', 'INFO'),
            supabase=SupabaseConfig.from_env(),
            notifications=NotificationConfig.from_env()
        )

    def validate(self) -> list:
        """Validate configuration and return list of issues"""
        issues = []

        if self.secret_key == 'dev-secret-key-change-in-production':
            issues.append("SECRET_KEY should be changed in production")

        if not self.supabase:
            issues.append("Supabase not configured - persistence endpoints disabled")

        if self.notifications.lookahead_occurrences < 1:
            issues.append("CALENDAR_LOOKAHEAD_OCCURRENCES must be at least 1")

        return issues


# Singleton config instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get or create application config singleton"""
    global _config
    if _config is None:
        _config = AppConfig.from_env()

        # Log configuration status
        issues = _config.validate()
        for issue in issues:
            logger.warning(f"Config: {issue}")

        logger.info(f"Config loaded - Debug: {_config.debug}, Supabase: {_config.supabase is not None}")

    return _config


def reload_config() -> AppConfig:
    """Force reload configuration from environment"""
    global _config
    _config = None
    return get_config()
