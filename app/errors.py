"""
Custom Application Exceptions

Defines structured exception hierarchy for consistent error handling.
Import/migration failures are raised internally and converted into
MigrationResult objects at the migration entry point.
"""

from typing import Any, Optional


class AppError(Exception):
    """Base application exception"""

    def __init__(
        self,
        message: str,
        code: str = "APP_ERROR",
        details: Any = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details

    def to_dict(self) -> dict:
        """Convert exception to dictionary for API responses"""
        return {
            'error': True,
            'code': self.code,
            'message': self.message,
            'details': self.details
        }


class ValidationError(AppError):
    """Input validation failed"""

    def __init__(self, message: str, field: Optional[str] = None, details: Any = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={'field': field, **({'info': details} if details else {})}
        )
        self.field = field


class StructuralError(ValidationError):
    """Import payload failed basic shape validation"""

    def __init__(self, message: str, table: Optional[str] = None):
        super().__init__(
            message=message,
            field=f"tables.{table}" if table else None,
            details={'table': table} if table else None
        )
        self.table = table
        self.code = "STRUCTURAL_ERROR"


class FutureVersionError(AppError):
    """Import file was written by a newer schema than this application knows"""

    def __init__(self, import_version: str, current_version: str):
        super().__init__(
            message=(
                f"Import file version ({import_version}) is newer than supported "
                f"version ({current_version}). Please update the application."
            ),
            code="FUTURE_VERSION",
            details={'import_version': import_version, 'current_version': current_version}
        )


class MigrationStepError(AppError):
    """A single migration transform failed"""

    def __init__(self, from_version: str, to_version: str, reason: str):
        super().__init__(
            message=f"Migration failed ({from_version} → {to_version}): {reason}",
            code="MIGRATION_STEP_FAILED",
            details={'from_version': from_version, 'to_version': to_version, 'reason': reason}
        )
        self.from_version = from_version
        self.to_version = to_version


class NotFoundError(AppError):
    """Resource not found"""

    def __init__(self, resource: str, identifier: Any = None):
        super().__init__(
            message=f"{resource} not found",
            code="NOT_FOUND",
            details={'resource': resource, 'identifier': identifier}
        )


class DatabaseError(AppError):
    """Database operation failed"""

    def __init__(self, operation: str, details: Any = None):
        super().__init__(
            message=f"Database {operation} failed",
            code="DATABASE_ERROR",
            details=details
        )


class ServiceUnavailableError(AppError):
    """External service unavailable"""

    def __init__(self, service: str, reason: Optional[str] = None):
        super().__init__(
            message=f"{service} is currently unavailable",
            code="SERVICE_UNAVAILABLE",
            details={'service': service, 'reason': reason}
        )


class ConfigurationError(AppError):
    """Application configuration error"""

    def __init__(self, setting: str, reason: Optional[str] = None):
        super().__init__(
            message=f"Configuration error: {setting}",
            code="CONFIG_ERROR",
            details={'setting': setting, 'reason': reason}
        )


class DuplicateMigrationError(ConfigurationError):
    """Two registered migrations start from the same version"""

    def __init__(self, from_version: str):
        super().__init__(
            setting="migrations",
            reason=f"more than one migration declared from version {from_version}"
        )
        self.from_version = from_version
        self.code = "DUPLICATE_MIGRATION"


class UnknownPathWarning(UserWarning):
    """No migration chain reaches the current version; data imported as-is"""
