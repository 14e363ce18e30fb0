"""
Exception hierarchy for SneakerSecure.

Provides structured error handling with specific error types for the storage,
catalog, collection and migration layers.
"""

import functools
import sqlite3
from typing import Any, Callable, Dict, List, Optional, TypeVar

F = TypeVar("F", bound=Callable[..., Any])


class SneakerSecureError(Exception):
    """Base exception for all SneakerSecure errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        component: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.component = component

    def __str__(self) -> str:
        """String representation of the error."""
        base_msg = f"[{self.component or 'SneakerSecure'}] {self.message}"
        if self.error_code:
            base_msg = f"[{self.error_code}] {base_msg}"
        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "component": self.component,
            "details": self.details,
        }


class ConfigurationError(SneakerSecureError):
    """Exception raised when configuration is invalid or missing."""

    pass


class StorageError(SneakerSecureError):
    """Exception raised when key-value storage operations fail."""

    pass


class StorageIOError(StorageError):
    """Exception raised when the underlying storage device is unavailable.

    Fatal to the calling operation; callers may retry.
    """

    def __init__(self, operation: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            f"Storage {operation} failed: {reason}",
            error_code="STORAGE_IO_ERROR",
            details={"operation": operation, "reason": reason},
            **kwargs,
        )


class NotFoundError(SneakerSecureError):
    """Exception raised when a referenced id is absent where it must exist."""

    def __init__(self, item_id: str, namespace: str = "catalog", **kwargs: Any) -> None:
        super().__init__(
            f"No {namespace} entry with id '{item_id}'",
            error_code="NOT_FOUND",
            details={"item_id": item_id, "namespace": namespace},
            **kwargs,
        )


class ValidationError(SneakerSecureError):
    """Exception raised when input validation fails."""

    def __init__(self, field: str, value: Any, reason: str, **kwargs: Any) -> None:
        super().__init__(
            f"Validation failed for field '{field}': {reason}",
            error_code="VALIDATION_ERROR",
            details={
                "field": field,
                "value": str(value),
                "reason": reason,
            },
            **kwargs,
        )

    @property
    def field(self) -> str:
        return str(self.details["field"])


class MigrationError(SneakerSecureError):
    """Exception raised when the legacy migration fails."""

    pass


class MigrationIncompleteError(MigrationError):
    """Exception raised when migrated data was written but the completion flag was not.

    Re-running the migration with the same legacy blob is safe.
    """

    def __init__(
        self, migrated: int, skipped: int, reason: str, **kwargs: Any
    ) -> None:
        super().__init__(
            f"Migration wrote {migrated} entries but could not be marked complete: {reason}",
            error_code="MIGRATION_INCOMPLETE",
            details={"migrated": migrated, "skipped": skipped, "reason": reason},
            **kwargs,
        )


class PermissionDeniedError(SneakerSecureError):
    """Exception raised when a session lacks the capability for an action."""

    def __init__(self, username: str, action: str, **kwargs: Any) -> None:
        super().__init__(
            f"User '{username}' is not allowed to {action}",
            error_code="PERMISSION_DENIED",
            details={"username": username, "action": action},
            **kwargs,
        )


# Error handling utilities


def handle_storage_error(operation: str) -> Callable[[F], F]:
    """Decorator converting driver and OS errors into StorageIOError."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except StorageError:
                raise
            except (sqlite3.Error, OSError) as e:
                raise StorageIOError(
                    operation, str(e), component=func.__qualname__
                ) from e

        return wrapper  # type: ignore

    return decorator


def collect_field_errors(errors: List[Dict[str, Any]]) -> str:
    """Pick the first offending field name from a list of pydantic error dicts."""
    for error in errors:
        loc = error.get("loc") or ()
        if loc:
            return ".".join(str(part) for part in loc)
    return "payload"
