"""
Tests for custom exceptions.
"""

import sqlite3

import pytest

from sneaker_secure.core.exceptions import (
    ConfigurationError,
    MigrationIncompleteError,
    NotFoundError,
    PermissionDeniedError,
    SneakerSecureError,
    StorageError,
    StorageIOError,
    ValidationError,
    collect_field_errors,
    handle_storage_error,
)


class TestExceptions:
    """Test custom exception classes."""

    def test_base_error(self) -> None:
        """Test SneakerSecureError."""
        error = SneakerSecureError("Store failed")
        assert str(error) == "[SneakerSecure] Store failed"

    def test_base_error_with_component_and_code(self) -> None:
        """Test SneakerSecureError with component and error code."""
        error = SneakerSecureError("Test error", error_code="ERR001", component="Catalog")
        assert str(error) == "[ERR001] [Catalog] Test error"

    def test_to_dict(self) -> None:
        """Test to_dict method."""
        error = NotFoundError("abc", component="CatalogRepository")
        error_dict = error.to_dict()

        assert error_dict["error_type"] == "NotFoundError"
        assert error_dict["error_code"] == "NOT_FOUND"
        assert error_dict["component"] == "CatalogRepository"
        assert error_dict["details"] == {"item_id": "abc", "namespace": "catalog"}

    def test_validation_error(self) -> None:
        """Test ValidationError."""
        error = ValidationError("id", "", "id must be a non-empty string")
        assert "Validation failed for field 'id'" in str(error)
        assert error.field == "id"
        assert error.details["reason"] == "id must be a non-empty string"

    def test_storage_io_error(self) -> None:
        """Test StorageIOError details."""
        error = StorageIOError("set", "disk full")
        assert error.error_code == "STORAGE_IO_ERROR"
        assert error.details == {"operation": "set", "reason": "disk full"}
        assert isinstance(error, StorageError)

    def test_migration_incomplete_error(self) -> None:
        """Test MigrationIncompleteError."""
        error = MigrationIncompleteError(3, 1, "flag write failed")
        assert error.details["migrated"] == 3
        assert error.details["skipped"] == 1
        assert "could not be marked complete" in error.message

    def test_permission_denied_error(self) -> None:
        """Test PermissionDeniedError."""
        error = PermissionDeniedError("bob", "edit catalog items")
        assert "bob" in error.message
        assert error.error_code == "PERMISSION_DENIED"

    def test_exception_inheritance(self) -> None:
        """Test exception inheritance hierarchy."""
        for cls in (
            ConfigurationError,
            StorageIOError,
            NotFoundError,
            ValidationError,
            MigrationIncompleteError,
            PermissionDeniedError,
        ):
            assert issubclass(cls, SneakerSecureError)


class TestHandleStorageError:
    """Test the storage error conversion decorator."""

    def test_converts_sqlite_error(self) -> None:
        @handle_storage_error("get")
        def broken() -> None:
            raise sqlite3.OperationalError("database is locked")

        with pytest.raises(StorageIOError) as exc_info:
            broken()
        assert exc_info.value.details["operation"] == "get"
        assert "database is locked" in exc_info.value.details["reason"]
        assert isinstance(exc_info.value.__cause__, sqlite3.OperationalError)

    def test_converts_os_error(self) -> None:
        @handle_storage_error("open")
        def broken() -> None:
            raise PermissionError("read-only filesystem")

        with pytest.raises(StorageIOError):
            broken()

    def test_passes_storage_errors_through(self) -> None:
        original = StorageIOError("set", "already converted")

        @handle_storage_error("set")
        def broken() -> None:
            raise original

        with pytest.raises(StorageIOError) as exc_info:
            broken()
        assert exc_info.value is original

    def test_leaves_other_errors_alone(self) -> None:
        @handle_storage_error("get")
        def broken() -> None:
            raise KeyError("not a storage error")

        with pytest.raises(KeyError):
            broken()

    def test_returns_value(self) -> None:
        @handle_storage_error("get")
        def ok() -> int:
            return 42

        assert ok() == 42


class TestCollectFieldErrors:
    def test_first_location(self) -> None:
        errors = [{"loc": ("history", 0, "name"), "msg": "Field required"}]
        assert collect_field_errors(errors) == "history.0.name"

    def test_no_location(self) -> None:
        assert collect_field_errors([{"loc": (), "msg": "Invalid JSON"}]) == "payload"
        assert collect_field_errors([]) == "payload"
