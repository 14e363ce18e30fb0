"""
Tests for structured logging helpers.
"""

import pytest

from sneaker_secure.core.logging import (
    StorageTimer,
    StructuredLogger,
    clear_operation_context,
    configure_logging,
    generate_operation_id,
    get_logger,
    item_id_var,
    operation_id_var,
    set_operation_context,
)


class TestOperationContext:
    """Correlation context variables."""

    def setup_method(self) -> None:
        clear_operation_context()

    def teardown_method(self) -> None:
        clear_operation_context()

    def test_set_and_clear(self) -> None:
        set_operation_context(operation_id="op-1", item_id="item-1")
        assert operation_id_var.get() == "op-1"
        assert item_id_var.get() == "item-1"

        clear_operation_context()
        assert operation_id_var.get() is None
        assert item_id_var.get() is None

    def test_context_merged_into_events(self) -> None:
        logger = get_logger("test")
        set_operation_context(operation_id="op-2")
        assert logger._get_context() == {"operation_id": "op-2"}

    def test_generate_operation_id_unique(self) -> None:
        assert generate_operation_id() != generate_operation_id()


class TestStorageTimer:
    def test_records_duration(self) -> None:
        with StorageTimer(StructuredLogger("test"), "migration", "Test") as timer:
            pass
        assert timer.duration_ms is not None
        assert timer.duration_ms >= 0

    def test_error_status_does_not_swallow(self) -> None:
        with pytest.raises(RuntimeError):
            with StorageTimer(StructuredLogger("test"), "migration", "Test"):
                raise RuntimeError("boom")


class TestConfigureLogging:
    @pytest.mark.parametrize("json_format", [True, False])
    def test_configure(self, json_format: bool) -> None:
        configure_logging("debug", json_format=json_format)
        get_logger("test").info("configured", json_format=json_format)
