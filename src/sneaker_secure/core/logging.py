"""
Structured logging configuration with operation/item correlation.

Provides centralized logging configuration with correlation IDs for tracking
a single storage operation (scan, claim, edit, migration) across the catalog,
collection and migration layers.
"""

import logging
import time
import uuid
from contextvars import ContextVar
from typing import Any, Dict, List, Optional

import structlog
from structlog.stdlib import LoggerFactory

# Context variables for operation correlation
operation_id_var: ContextVar[Optional[str]] = ContextVar("operation_id", default=None)
item_id_var: ContextVar[Optional[str]] = ContextVar("item_id", default=None)


class StructuredLogger:
    """Structured logger with operation correlation support."""

    def __init__(self, name: str):
        self.name = name
        self.logger = structlog.get_logger(name)

    def _get_context(self) -> Dict[str, Any]:
        """Get current operation context for logging."""
        context = {}

        if operation_id := operation_id_var.get():
            context["operation_id"] = operation_id
        if item_id := item_id_var.get():
            context["item_id"] = item_id

        return context

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message with context."""
        self.logger.debug(message, **{**self._get_context(), **kwargs})

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message with context."""
        self.logger.info(message, **{**self._get_context(), **kwargs})

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message with context."""
        self.logger.warning(message, **{**self._get_context(), **kwargs})

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message with context."""
        self.logger.error(message, **{**self._get_context(), **kwargs})

    def log_storage_step(
        self,
        step: str,
        component: str,
        duration_ms: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        """Log a storage step with timing information."""
        log_data = {
            "step": step,
            "component": component,
            **self._get_context(),
            **kwargs,
        }

        if duration_ms is not None:
            log_data["duration_ms"] = duration_ms

        self.logger.info(f"Storage step: {step}", **log_data)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(name)


def set_operation_context(
    operation_id: Optional[str] = None, item_id: Optional[str] = None
) -> None:
    """Set operation context for correlation."""
    if operation_id:
        operation_id_var.set(operation_id)
    if item_id:
        item_id_var.set(item_id)


def clear_operation_context() -> None:
    """Clear operation context."""
    operation_id_var.set(None)
    item_id_var.set(None)


def generate_operation_id() -> str:
    """Generate a unique operation ID."""
    return str(uuid.uuid4())


def configure_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configure structured logging for the application."""

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.add_log_level,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Configure standard library logging
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )


class StorageTimer:
    """Context manager for timing storage steps."""

    def __init__(
        self, logger: StructuredLogger, step: str, component: str, **kwargs: Any
    ):
        self.logger = logger
        self.step = step
        self.component = component
        self.kwargs = kwargs
        self.start_time: Optional[float] = None
        self.duration_ms: Optional[float] = None

    def __enter__(self) -> "StorageTimer":
        self.start_time = time.time()
        self.logger.log_storage_step(f"{self.step}_start", self.component, **self.kwargs)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self.start_time:
            self.duration_ms = (time.time() - self.start_time) * 1000
            status = "success" if exc_type is None else "error"

            self.logger.log_storage_step(
                f"{self.step}_end",
                self.component,
                duration_ms=self.duration_ms,
                status=status,
                **self.kwargs,
            )
