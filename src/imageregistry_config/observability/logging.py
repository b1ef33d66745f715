"""
Structured logging utilities for the registry configuration model.

This module provides correlation ID tracking, structured JSON log
formatting, and a logger for validation events.
"""

import json
import logging
import uuid
from contextvars import ContextVar
from datetime import UTC, datetime

# Context variable for tracking correlation IDs across validation runs
correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

# Record attributes copied into structured output when present
STRUCTURED_FIELDS = (
    "resource_name",
    "operation",
    "duration",
    "error_type",
    "error_kinds",
    "error_count",
    "notice_code",
    "notice_count",
    "field",
    "backend",
    "management_state",
)


class CorrelationIDFilter(logging.Filter):
    """Logging filter that adds correlation ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        current_correlation_id = correlation_id.get()
        if not current_correlation_id:
            current_correlation_id = generate_correlation_id()
            correlation_id.set(current_correlation_id)

        record.correlation_id = current_correlation_id
        return True


class StructuredFormatter(logging.Formatter):
    """
    Structured JSON formatter for logs with correlation ID support.

    Formats log records as structured JSON for better parsing and analysis
    in production monitoring systems.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", ""),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for field in STRUCTURED_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        return json.dumps(log_data, default=str)


def generate_correlation_id() -> str:
    """Generate a short correlation ID."""
    return str(uuid.uuid4())[:8]


def set_correlation_id(corr_id: str) -> str:
    correlation_id.set(corr_id)
    return corr_id


def get_correlation_id() -> str:
    return correlation_id.get("")


def setup_structured_logging(
    log_level: str = "INFO",
    enable_json_formatting: bool = True,
    correlation_id_enabled: bool = True,
) -> None:
    """
    Set up structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        enable_json_formatting: Whether to use JSON formatting
        correlation_id_enabled: Whether to enable correlation ID tracking
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()

    if enable_json_formatting:
        formatter = StructuredFormatter()
    elif correlation_id_enabled:
        formatter = logging.Formatter(
            "%(asctime)s - %(correlation_id)s - %(name)s - %(levelname)s - %(message)s"
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    handler.setFormatter(formatter)

    if correlation_id_enabled:
        handler.addFilter(CorrelationIDFilter())

    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def setup_logging_from_settings() -> None:
    """Configure logging from the environment-backed settings."""
    from imageregistry_config.settings import settings

    setup_structured_logging(
        log_level=settings.log_level,
        enable_json_formatting=settings.json_logs,
        correlation_id_enabled=settings.correlation_ids,
    )


class ConfigLogger:
    """
    Logger for configuration validation events with structured fields.

    Provides convenient methods for the start and outcome of a validation
    run and for each advisory notice produced.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def log_validation_start(
        self, resource_name: str, correlation_id: str | None = None
    ) -> str:
        """
        Log the start of a validation run.

        Args:
            resource_name: Name of the configuration resource
            correlation_id: Optional correlation ID (will generate if not provided)

        Returns:
            The correlation ID used for this run
        """
        if correlation_id is None:
            correlation_id = generate_correlation_id()

        set_correlation_id(correlation_id)

        self.logger.debug(
            f"Validating registry configuration {resource_name}",
            extra={"resource_name": resource_name, "operation": "validation_start"},
        )
        return correlation_id

    def log_validation_success(
        self,
        resource_name: str,
        backend: str | None,
        notice_count: int,
        duration: float,
    ) -> None:
        self.logger.info(
            f"Registry configuration {resource_name} is valid "
            f"(backend: {backend or 'unset'}, notices: {notice_count})",
            extra={
                "resource_name": resource_name,
                "operation": "validation_success",
                "backend": backend,
                "notice_count": notice_count,
                "duration": duration,
            },
        )

    def log_validation_failure(
        self, resource_name: str, error_kinds: list[str], duration: float
    ) -> None:
        self.logger.warning(
            f"Registry configuration {resource_name} rejected with "
            f"{len(error_kinds)} error(s): {', '.join(error_kinds)}",
            extra={
                "resource_name": resource_name,
                "operation": "validation_failed",
                "error_kinds": error_kinds,
                "error_count": len(error_kinds),
                "duration": duration,
            },
        )

    def log_notice(self, resource_name: str, code: str, field: str, message: str) -> None:
        self.logger.info(
            f"Advisory for {resource_name}: {code} at {field}: {message}",
            extra={
                "resource_name": resource_name,
                "operation": "notice",
                "notice_code": code,
                "field": field,
            },
        )
