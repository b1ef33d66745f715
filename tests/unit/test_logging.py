"""
Unit tests for structured logging.
"""

import json
import logging

import pytest

from imageregistry_config.observability.logging import (
    ConfigLogger,
    CorrelationIDFilter,
    StructuredFormatter,
    get_correlation_id,
    set_correlation_id,
    setup_logging_from_settings,
    setup_structured_logging,
)
from imageregistry_config.settings import settings


@pytest.fixture
def record():
    return logging.LogRecord(
        name="imageregistry_config.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Registry configuration %s is valid",
        args=("cluster",),
        exc_info=None,
    )


class TestStructuredFormatter:
    """Test JSON log formatting."""

    def test_basic_fields(self, record):
        record.correlation_id = "abc12345"

        data = json.loads(StructuredFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "imageregistry_config.test"
        assert data["message"] == "Registry configuration cluster is valid"
        assert data["correlation_id"] == "abc12345"

    def test_structured_extras(self, record):
        record.resource_name = "cluster"
        record.error_kinds = ["DuplicateRouteName"]
        record.unrelated = "dropped"

        data = json.loads(StructuredFormatter().format(record))

        assert data["resource_name"] == "cluster"
        assert data["error_kinds"] == ["DuplicateRouteName"]
        assert "unrelated" not in data


class TestCorrelationID:
    """Test correlation ID propagation."""

    def test_filter_uses_current_id(self, record):
        set_correlation_id("fixed-id")

        CorrelationIDFilter().filter(record)

        assert record.correlation_id == "fixed-id"

    def test_filter_generates_missing_id(self, record):
        set_correlation_id("")

        CorrelationIDFilter().filter(record)

        assert len(record.correlation_id) == 8
        assert get_correlation_id() == record.correlation_id


class TestConfigLogger:
    """Test validation event logging."""

    def test_start_sets_correlation_id(self, caplog):
        caplog.set_level(logging.DEBUG)

        corr_id = ConfigLogger("imageregistry_config.test").log_validation_start(
            "cluster", correlation_id="run-1"
        )

        assert corr_id == "run-1"
        assert get_correlation_id() == "run-1"
        assert caplog.records[-1].operation == "validation_start"

    def test_failure_is_warning(self, caplog):
        ConfigLogger("imageregistry_config.test").log_validation_failure(
            "cluster", ["MultipleBackendsConfigured"], 0.01
        )

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.error_count == 1

    def test_notice(self, caplog):
        caplog.set_level(logging.INFO)

        ConfigLogger("imageregistry_config.test").log_notice(
            "cluster", "InvalidAdmissionLimit", "spec.requests.read.maxRunning", "clamped"
        )

        record = caplog.records[-1]
        assert record.notice_code == "InvalidAdmissionLimit"
        assert record.field == "spec.requests.read.maxRunning"


def test_setup_structured_logging_installs_json_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_structured_logging(log_level="debug", enable_json_formatting=True)

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_setup_logging_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "log_level", "WARNING")
    monkeypatch.setattr(settings, "json_logs", False)
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging_from_settings()

        assert root.level == logging.WARNING
        assert not isinstance(root.handlers[0].formatter, StructuredFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
