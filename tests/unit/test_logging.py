"""
Unit tests for logging configuration.
"""

import logging

import structlog

from install_scheduling.config.logging import (
    NOISY_LOGGERS,
    configure_logging,
    service_context,
)


class TestLoggingConfiguration:
    """Test cases for structlog configuration."""

    def test_service_context_stamps_events(self, test_settings):
        processor = service_context(test_settings)

        event = processor(None, "info", {"event": "Assignment applied"})

        assert event["service"] == "Install Scheduling Service"
        assert event["environment"] == "test"

    def test_service_context_keeps_explicit_values(self, test_settings):
        processor = service_context(test_settings)

        event = processor(None, "info", {"event": "x", "service": "worker"})

        assert event["service"] == "worker"

    def test_configure_quiets_library_loggers(self, test_settings):
        configure_logging(test_settings)

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_request_context_merged_into_events(self, test_settings):
        configure_logging(test_settings)
        structlog.contextvars.bind_contextvars(request_id="req-42")
        try:
            event = structlog.contextvars.merge_contextvars(None, "info", {"event": "x"})
        finally:
            structlog.contextvars.clear_contextvars()

        assert event["request_id"] == "req-42"
