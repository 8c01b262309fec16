"""
Unit tests for the Logfire monitoring module.

This test suite covers:
- Initialization with Logfire disabled, missing token and enabled
- Instrumentation feature flags
- Request, payment and error logging helpers
- Graceful degradation when Logfire calls fail
"""

import sys
from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI

from ecodata.core import monitoring

MODULE = "ecodata.core.monitoring"


@pytest.fixture
def mock_logfire():
    """Install a fake ``logfire`` module for the duration of a test."""
    fake = MagicMock()
    with patch.dict(sys.modules, {"logfire": fake}):
        yield fake


class TestInitializeLogfire:
    def test_disabled_does_nothing(self, mock_logfire):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", False), patch(f"{MODULE}.logger") as mock_logger:
            monitoring.initialize_logfire()

        mock_logfire.configure.assert_not_called()
        assert "disabled" in mock_logger.info.call_args[0][0]

    def test_missing_token_warns(self, mock_logfire):
        with (
            patch(f"{MODULE}.LOGFIRE_ENABLED", True),
            patch(f"{MODULE}.LOGFIRE_TOKEN", ""),
            patch(f"{MODULE}.logger") as mock_logger,
        ):
            monitoring.initialize_logfire()

        mock_logfire.configure.assert_not_called()
        assert "LOGFIRE_TOKEN is not set" in mock_logger.warning.call_args[0][0]

    def test_enabled_configures_and_instruments(self, mock_logfire):
        app = FastAPI()
        with (
            patch(f"{MODULE}.LOGFIRE_ENABLED", True),
            patch(f"{MODULE}.LOGFIRE_TOKEN", "token"),
            patch(f"{MODULE}.LOGFIRE_SERVICE_NAME", "ecodata-test"),
        ):
            monitoring.initialize_logfire(app)

        assert mock_logfire.configure.call_args.kwargs["service_name"] == "ecodata-test"
        mock_logfire.instrument_sqlalchemy.assert_called_once()
        mock_logfire.instrument_fastapi.assert_called_once_with(app=app)

    def test_feature_flags_skip_instrumentation(self, mock_logfire):
        with (
            patch(f"{MODULE}.LOGFIRE_ENABLED", True),
            patch(f"{MODULE}.LOGFIRE_TOKEN", "token"),
            patch(f"{MODULE}.LOGFIRE_TRACE_SQLALCHEMY", False),
            patch(f"{MODULE}.LOGFIRE_TRACE_FASTAPI", False),
        ):
            monitoring.initialize_logfire(FastAPI())

        mock_logfire.instrument_sqlalchemy.assert_not_called()
        mock_logfire.instrument_fastapi.assert_not_called()

    def test_instrumentation_failure_is_logged(self, mock_logfire):
        mock_logfire.instrument_sqlalchemy.side_effect = RuntimeError("no engine")
        with (
            patch(f"{MODULE}.LOGFIRE_ENABLED", True),
            patch(f"{MODULE}.LOGFIRE_TOKEN", "token"),
            patch(f"{MODULE}.logger") as mock_logger,
        ):
            monitoring.initialize_logfire()

        assert "Failed to instrument SQLAlchemy" in mock_logger.warning.call_args[0][0]

    def test_configure_failure_is_logged(self, mock_logfire):
        mock_logfire.configure.side_effect = RuntimeError("bad token")
        with (
            patch(f"{MODULE}.LOGFIRE_ENABLED", True),
            patch(f"{MODULE}.LOGFIRE_TOKEN", "token"),
            patch(f"{MODULE}.logger") as mock_logger,
        ):
            monitoring.initialize_logfire()

        assert "Failed to initialize Logfire" in mock_logger.error.call_args[0][0]


class TestLoggingHelpers:
    def test_helpers_are_silent_when_disabled(self, mock_logfire):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", False):
            monitoring.log_api_request("GET", "/api/faqs", 200, 1.5)
            monitoring.log_payment_event("donation.completed", "cs_1", 10.0)
            monitoring.log_error("ValueError", "boom")

        mock_logfire.info.assert_not_called()
        mock_logfire.error.assert_not_called()

    def test_api_request(self, mock_logfire):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", True):
            monitoring.log_api_request("GET", "/api/faqs", 200, 1.5)

        assert mock_logfire.info.call_args.kwargs == {
            "method": "GET",
            "path": "/api/faqs",
            "status_code": 200,
            "duration_ms": 1.5,
        }

    def test_payment_event(self, mock_logfire):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", True):
            monitoring.log_payment_event("subscription.created", "sub_1", 12.0)

        mock_logfire.info.assert_called_once_with(
            "Payment event processed", event_type="subscription.created", reference="sub_1", amount=12.0
        )

    def test_error_with_context(self, mock_logfire):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", True):
            monitoring.log_error("StorageError", "connection lost", {"backend": "postgres"})

        mock_logfire.error.assert_called_once_with("StorageError: connection lost", backend="postgres")

    def test_logfire_failure_degrades_to_debug(self, mock_logfire):
        mock_logfire.info.side_effect = RuntimeError("exporter down")
        with patch(f"{MODULE}.LOGFIRE_ENABLED", True), patch(f"{MODULE}.logger") as mock_logger:
            monitoring.log_payment_event("donation.completed", "cs_1")

        assert "cs_1" in mock_logger.debug.call_args[0][0]
