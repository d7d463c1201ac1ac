"""
Unit tests for the Logfire monitoring module.

This test suite covers:
- Opt-in initialization and the missing-token guard
- Instrumentation feature flags
- Structured logging helpers degrading quietly when Logfire fails
"""

from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI

from constituency_hub.core import monitoring


@pytest.fixture
def enabled(monkeypatch):
    monkeypatch.setattr(monitoring, "LOGFIRE_ENABLED", True)
    monkeypatch.setattr(monitoring, "LOGFIRE_TOKEN", "test-token")
    monkeypatch.setattr(monitoring, "LOGFIRE_TRACE_SQLALCHEMY", True)
    monkeypatch.setattr(monitoring, "LOGFIRE_TRACE_HTTPX", True)
    monkeypatch.setattr(monitoring, "LOGFIRE_TRACE_FASTAPI", True)


class TestInitializeLogfire:
    """Test Logfire initialization."""

    def test_disabled(self, monkeypatch):
        """Nothing is configured while LOGFIRE_ENABLED is off."""
        monkeypatch.setattr(monitoring, "LOGFIRE_ENABLED", False)

        with patch.object(monitoring.logfire, "configure") as configure:
            assert monitoring.initialize_logfire() is False

        configure.assert_not_called()

    def test_enabled_without_token(self, enabled, monkeypatch):
        """A missing token keeps monitoring off."""
        monkeypatch.setattr(monitoring, "LOGFIRE_TOKEN", "")

        with patch.object(monitoring.logfire, "configure") as configure:
            assert monitoring.initialize_logfire() is False

        configure.assert_not_called()

    def test_full_instrumentation(self, enabled):
        """All instrumentations are enabled when flags are on and an app is given."""
        app = FastAPI()
        with patch.object(monitoring.logfire, "configure") as configure, patch.object(
            monitoring.logfire, "instrument_sqlalchemy"
        ) as sqlalchemy, patch.object(monitoring.logfire, "instrument_httpx") as httpx_, patch.object(
            monitoring.logfire, "instrument_fastapi"
        ) as fastapi_:
            assert monitoring.initialize_logfire(app) is True

        assert configure.call_args.kwargs["token"] == "test-token"
        sqlalchemy.assert_called_once()
        httpx_.assert_called_once()
        fastapi_.assert_called_once_with(app=app)

    def test_flags_skip_instrumentation(self, enabled, monkeypatch):
        monkeypatch.setattr(monitoring, "LOGFIRE_TRACE_SQLALCHEMY", False)
        monkeypatch.setattr(monitoring, "LOGFIRE_TRACE_HTTPX", False)

        with patch.object(monitoring.logfire, "configure"), patch.object(
            monitoring.logfire, "instrument_sqlalchemy"
        ) as sqlalchemy, patch.object(monitoring.logfire, "instrument_httpx") as httpx_, patch.object(
            monitoring.logfire, "instrument_fastapi"
        ) as fastapi_:
            assert monitoring.initialize_logfire() is True

        sqlalchemy.assert_not_called()
        httpx_.assert_not_called()
        fastapi_.assert_not_called()

    def test_configure_failure(self, enabled):
        """A failing configure call is reported, not raised."""
        with patch.object(monitoring.logfire, "configure", side_effect=RuntimeError("boom")):
            assert monitoring.initialize_logfire() is False

    def test_instrumentation_failure_is_tolerated(self, enabled):
        with patch.object(monitoring.logfire, "configure"), patch.object(
            monitoring.logfire, "instrument_sqlalchemy", side_effect=RuntimeError("no engine")
        ), patch.object(monitoring.logfire, "instrument_httpx"):
            assert monitoring.initialize_logfire() is True


class TestLoggingHelpers:
    """Test the structured logging helpers."""

    def test_log_api_request(self):
        with patch.object(monitoring.logfire, "info") as info:
            monitoring.log_api_request("GET", "/api/v1/polls", 200, 12.5)

        info.assert_called_once_with(
            "API request completed", method="GET", path="/api/v1/polls", status_code=200, duration_ms=12.5
        )

    def test_log_domain_event(self):
        with patch.object(monitoring.logfire, "info") as info:
            monitoring.log_domain_event("Vote cast", poll_id="p1")

        info.assert_called_once_with("Vote cast", poll_id="p1")

    def test_log_error(self):
        with patch.object(monitoring.logfire, "error") as error:
            monitoring.log_error("ValueError", "bad input", {"path": "/x"})

        error.assert_called_once_with("ValueError: bad input", path="/x")

    def test_helpers_swallow_logfire_failures(self):
        failing = MagicMock(side_effect=RuntimeError("down"))
        with patch.object(monitoring.logfire, "info", failing), patch.object(monitoring.logfire, "error", failing):
            monitoring.log_api_request("GET", "/", 500, 1.0)
            monitoring.log_domain_event("SOS received")
            monitoring.log_error("Err", "msg")

        assert failing.call_count == 3
