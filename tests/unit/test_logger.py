"""
Unit tests for structured logging and the request logging middleware.
"""
import logging
from unittest.mock import MagicMock, patch

import pytest
from httpx import AsyncClient

from app.utils.logger import StructuredFormatter, StructuredLogger


@pytest.fixture
def mock_logger():
    return MagicMock(spec=logging.Logger)


class TestStructuredLogger:

    def test_extra_fields_passed_through(self, mock_logger):
        StructuredLogger(mock_logger).info("Correction completed", item_count=2)

        extra = mock_logger.log.call_args.kwargs["extra"]
        assert extra == {"item_count": 2}

    @pytest.mark.parametrize("field", ["api_key", "x_api_key", "authorization", "headers"])
    def test_secret_fields_are_redacted(self, mock_logger, field):
        """Test credential-bearing fields never reach the log record."""
        StructuredLogger(mock_logger).error("Anthropic API error", **{field: "sk-ant-secret"})

        extra = mock_logger.log.call_args.kwargs["extra"]
        assert extra == {field: "[REDACTED]"}

    def test_reserved_fields_are_prefixed(self, mock_logger):
        StructuredLogger(mock_logger).warning("Rejected", name="items")

        assert mock_logger.log.call_args.kwargs["extra"] == {"ctx_name": "items"}

    def test_explicit_level(self, mock_logger):
        StructuredLogger(mock_logger).log(logging.WARNING, "Slow", duration_ms="10.00")

        assert mock_logger.log.call_args.args[:2] == (logging.WARNING, "Slow")


class TestStructuredFormatter:

    def _record(self, **extra):
        record = logging.LogRecord(
            name="app.test", level=logging.INFO, pathname=__file__, lineno=1,
            msg="Request completed", args=(), exc_info=None
        )
        record.msecs = 7.9
        record.__dict__.update(extra)
        return record

    def test_format_has_milliseconds_and_extra_fields(self):
        line = StructuredFormatter().format(self._record(status_code=200))

        timestamp, level, name, message, extra = line.split(" | ")
        assert timestamp.endswith(".007")
        assert level.strip() == "INFO"
        assert name == "app.test"
        assert message == "Request completed"
        assert extra == "status_code=200"

    def test_task_name_is_not_an_extra_field(self):
        line = StructuredFormatter().format(self._record(taskName=None))

        assert "taskName" not in line


class TestRequestLoggingMiddleware:

    @pytest.mark.asyncio
    async def test_server_error_logged_as_warning(self, client: AsyncClient, install_service):
        """Test a 500 rendered by the exception handlers is still surfaced."""
        install_service(None)

        with patch("app.middleware.logging.logger") as middleware_logger:
            response = await client.post("/api/correct", json={"items": ["bred"]})

        assert response.status_code == 500
        level, message = middleware_logger.log.call_args.args
        assert level == logging.WARNING
        assert message == "Request completed with server error"
        assert middleware_logger.log.call_args.kwargs["status_code"] == 500

    @pytest.mark.asyncio
    async def test_success_logged_as_info(self, client: AsyncClient, stub_service):
        stub_service("[]")

        with patch("app.middleware.logging.logger") as middleware_logger:
            response = await client.post("/api/correct", json={"items": []})

        assert response.status_code == 200
        assert middleware_logger.log.call_args.args == (logging.INFO, "Request completed")
