"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from invoice_actions.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None, None, None]:
    """Restore logger and structlog state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app = logging.getLogger("invoice_actions")
    app_level = app.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app.setLevel(app_level)
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("invoice_actions").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_default_is_info(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("invoice_actions").level == logging.INFO

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("invoice_actions.test")
        log.error("invoice_statement_failed", statement="insert", reason="boom")
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "invoice_statement_failed"
        assert parsed["statement"] == "insert"
        assert parsed["level"] == "error"
        assert parsed["logger"] == "invoice_actions.test"
        assert "timestamp" in parsed

    def test_json_mode_renders_exceptions(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("invoice_actions.test")
        try:
            raise ConnectionError("db down")
        except ConnectionError as exc:
            log.error("invoice_store_raised", exc_info=exc)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert "ConnectionError: db down" in parsed["exception"]

    def test_debug_filtered_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        structlog.get_logger("invoice_actions.test").debug("hidden")
        assert capfd.readouterr().err == ""

    def test_server_logs_share_the_handler(self, capfd: pytest.CaptureFixture[str]) -> None:
        access = logging.getLogger("uvicorn.access")
        access.addHandler(logging.NullHandler())
        access.propagate = False
        try:
            configure_logging(verbose=False, log_json=True)
            access.info('127.0.0.1 - "GET /dashboard/invoices HTTP/1.1" 200')
            parsed = json.loads(capfd.readouterr().err.strip())
        finally:
            access.handlers.clear()
        assert access.propagate is True
        assert parsed["logger"] == "uvicorn.access"
        assert parsed["level"] == "info"
        assert "GET /dashboard/invoices" in parsed["event"]
