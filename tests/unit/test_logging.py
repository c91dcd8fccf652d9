"""
Unit tests for structured logging configuration.

These tests verify:
1. The renderer follows the configured log format
2. The level is applied to stdlib logging, with unknown levels falling back to INFO
3. Request context variables are merged into every event
"""

import logging

import pytest
import structlog

from credscore.core.logging import setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    """Put structlog and the root logger back the way the test found them."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level

    yield

    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_json_format_uses_json_renderer(self):
        setup_logging(log_level="INFO", log_format="json")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_format_uses_console_renderer(self):
        setup_logging(log_level="INFO", log_format="console")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_level_applies_to_stdlib(self):
        setup_logging(log_level="debug", log_format="json")

        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        setup_logging(log_level="chatty", log_format="json")

        assert logging.getLogger().level == logging.INFO

    def test_noisy_loggers_stay_at_warning(self):
        setup_logging(log_level="DEBUG", log_format="json")

        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        assert logging.getLogger("uvicorn.access").level == logging.WARNING

    def test_context_variables_are_merged(self):
        setup_logging(log_level="INFO", log_format="json")

        processors = structlog.get_config()["processors"]
        assert processors[0] is structlog.contextvars.merge_contextvars
