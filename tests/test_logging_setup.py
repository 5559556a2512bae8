"""Tests for setup_logging()."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from archflow.logging_setup import NOISY_LOGGERS, setup_logging


@pytest.fixture
def logger_name() -> Iterator[str]:
    """A throwaway logger name; handlers are closed afterwards."""
    name = "archflow-test-logging"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestSetupLogging:
    """Tests for console and file handlers."""

    def test_console_only(self, logger_name: str) -> None:
        """Without a log file only an INFO console handler is added."""
        logger = setup_logging(logger_name)

        assert logger.level == logging.DEBUG
        [handler] = logger.handlers
        assert isinstance(handler, logging.StreamHandler)
        assert handler.level == logging.INFO

    def test_verbose_console(self, logger_name: str) -> None:
        """Verbose mode lowers the console level to DEBUG."""
        logger = setup_logging(logger_name, verbose=True)

        assert logger.handlers[0].level == logging.DEBUG

    def test_file_handler(self, logger_name: str, tmp_path: Path) -> None:
        """The log file captures DEBUG records, creating its directory."""
        log_file = tmp_path / "logs" / "run.log"
        logger = setup_logging(logger_name, log_file=str(log_file))

        logger.debug("effect replayed")
        for handler in logger.handlers:
            handler.flush()

        assert len(logger.handlers) == 2
        assert "DEBUG" in log_file.read_text()
        assert "effect replayed" in log_file.read_text()

    def test_quiets_http_loggers(self, logger_name: str) -> None:
        """HTTP client loggers are raised to WARNING."""
        setup_logging(logger_name)

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING
