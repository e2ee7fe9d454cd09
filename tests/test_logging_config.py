"""Tests for centralized logging setup."""

import logging

from logging_config import parse_log_level, setup_logging


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_console_handler(self):
        logger = setup_logging("monsters.test_console", level=logging.DEBUG)
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_no_duplicate_handlers(self):
        setup_logging("monsters.test_repeat")
        logger = setup_logging("monsters.test_repeat")
        assert len(logger.handlers) == 1

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "load.log"
        logger = setup_logging("monsters.test_file", log_file=log_file, console_output=False)
        logger.info("Loaded 3 monster types")
        for handler in logger.handlers:
            handler.flush()
        assert "Loaded 3 monster types" in log_file.read_text(encoding="utf-8")


class TestParseLogLevel:
    """Tests for parse_log_level()."""

    def test_names(self):
        assert parse_log_level("debug") == logging.DEBUG
        assert parse_log_level(" WARNING ") == logging.WARNING

    def test_fallback(self):
        assert parse_log_level(None) == logging.INFO
        assert parse_log_level("chatty", default=logging.ERROR) == logging.ERROR
