"""Tests for diagnostics logging configuration."""

import logging
import logging.handlers

import structlog

from water_reminder.logging import BACKUP_COUNT, LOGGER_NAME, MAX_BYTES, configure_logging


def _handlers():
    return logging.getLogger(LOGGER_NAME).handlers


class TestConfigureLogging:
    def test_daemon_log_rotates(self, temp_dir):
        """The background process writes to a size-capped rotating file."""
        configure_logging("INFO", log_file=temp_dir / "logs" / "diagnostics.log")

        (handler,) = _handlers()
        assert isinstance(handler, logging.handlers.RotatingFileHandler)
        assert handler.maxBytes == MAX_BYTES == 5 * 1024 * 1024
        assert handler.backupCount == BACKUP_COUNT == 3

    def test_events_written_as_key_value(self, temp_dir):
        log_file = temp_dir / "diagnostics.log"
        configure_logging("INFO", log_file=log_file)

        structlog.get_logger("water_reminder.lifecycle.pid").info("pid_file_written", pid=4242)
        for handler in _handlers():
            handler.flush()

        line = log_file.read_text().strip()
        assert "level='info'" in line
        assert "event='pid_file_written'" in line
        assert "pid=4242" in line

    def test_level_filter(self, temp_dir):
        log_file = temp_dir / "diagnostics.log"
        configure_logging("WARNING", log_file=log_file)

        logger = structlog.get_logger("water_reminder.reminder")
        logger.info("reminder_loop_started")
        logger.warning("reminder_not_delivered")
        for handler in _handlers():
            handler.flush()

        text = log_file.read_text()
        assert "reminder_loop_started" not in text
        assert "reminder_not_delivered" in text

    def test_reconfigure_replaces_handler(self, temp_dir):
        configure_logging("INFO", log_file=temp_dir / "diagnostics.log")
        configure_logging("WARNING")

        (handler,) = _handlers()
        assert not isinstance(handler, logging.handlers.RotatingFileHandler)
        assert isinstance(handler, logging.StreamHandler)
