"""
Tests for logging configuration module.
"""

import logging
import os
import sys
import tempfile
from pathlib import Path
from unittest.mock import patch

from motion_doctor.common import env_flag, vlog
from motion_doctor.logging_config import (
    ColoredFormatter,
    get_logger,
    setup_logging,
)


def _record(level=logging.INFO, msg="Test message"):
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestSetupLogging:
    """Test logging setup and configuration."""

    def test_setup_logging_default(self):
        """Test default logging setup stays quiet below WARNING."""
        logger = setup_logging()
        assert logger.name == "motion_doctor"
        assert logger.level == logging.WARNING

    def test_setup_logging_verbose(self):
        """Test verbose logging enables DEBUG level."""
        logger = setup_logging(verbose=True)
        assert logger.level == logging.DEBUG

    def test_setup_logging_quiet(self):
        """Test quiet mode removes console handlers."""
        logger = setup_logging(quiet=True)
        console_handlers = [
            h for h in logger.handlers
            if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        ]
        assert len(console_handlers) == 0

    def test_console_handler_writes_to_stderr(self):
        """Test the report on stdout is not mixed with log output."""
        logger = setup_logging()
        streams = [h.stream for h in logger.handlers if isinstance(h, logging.StreamHandler)]
        assert streams == [sys.stderr]

    def test_setup_logging_with_file(self):
        """Test logging to a file in a new directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = Path(tmpdir) / "subdir" / "doctor.log"
            logger = setup_logging(log_file=str(log_file))

            logger.warning("probe message")

            for handler in logger.handlers:
                handler.flush()
            assert "probe message" in log_file.read_text()
            setup_logging(quiet=True)

    def test_setup_logging_custom_level(self):
        logger = setup_logging(level="error")
        assert logger.level == logging.ERROR


class TestGetLogger:
    def test_get_logger_singleton(self):
        assert get_logger() is get_logger()


class TestColoredFormatter:
    """Test colored log formatter."""

    def test_with_colors(self):
        formatter = ColoredFormatter("%(levelname_colored)s %(message)s", use_colors=True)
        formatted = formatter.format(_record())
        assert "Test message" in formatted
        assert "\033[" in formatted

    def test_warning_is_yellow(self):
        formatter = ColoredFormatter("%(levelname_colored)s %(message)s", use_colors=True)
        formatted = formatter.format(_record(level=logging.WARNING, msg="sw_vers timed out"))
        assert formatted == "\033[33mWARNING\033[0m sw_vers timed out"

    def test_without_colors(self):
        formatter = ColoredFormatter("%(levelname_colored)s %(message)s", use_colors=False)
        formatted = formatter.format(_record())
        assert formatted == "INFO Test message"


class TestVlog:
    """Test vlog routing through the logger."""

    def test_vlog_verbose(self, caplog):
        setup_logging(level="INFO", propagate=True)
        with caplog.at_level(logging.INFO, logger="motion_doctor"):
            vlog("Loading config", verbose=True)
        assert "Loading config" in caplog.text

    @patch.dict(os.environ, {}, clear=True)
    def test_vlog_silent_without_verbose(self, caplog):
        setup_logging(level="INFO", propagate=True)
        with caplog.at_level(logging.INFO, logger="motion_doctor"):
            vlog("Should not appear", verbose=False)
        assert "Should not appear" not in caplog.text

    @patch.dict(os.environ, {"MOTION_DOCTOR_DEBUG": "1"}, clear=True)
    def test_vlog_debug_env(self, caplog):
        setup_logging(level="INFO", propagate=True)
        with caplog.at_level(logging.INFO, logger="motion_doctor"):
            vlog("From env", verbose=False)
        assert "From env" in caplog.text


class TestEnvFlag:
    @patch.dict(os.environ, {"MOTION_DOCTOR_COLOR": "0"}, clear=True)
    def test_zero_is_false(self):
        assert env_flag("MOTION_DOCTOR_COLOR") is False

    @patch.dict(os.environ, {}, clear=True)
    def test_unset_uses_default(self):
        assert env_flag("MOTION_DOCTOR_COLOR", default=True) is True
        assert env_flag("MOTION_DOCTOR_COLOR", default=False) is False
