# ABOUTME: Tests for logging configuration module
# ABOUTME: Validates dual-mode logging setup, structlog routing, and third-party library suppression

import logging
import os
from pathlib import Path
from unittest.mock import patch

import structlog
from loguru import logger as loguru_logger

from picture_harvest.utils.logging.config import (
    QUIET_LOGGERS,
    InterceptHandler,
    LoggingMode,
    configure_logging,
    detect_logging_mode,
    get_logging_status,
)


class TestLoggingMode:
    """Test the LoggingMode constants."""

    def test_logging_mode_constants(self):
        assert LoggingMode.INTERACTIVE == "interactive"
        assert LoggingMode.PRODUCTION == "production"


class TestDetectLoggingMode:
    """Test logging mode detection logic."""

    def test_detect_mode_from_env_interactive(self):
        with patch.dict(os.environ, {"PICTURE_HARVEST_LOG_MODE": "interactive"}):
            assert detect_logging_mode() == LoggingMode.INTERACTIVE

    def test_detect_mode_from_env_production(self):
        with patch.dict(os.environ, {"PICTURE_HARVEST_LOG_MODE": "PRODUCTION"}):
            assert detect_logging_mode() == LoggingMode.PRODUCTION

    def test_detect_mode_from_env_invalid(self):
        """Test fallback when environment variable has invalid value."""
        with (
            patch.dict(os.environ, {"PICTURE_HARVEST_LOG_MODE": "invalid"}),
            patch("sys.stdout.isatty", return_value=True),
        ):
            assert detect_logging_mode() == LoggingMode.INTERACTIVE

    def test_detect_mode_from_tty_production(self):
        with patch.dict(os.environ, {}, clear=True), patch("sys.stdout.isatty", return_value=False):
            assert detect_logging_mode() == LoggingMode.PRODUCTION


class TestConfigureLogging:
    """Test logging configuration functionality."""

    def teardown_method(self):
        """Reset loguru, structlog, and stdlib logging state."""
        loguru_logger.remove()
        structlog.reset_defaults()

        for logger_name in ["", *QUIET_LOGGERS, "py.warnings"]:
            std_logger = logging.getLogger(logger_name)
            std_logger.handlers.clear()
            std_logger.setLevel(logging.NOTSET)

        logging.captureWarnings(False)

    def test_configure_interactive_mode(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO")

        assert Path("logs").exists()
        assert logging.getLogger("botocore").level == logging.WARNING
        assert logging.getLogger("boto3").level == logging.WARNING

    def test_configure_production_mode(self):
        configure_logging(mode=LoggingMode.PRODUCTION, log_level="INFO")

        assert logging.getLogger("urllib3").level == logging.WARNING
        assert logging.getLogger("py.warnings").level == logging.ERROR

    def test_configure_custom_log_level(self):
        configure_logging(mode=LoggingMode.PRODUCTION, log_level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_root_logger_forwards_to_loguru(self):
        configure_logging(mode=LoggingMode.PRODUCTION, log_level="INFO")

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], InterceptHandler)

    def test_structlog_events_reach_loguru_sink(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        custom_log_file = tmp_path / "custom.log"

        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO", log_file=str(custom_log_file))
        structlog.get_logger("picture_harvest.test").info("Scanned items", scanned_items=42)
        loguru_logger.complete()

        content = custom_log_file.read_text()
        assert "Scanned items" in content
        assert "scanned_items=42" in content

    def test_log_level_filters_debug_events(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        custom_log_file = tmp_path / "custom.log"

        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="WARNING", log_file=str(custom_log_file))
        structlog.get_logger("picture_harvest.test").info("Hidden event")
        structlog.get_logger("picture_harvest.test").warning("Visible event")
        loguru_logger.complete()

        content = custom_log_file.read_text()
        assert "Visible event" in content
        assert "Hidden event" not in content


class TestGetLoggingStatus:
    """Test logging status reporting."""

    def test_get_status_interactive_mode(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        Path("logs").mkdir()

        with patch("picture_harvest.utils.logging.config.detect_logging_mode") as mock_detect:
            mock_detect.return_value = LoggingMode.INTERACTIVE
            status = get_logging_status()

        assert status["mode"] == LoggingMode.INTERACTIVE
        assert status["log_directory"] is not None
        assert status["log_files"]["main"].endswith("picture-harvest.log")
        assert status["log_files"]["json"].endswith("picture-harvest.json")
        assert status["log_files"]["errors"].endswith("errors.log")
        assert "botocore" in status["third_party_suppressed"]

    def test_get_status_production_mode(self):
        with patch("picture_harvest.utils.logging.config.detect_logging_mode") as mock_detect:
            mock_detect.return_value = LoggingMode.PRODUCTION
            status = get_logging_status()

        assert status["mode"] == LoggingMode.PRODUCTION
        assert status["log_files"]["main"] is None
        assert status["log_files"]["json"] is None
        assert status["log_files"]["errors"] is None

    def test_status_reports_installed_mode(self):
        try:
            configure_logging(mode=LoggingMode.PRODUCTION, log_level="INFO")
            with patch("picture_harvest.utils.logging.config.detect_logging_mode") as mock_detect:
                mock_detect.return_value = LoggingMode.INTERACTIVE
                status = get_logging_status()
        finally:
            loguru_logger.remove()
            structlog.reset_defaults()

        assert status["mode"] == LoggingMode.PRODUCTION
        assert status["log_files"]["main"] is None
