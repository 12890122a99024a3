# ABOUTME: Logging configuration and structured logger helpers
# ABOUTME: Provides loguru sinks plus structlog loggers bound with scan context

from .config import LoggingMode, configure_logging, detect_logging_mode, get_logging_status
from .utils import ScanContext, get_logger, log_step, new_run_id, with_scan_context

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "detect_logging_mode",
    "get_logging_status",
    # Utilities
    "ScanContext",
    "get_logger",
    "log_step",
    "new_run_id",
    "with_scan_context",
]
