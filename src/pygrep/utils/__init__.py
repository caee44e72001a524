"""
Utility modules: error handling, logging configuration and result formatting.
"""

from .error_handling import (
    EncodingError,
    ErrorCollector,
    FileAccessError,
    FilterProbeError,
    InvalidPatternError,
    PermissionError,
    SearchError,
    create_error_report,
    handle_file_error,
)
from .formatter import format_result, format_text, render_highlight_console, report
from .logging_config import configure_logging, disable_logging, enable_debug_logging, get_logger

__all__ = [
    # Error handling
    "EncodingError",
    "ErrorCollector",
    "FileAccessError",
    "FilterProbeError",
    "InvalidPatternError",
    "PermissionError",
    "SearchError",
    "create_error_report",
    "handle_file_error",
    # Formatting
    "format_result",
    "format_text",
    "render_highlight_console",
    "report",
    # Logging
    "configure_logging",
    "disable_logging",
    "enable_debug_logging",
    "get_logger",
]
