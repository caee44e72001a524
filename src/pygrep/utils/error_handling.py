"""
Error taxonomy and collection for pygrep.

Errors fall into two groups. Errors raised while compiling the query are fatal:
they mean the request itself is malformed and must reach the caller. Errors raised
while probing, reading or searching one particular file are file-scoped: the file
is skipped and the walk goes on. The second group is silent by default, but every
such error can be recorded in an ErrorCollector for diagnostics.

Classes:
    ErrorSeverity: Error severity levels (LOW, MEDIUM, HIGH, CRITICAL)
    ErrorCategory: Error classification categories
    ErrorInfo: Detailed error information container
    ErrorCollector: Thread-safe, bounded error collection
    SearchError: Base exception for pygrep errors
    InvalidPatternError: The query cannot be compiled as a regular expression
    FileAccessError: A file cannot be opened or read
    PermissionError: Permission denied while opening or reading a file
    EncodingError: File contents cannot be decoded
    FilterProbeError: Metadata or content sniffing failed during filtering

Functions:
    handle_file_error: Classify, record and log an exception raised for one file
    create_error_report: Render collected errors as a human-readable report

Example:
    >>> from pygrep.utils.error_handling import ErrorCollector, handle_file_error
    >>> collector = ErrorCollector()
    >>> try:
    ...     Path("missing.txt").read_text()
    ... except OSError as e:
    ...     handle_file_error(Path("missing.txt"), "read", e, collector)
    >>> print(create_error_report(collector))
"""

from __future__ import annotations

import builtins
import sys
import threading
import time
import traceback
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

BuiltinPermissionError = builtins.PermissionError


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Error categories for classification."""

    PATTERN = "pattern"
    FILE_ACCESS = "file_access"
    PERMISSION = "permission"
    ENCODING = "encoding"
    FILTER_PROBE = "filter_probe"
    UNKNOWN = "unknown"


@dataclass
class ErrorInfo:
    """Detailed error information."""

    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    file_path: Path | None = None
    exception_type: str | None = None
    traceback_str: str | None = None
    timestamp: float = field(default_factory=time.time)
    context: dict[str, Any] = field(default_factory=dict)
    suggestions: list[str] = field(default_factory=list)


class SearchError(Exception):
    """Base exception for search-related errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        file_path: Path | None = None,
        suggestions: list[str] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.file_path: Path | None = file_path
        self.suggestions: list[str] = suggestions or []
        self.context: dict[str, Any] = context or {}
        self.timestamp: float = time.time()


class InvalidPatternError(SearchError):
    """The query cannot be compiled as a regular expression."""

    def __init__(self, message: str, pattern: str, context: dict[str, Any] | None = None) -> None:
        merged_context: dict[str, Any] = {}
        if context:
            merged_context.update(context)
        merged_context["pattern"] = pattern

        super().__init__(
            message,
            category=ErrorCategory.PATTERN,
            severity=ErrorSeverity.CRITICAL,
            suggestions=[
                "Check the regular expression syntax",
                "Use --fixed-strings to search for the text literally",
            ],
            context=merged_context,
        )
        self.pattern: str = pattern


class FileAccessError(SearchError):
    """Error opening or reading a file."""

    def __init__(
        self, message: str, file_path: Path, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.FILE_ACCESS,
            severity=ErrorSeverity.MEDIUM,
            file_path=file_path,
            context=context,
        )


class PermissionError(SearchError):
    """Permission-related errors."""

    def __init__(
        self, message: str, file_path: Path, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.PERMISSION,
            severity=ErrorSeverity.HIGH,
            file_path=file_path,
            suggestions=[
                "Check file permissions",
                "Run with appropriate user privileges",
            ],
            context=context,
        )


class EncodingError(SearchError):
    """File encoding-related errors."""

    def __init__(
        self,
        message: str,
        file_path: Path,
        encoding: str = "unknown",
        context: dict[str, Any] | None = None,
    ) -> None:
        merged_context: dict[str, Any] = {}
        if context:
            merged_context.update(context)
        merged_context["encoding"] = encoding

        super().__init__(
            message,
            category=ErrorCategory.ENCODING,
            severity=ErrorSeverity.LOW,
            file_path=file_path,
            suggestions=[
                f"Try a different encoding (current: {encoding})",
                "Check if the file is binary",
            ],
            context=merged_context,
        )


class FilterProbeError(SearchError):
    """Metadata or content sniffing failed while checking eligibility."""

    def __init__(
        self, message: str, file_path: Path, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.FILTER_PROBE,
            severity=ErrorSeverity.LOW,
            file_path=file_path,
            context=context,
        )


class ErrorCollector:
    """Collects errors during search operations.

    Workers record errors concurrently, so every mutation happens under a lock.
    """

    def __init__(self, max_errors: int = 100) -> None:
        self.max_errors = max_errors
        self.errors: list[ErrorInfo] = []
        self.error_counts: dict[ErrorCategory, int] = {}
        self.suppressed_categories: set[ErrorCategory] = set()
        self._lock = threading.Lock()

    def add_error(
        self,
        exception: Exception | SearchError,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity | None = None,
        file_path: Path | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Add an error to the collection."""
        if isinstance(exception, SearchError):
            error_category = exception.category
            error_severity = exception.severity
            error_file_path = exception.file_path or file_path
            error_suggestions = exception.suggestions
            error_context = {**exception.context, **(context or {})}
        else:
            error_category = category or self._classify_exception(exception)
            error_severity = severity or ErrorSeverity.MEDIUM
            error_file_path = file_path
            error_suggestions = []
            error_context = context or {}

        if error_category in self.suppressed_categories:
            return

        error_info = ErrorInfo(
            category=error_category,
            severity=error_severity,
            message=str(exception),
            file_path=error_file_path,
            exception_type=type(exception).__name__,
            traceback_str=traceback.format_exc() if sys.exc_info()[0] else None,
            context=error_context,
            suggestions=error_suggestions,
        )

        with self._lock:
            if len(self.errors) < self.max_errors:
                self.errors.append(error_info)
            self.error_counts[error_category] = self.error_counts.get(error_category, 0) + 1

    def _classify_exception(self, exception: Exception) -> ErrorCategory:
        """Classify exception into error category."""
        if isinstance(exception, BuiltinPermissionError):
            return ErrorCategory.PERMISSION
        if isinstance(exception, (UnicodeDecodeError, UnicodeError)):
            return ErrorCategory.ENCODING
        if isinstance(exception, OSError):
            return ErrorCategory.FILE_ACCESS
        return ErrorCategory.UNKNOWN

    def suppress_category(self, category: ErrorCategory) -> None:
        """Suppress errors of a specific category."""
        self.suppressed_categories.add(category)

    def get_errors_by_category(self, category: ErrorCategory) -> list[ErrorInfo]:
        with self._lock:
            return [error for error in self.errors if error.category == category]

    def get_errors_by_severity(self, severity: ErrorSeverity) -> list[ErrorInfo]:
        with self._lock:
            return [error for error in self.errors if error.severity == severity]

    def has_errors(self) -> bool:
        with self._lock:
            return bool(self.error_counts)

    def get_summary(self) -> dict[str, Any]:
        """Get error summary statistics."""
        with self._lock:
            total = sum(self.error_counts.values())
            by_category = {cat.value: count for cat, count in self.error_counts.items()}
        return {
            "total_errors": total,
            "by_category": by_category,
            "by_severity": {
                severity.value: len(self.get_errors_by_severity(severity))
                for severity in ErrorSeverity
            },
        }

    def clear(self) -> None:
        """Clear all collected errors."""
        with self._lock:
            self.errors.clear()
            self.error_counts.clear()


def handle_file_error(
    file_path: Path,
    operation: str,
    exception: Exception,
    error_collector: ErrorCollector | None = None,
    logger: Any | None = None,
) -> SearchError:
    """
    Classify a file-scoped exception, record it and log it.

    Args:
        file_path: Path to the file that caused the error
        operation: Operation being performed (e.g., "probe", "read", "search")
        exception: The exception that occurred
        error_collector: Optional error collector to add the error to
        logger: Optional SearchLogger to log the error on

    Returns:
        The classified SearchError (the original one if it already was one)
    """
    error: SearchError
    if isinstance(exception, SearchError):
        error = exception
    elif isinstance(exception, BuiltinPermissionError):
        error = PermissionError(f"Permission denied during {operation}: {exception}", file_path)
    elif isinstance(exception, UnicodeDecodeError):
        error = EncodingError(
            f"Encoding error during {operation}: {exception}", file_path, exception.encoding
        )
    elif isinstance(exception, OSError):
        error = FileAccessError(f"Cannot {operation} file: {exception}", file_path)
    else:
        error = SearchError(
            f"Unexpected error during {operation}: {exception}", file_path=file_path
        )

    if error_collector is not None:
        error_collector.add_error(error, file_path=file_path)

    if logger is not None:
        logger.log_file_error(str(file_path), str(error), operation=operation)

    return error


def create_error_report(error_collector: ErrorCollector) -> str:
    """Create a human-readable error report."""
    if not error_collector.has_errors():
        return "No errors occurred during the search operation."

    summary = error_collector.get_summary()

    report = ["Search Error Report", "=" * 50, ""]
    report.append(f"Total errors: {summary['total_errors']}")
    report.append("")

    report.append("Errors by category:")
    for category, count in summary["by_category"].items():
        report.append(f"  {category}: {count}")
    report.append("")

    report.append("Skipped files:")
    for error in error_collector.errors:
        if error.file_path is not None:
            report.append(f"  - {error.file_path}: {error.message}")

    return "\n".join(report)
