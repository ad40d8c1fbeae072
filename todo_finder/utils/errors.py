"""
Custom exceptions for todo-finder.

This module defines all custom exceptions used throughout the application
for better error handling and debugging.
"""

from typing import Any, Optional


class TodoFinderException(Exception):
    """Base exception for all todo-finder errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Usage Exceptions
# =============================================================================


class UsageError(TodoFinderException):
    """Command line was invoked with the wrong arguments."""

    def __init__(self, received: int, expected: int = 2) -> None:
        """Initialize with argument counts."""
        message = f"Expected {expected} positional arguments, got {received}"
        super().__init__(message, {"received": received, "expected": expected})


# =============================================================================
# Scan Exceptions
# =============================================================================


class ScanError(TodoFinderException):
    """Base exception for scanning errors."""

    pass


class ScanRootError(ScanError):
    """The directory to scan does not exist."""

    def __init__(self, directory: str) -> None:
        """Initialize with the directory."""
        message = f"Directory '{directory}' does not exist"
        super().__init__(message, {"directory": directory})


class SourceFileError(ScanError):
    """A source file could not be read."""

    def __init__(
        self,
        path: str,
        error: Exception,
        line_number: Optional[int] = None,
    ) -> None:
        """Initialize with file information."""
        message = f"Failed to read '{path}': {error}"
        details: dict[str, Any] = {"path": path}
        if line_number is not None:
            details["line_number"] = line_number
        super().__init__(message, details)
        self.path = path
        self.line_number = line_number


class SourceReadError(SourceFileError):
    """Opening or reading a source file failed at the OS level."""

    pass


class SourceDecodeError(SourceFileError):
    """A line of a source file is not valid UTF-8."""

    pass


# =============================================================================
# Output Exceptions
# =============================================================================


class OutputWriteError(TodoFinderException):
    """The CSV output could not be created or written."""

    def __init__(self, path: Optional[str], error: Exception) -> None:
        """Initialize with output information."""
        target = path or "<stream>"
        message = f"Failed to write results to '{target}': {error}"
        super().__init__(message, {"path": target})


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(TodoFinderException):
    """Configuration error."""

    pass


class InvalidConfigurationError(ConfigurationError):
    """A configuration value or key is invalid."""

    def __init__(self, config_name: str, value: Any = None) -> None:
        """Initialize with config name."""
        if value is None:
            message = f"Unknown configuration '{config_name}'"
        else:
            message = f"Invalid value {value!r} for configuration '{config_name}'"
        super().__init__(message, {"config_name": config_name})
