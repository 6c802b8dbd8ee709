"""
hostsmith custom exceptions and error handling utilities.

This module provides the exception hierarchy raised by the hosts rewriter and
small helpers for consistent logging and formatting of those errors.
"""

from __future__ import annotations

import logging
import traceback
from functools import wraps
from typing import Any, Dict, Optional


class HostsmithError(Exception):
    """Base exception for all hostsmith-related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class HostsNotFoundError(HostsmithError):
    """Raised when the hosts file does not exist."""

    pass


class HostsTooLargeError(HostsmithError):
    """Raised when the hosts file exceeds the configured size ceiling."""

    pass


class HostsParseError(HostsmithError):
    """Base class for fatal problems found while scanning the file."""

    def __init__(self, message: str, line_num: int, details: Optional[Dict[str, Any]] = None):
        merged = {"line": line_num}
        merged.update(details or {})
        super().__init__(message, merged)
        self.line_num = line_num


class DuplicateDomainError(HostsParseError):
    """Raised when a domain appears as an effective entry more than once."""

    def __init__(self, domain: str, line_num: int):
        super().__init__(
            f"hosts file line {line_num} duplicate: {domain}",
            line_num,
            {"domain": domain},
        )
        self.domain = domain


class DuplicateMarkError(HostsParseError):
    """Raised when a region marker line appears more than once."""

    def __init__(self, mark: str, line_num: int):
        super().__init__(
            f"hosts file mark duplicate, value: {mark}",
            line_num,
            {"mark": mark},
        )
        self.mark = mark


class EmptyTargetSetError(HostsmithError):
    """Raised when an update is requested without any entries."""

    pass


class HostsIOError(HostsmithError):
    """Raised when reading or writing the hosts file fails."""

    pass


class ErrorHandler:
    """Centralized error handling utilities."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def log_and_raise(
        self,
        exception_class: type[HostsmithError],
        message: str,
        original_error: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log an error and raise a hostsmith exception."""
        error_details = details or {}

        if original_error:
            error_details["original_error"] = str(original_error)
            error_details["original_type"] = type(original_error).__name__

        self.logger.error(f"❌ {message}")
        if original_error:
            self.logger.debug(f"Original error: {original_error}")
            self.logger.debug(f"Traceback: {traceback.format_exc()}")

        raise exception_class(message, error_details) from original_error


def handle_errors(
    exception_class: type[HostsmithError] = HostsmithError,
    logger: Optional[logging.Logger] = None,
):
    """Decorator for standardized error handling."""

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            handler = ErrorHandler(logger)
            try:
                return func(*args, **kwargs)
            except HostsmithError:
                # Re-raise hostsmith errors as-is
                raise
            except Exception as e:
                handler.log_and_raise(exception_class, f"Error in {func.__name__}: {e}", e)

        return wrapper

    return decorator


def format_error_message(error: Exception, include_traceback: bool = False) -> str:
    """Format error messages consistently."""
    if isinstance(error, HostsmithError):
        message = f"hostsmith error: {error.message}"
        if error.details:
            details = ", ".join(f"{k}={v}" for k, v in error.details.items())
            message += f" ({details})"
    else:
        message = f"{type(error).__name__}: {str(error)}"

    if include_traceback:
        message += f"\n{traceback.format_exc()}"

    return message
