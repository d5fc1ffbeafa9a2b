# Centralized error handling utilities
"""
Provides consistent error handling patterns across the application.

This module defines:
- Custom exception classes for different error categories
- Error handling decorators and context managers for common patterns
- Utility functions for user messaging
"""

import contextlib
import functools
import traceback
from typing import Any, Callable, Iterator, Optional, TypeVar, Union
from enum import Enum

from .logger import get_logger

logger = get_logger(__name__)

# Type variable for generic function signatures
F = TypeVar('F', bound=Callable[..., Any])


class ErrorCategory(Enum):
    """Categories of errors for consistent handling."""
    RECOVERABLE = "recoverable"      # Can continue with fallback
    USER_INPUT = "user_input"        # Invalid user input
    FILE_IO = "file_io"              # File system errors
    PROCESSING = "processing"        # Image processing errors
    CONFIGURATION = "configuration"  # Settings/preset errors


class AppError(Exception):
    """Base exception for application-specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.RECOVERABLE,
        original_error: Optional[Exception] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.category = category
        self.original_error = original_error
        self.user_message = user_message or message

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.args[0]} (caused by: {type(self.original_error).__name__})"
        return self.args[0]


class InvalidParameterError(AppError):
    """An adjustment parameter outside its declared range."""

    def __init__(self, message: str, parameter: Optional[str] = None, value: Any = None, **kwargs):
        super().__init__(message, category=ErrorCategory.USER_INPUT, **kwargs)
        self.parameter = parameter
        self.value = value


class FileIOError(AppError):
    """File I/O related errors."""

    def __init__(self, message: str, file_path: Optional[str] = None, **kwargs):
        super().__init__(message, category=ErrorCategory.FILE_IO, **kwargs)
        self.file_path = file_path


class ProcessingError(AppError):
    """Image processing errors."""

    def __init__(self, message: str, step: Optional[str] = None, **kwargs):
        super().__init__(message, category=ErrorCategory.PROCESSING, **kwargs)
        self.step = step


class ConfigurationError(AppError):
    """Configuration/preset errors."""

    def __init__(self, message: str, setting_name: Optional[str] = None, **kwargs):
        super().__init__(message, category=ErrorCategory.CONFIGURATION, **kwargs)
        self.setting_name = setting_name


def handle_errors(
    fallback_value: Any = None,
    category: ErrorCategory = ErrorCategory.RECOVERABLE,
    log_level: str = "warning",
    reraise: bool = False,
    user_message: Optional[str] = None,
) -> Callable[[F], F]:
    """
    Decorator for consistent error handling.

    Args:
        fallback_value: Value to return on error (can be callable for dynamic fallback).
        category: Error category for logging context.
        log_level: Logging level ('debug', 'info', 'warning', 'error', 'exception').
        reraise: If True, re-raise the exception (wrapped in AppError) after logging.
        user_message: Optional user-friendly message for display.

    Example:
        @handle_errors(fallback_value=list, category=ErrorCategory.CONFIGURATION)
        def read_presets(path):
            ...
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except AppError:
                # Re-raise our custom errors
                raise
            except Exception as e:
                log_func = getattr(logger, log_level, logger.warning)
                log_func(
                    "%s failed in %s.%s: %s",
                    category.value,
                    func.__module__,
                    func.__name__,
                    str(e),
                )

                if log_level == "exception":
                    logger.debug("Full traceback:\n%s", traceback.format_exc())

                if reraise:
                    raise AppError(
                        str(e),
                        category=category,
                        original_error=e,
                        user_message=user_message,
                    ) from e

                if callable(fallback_value):
                    return fallback_value()
                return fallback_value

        return wrapper  # type: ignore
    return decorator


@contextlib.contextmanager
def processing_step(step: str) -> Iterator[None]:
    """
    Run one pipeline stage, converting unexpected failures into ProcessingError.

    Application errors (e.g. InvalidParameterError) pass through untouched.

    Example:
        with processing_step("contrast"):
            ToneAdjustments.adjust_contrast(buffer, value)
    """
    try:
        yield
    except AppError:
        raise
    except Exception as e:
        logger.exception("Processing step '%s' failed", step)
        raise ProcessingError(
            f"Processing failed during '{step}': {e}",
            step=step,
            original_error=e,
            user_message=f"Processing error: {e}",
        ) from e


def format_user_error(error: Union[Exception, str], context: Optional[str] = None) -> str:
    """
    Format an error message for user display.

    Args:
        error: The error or error message.
        context: Optional context about what operation failed.

    Returns:
        User-friendly error message.
    """
    if isinstance(error, AppError):
        return error.user_message

    error_str = str(error)

    # Clean up common technical error messages
    if "No such file or directory" in error_str:
        return f"File not found{f' while {context}' if context else ''}"
    if "Permission denied" in error_str:
        return f"Permission denied{f' while {context}' if context else ''}"
    if "out of memory" in error_str.lower():
        return "Not enough memory to complete this operation. Try with a smaller image."

    if context:
        return f"Error {context}: {error_str}"
    return f"An error occurred: {error_str}"
