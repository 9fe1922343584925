"""Error types and classification for dirlens.

Classifies failures into categories with actionable suggestions so the
analyzer and the CLI report them consistently.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DirlensError(Exception):
    """Base class for dirlens errors."""


class ConfigError(DirlensError):
    """An explicitly requested configuration file is missing or invalid."""


class ErrorCategory(Enum):
    """Categories of errors for reporting decisions."""

    UNREADABLE = "unreadable"  # File or directory cannot be read
    INPUT = "input"            # Bad paths, manifests or configuration
    ANALYSIS = "analysis"      # A bug or unexpected data inside an analyzer
    FATAL = "fatal"            # Anything else


@dataclass
class ClassifiedError:
    """A classified error with reporting metadata."""

    category: ErrorCategory
    message: str
    suggestion: Optional[str] = None
    original_exception: Optional[Exception] = None

    def __str__(self) -> str:
        """Human-readable error representation."""
        parts = [self.message]
        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")
        return " | ".join(parts)


# Suggestions for common error patterns
ERROR_SUGGESTIONS = {
    "no such file": "Check the path; files are resolved relative to the project root",
    "permission denied": "Check file permissions or exclude the directory",
    "is a directory": "Expected a file path, not a directory",
    "not a directory": "Expected a directory path, not a file",
    "config": "Fix the configuration file or remove it to use defaults",
    "decode": "The file is not valid UTF-8 text",
}


def classify_error(error: Exception, context: str = "") -> ClassifiedError:
    """Classify an exception for reporting.

    Args:
        error: The exception to classify
        context: Optional context about where the error occurred (e.g. a directory)

    Returns:
        ClassifiedError with category and suggestion
    """
    error_msg = str(error)
    message = f"{context}: {error_msg}" if context else error_msg
    lower = error_msg.lower()

    if isinstance(error, PermissionError):
        return ClassifiedError(
            category=ErrorCategory.UNREADABLE,
            message=message,
            suggestion="Check file permissions or exclude the directory",
            original_exception=error,
        )

    if isinstance(error, (FileNotFoundError, IsADirectoryError, NotADirectoryError)):
        return ClassifiedError(
            category=ErrorCategory.INPUT,
            message=message,
            suggestion=_get_suggestion(lower),
            original_exception=error,
        )

    if isinstance(error, UnicodeDecodeError):
        return ClassifiedError(
            category=ErrorCategory.UNREADABLE,
            message=message,
            suggestion="The file is not valid UTF-8 text",
            original_exception=error,
        )

    if isinstance(error, OSError):
        return ClassifiedError(
            category=ErrorCategory.UNREADABLE,
            message=message,
            suggestion=_get_suggestion(lower),
            original_exception=error,
        )

    if isinstance(error, ConfigError):
        return ClassifiedError(
            category=ErrorCategory.INPUT,
            message=message,
            suggestion="Fix the configuration file or remove it to use defaults",
            original_exception=error,
        )

    if isinstance(error, (KeyError, IndexError, AttributeError, TypeError, ValueError, ZeroDivisionError)):
        return ClassifiedError(
            category=ErrorCategory.ANALYSIS,
            message=message,
            suggestion="Run with --log-level DEBUG and report the directory that failed",
            original_exception=error,
        )

    return ClassifiedError(
        category=ErrorCategory.FATAL,
        message=message,
        suggestion=_get_suggestion(lower),
        original_exception=error,
    )


def _get_suggestion(error_msg: str) -> Optional[str]:
    """Get a suggestion for a lowercase error message."""
    for pattern, suggestion in ERROR_SUGGESTIONS.items():
        if pattern in error_msg:
            return suggestion
    return None
