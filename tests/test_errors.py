"""Tests for error classification."""

import pytest

from dirlens.errors import ClassifiedError, ConfigError, ErrorCategory, classify_error


class TestClassifyError:
    """Tests for classify_error."""

    @pytest.mark.parametrize("error,category", [
        (PermissionError("Permission denied: 'a.ts'"), ErrorCategory.UNREADABLE),
        (FileNotFoundError("No such file or directory: 'x'"), ErrorCategory.INPUT),
        (NotADirectoryError("Not a directory: 'x'"), ErrorCategory.INPUT),
        (UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"), ErrorCategory.UNREADABLE),
        (OSError("disk failure"), ErrorCategory.UNREADABLE),
        (ConfigError("Config file not found: x.toml"), ErrorCategory.INPUT),
        (KeyError("component"), ErrorCategory.ANALYSIS),
        (ValueError("boom"), ErrorCategory.ANALYSIS),
        (RuntimeError("unexpected"), ErrorCategory.FATAL),
    ])
    def test_categories(self, error, category):
        classified = classify_error(error)
        assert classified.category == category
        assert classified.original_exception is error

    def test_context_prefixes_message(self):
        classified = classify_error(ValueError("boom"), context="src/broken")
        assert classified.message == "src/broken: boom"

    def test_suggestion_from_message(self):
        classified = classify_error(FileNotFoundError("No such file or directory: 'x'"))
        assert classified.suggestion.startswith("Check the path")

    def test_str_includes_suggestion(self):
        error = ClassifiedError(ErrorCategory.INPUT, "bad input", suggestion="fix it")
        assert str(error) == "bad input | Suggestion: fix it"
        assert str(ClassifiedError(ErrorCategory.FATAL, "bad")) == "bad"
