"""
Custom exception classes for doxnorm.

This module defines the exception hierarchy used throughout the application
for consistent error handling and reporting.
"""

from typing import Optional


class ParsingError(Exception):
    """Base exception for parsing errors."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        """
        Initialize a parsing error.

        Args:
            message: The error message describing what went wrong
            recovery_hint: Optional hint on how to recover from this error
        """
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(self.message)


class MissingClassError(ParsingError):
    """Raised when a constructor comment has no matching class comment."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(
            f"Cannot have constructor dox without class dox in {filename}",
            recovery_hint="Add a documentation block to the class declaration",
        )


class FileAccessError(ParsingError):
    """Exception for file access related errors."""

    pass


class SyntaxParsingError(ParsingError):
    """Exception for syntax errors during parsing."""

    pass


class UnsupportedLanguageError(ParsingError):
    """Exception for sources whose language cannot be determined."""

    pass
