"""
Exceptions
==========

Error taxonomy for a validation run.

Schema and constraint failures are not exceptions: they come back as
ValidationResult objects. The classes here cover runs that cannot produce
a verdict from document content.
"""

from typing import Optional

from .results import SourceLocation


class DocumentValidationError(Exception):
    """Base exception for the validation toolkit."""
    pass


class ConfigurationError(DocumentValidationError):
    """Bad or missing input detected before any validation stage runs."""
    pass


class InvalidFormatArgumentError(ConfigurationError):
    """Raised when a format hint is not one of the supported formats."""
    pass


class UnrecognizableFormatError(ConfigurationError):
    """Raised when the format of a target cannot be detected."""
    pass


class UnsupportedFormatError(ConfigurationError):
    """Raised when no schema strategy is registered for a format."""
    pass


class ProcessingError(DocumentValidationError):
    """A stage could not complete for reasons unrelated to document content."""
    pass


class DocumentParseError(ProcessingError):
    """Raised when a document is not syntactically well-formed."""

    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        super().__init__(message)
        self.location = location

    def __str__(self):
        message = super().__str__()
        if self.location is not None and self.location.line is not None:
            return f"{message} ({self.location})"
        return message
