"""
Custom exceptions for the bill text extraction engine.

The extraction pipeline itself never raises for a missing field; these
exceptions cover the edges around it, such as loading an invalid
configuration.
"""

from typing import Optional, Dict, Any


class ExtractionError(Exception):
    """Base exception for all extraction errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.details.get('source'):
            base_msg = f"{base_msg} (source: {self.details['source']})"
        return base_msg


class ConfigurationError(ExtractionError):
    """Raised when an extraction configuration is invalid or unreadable."""

    def __init__(self, message: str, source: Optional[str] = None,
                 key: Optional[str] = None,
                 original_error: Optional[Exception] = None):
        super().__init__(message)
        self.source = source
        self.key = key
        self.original_error = original_error

        if source:
            self.details['source'] = source
        if key:
            self.details['key'] = key
        if original_error:
            self.details['original_error'] = str(original_error)
            self.details['error_type'] = type(original_error).__name__
